from fastapi import APIRouter

from workshop.interfaces.http.routers import categories, prompts, tags


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(prompts.router, prefix="/prompts", tags=["Prompts"])
    router.include_router(categories.router, prefix="/categories", tags=["Categories"])
    router.include_router(tags.router, prefix="/tags", tags=["Tags"])
    return router


__all__ = [
    "create_api_router",
]
