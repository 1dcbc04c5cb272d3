import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from workshop import __version__
from workshop.core.config import get_settings
from workshop.core.container import get_container
from workshop.infrastructure.database import dispose_engine, init_db
from workshop.interfaces.http import create_api_router

settings = get_settings()
BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

logger = logging.getLogger(__name__)


def _resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


STATIC_DIR = _resolve_path(settings.static_dir)
TEMPLATE_DIR = _resolve_path(settings.template_dir)
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def configure_logging() -> None:
    logging.basicConfig(level=settings.logging.level.upper(), format=settings.logging.format)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    container = get_container()
    logger.info("%s %s started (%s)", settings.project_name, __version__, settings.environment)
    yield
    await container.aclose()
    get_container.cache_clear()
    await dispose_engine()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title=settings.project_name,
        description="Author, organise and run reusable prompt templates",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", summary="Liveness probe")
    async def health():
        return {"status": "ok", "version": __version__}

    @app.get("/", response_class=HTMLResponse)
    async def homepage(request: Request):
        container = get_container()
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "project_name": settings.project_name,
                "version": __version__,
                "api_prefix": settings.api_prefix,
                "completion_ready": container.completion_client is not None,
                "provider": settings.completion.provider,
            },
        )

    return app


app = create_app()
