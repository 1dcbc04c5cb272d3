"""Service dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from workshop.core.container import ApplicationContainer, get_container
from workshop.modules.categories.service import CategoryService
from workshop.modules.executions.service import ExecutionService
from workshop.modules.prompts.service import PromptService
from workshop.modules.suggestions.service import SuggestionService
from workshop.modules.tags.service import TagService

from .database import get_db_session


def get_prompt_service(db: AsyncSession = Depends(get_db_session)) -> PromptService:
    return PromptService.with_session(db)


def get_category_service(db: AsyncSession = Depends(get_db_session)) -> CategoryService:
    return CategoryService.with_session(db)


def get_tag_service(db: AsyncSession = Depends(get_db_session)) -> TagService:
    return TagService.with_session(db)


def get_execution_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> ExecutionService:
    return ExecutionService.with_session(db, container.build_invoker())


def get_suggestion_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> SuggestionService:
    settings = container.settings.suggestions
    return SuggestionService.with_session(
        db,
        container.build_invoker(),
        max_tags=settings.max_tags,
        use_completion=settings.use_completion,
    )


__all__ = [
    "get_category_service",
    "get_execution_service",
    "get_prompt_service",
    "get_suggestion_service",
    "get_tag_service",
]
