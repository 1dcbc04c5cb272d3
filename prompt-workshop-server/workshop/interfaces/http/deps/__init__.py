"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .services import (
    get_category_service,
    get_execution_service,
    get_prompt_service,
    get_suggestion_service,
    get_tag_service,
)

__all__ = [
    "get_db_session",
    "get_category_service",
    "get_execution_service",
    "get_prompt_service",
    "get_suggestion_service",
    "get_tag_service",
]
