"""Public exports for the category domain (services live in ``.service``)."""

from .exceptions import (
    CategoryAlreadyExistsError,
    CategoryInUseError,
    CategoryNotFoundError,
    CategoryValidationError,
)
from .models import Category, CategoryCreateInput, CategoryUpdateInput

__all__ = [
    "Category",
    "CategoryAlreadyExistsError",
    "CategoryCreateInput",
    "CategoryInUseError",
    "CategoryNotFoundError",
    "CategoryUpdateInput",
    "CategoryValidationError",
]
