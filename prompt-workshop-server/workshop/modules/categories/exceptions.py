"""Category domain specific exceptions."""

from workshop.modules.common import ConflictError, NotFoundError, ValidationError


class CategoryNotFoundError(NotFoundError):
    """Raised when the requested category cannot be found."""


class CategoryAlreadyExistsError(ConflictError):
    """Raised when another category already uses the name (case-insensitive)."""


class CategoryInUseError(ConflictError):
    """Raised when deleting a category that prompt templates still reference."""


class CategoryValidationError(ValidationError):
    """Raised when category input is invalid."""
