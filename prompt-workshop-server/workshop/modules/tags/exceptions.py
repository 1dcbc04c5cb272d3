"""Tag domain specific exceptions."""

from workshop.modules.common import ConflictError, NotFoundError, ValidationError


class TagNotFoundError(NotFoundError):
    """Raised when the requested tag cannot be found."""


class TagAlreadyExistsError(ConflictError):
    """Raised when another tag already uses the name (case-insensitive)."""


class TagValidationError(ValidationError):
    """Raised when tag input is invalid."""
