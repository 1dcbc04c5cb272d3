"""Error taxonomy shared by every module."""


class WorkshopError(Exception):
    """Base class for domain errors."""


class ValidationError(WorkshopError):
    """Raised when input is missing required data or is otherwise invalid."""


class NotFoundError(WorkshopError):
    """Raised when a referenced entity does not exist."""


class ConflictError(WorkshopError):
    """Raised when a write would violate a uniqueness or reference rule."""
