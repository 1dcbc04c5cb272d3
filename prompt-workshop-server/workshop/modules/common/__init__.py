"""Shared abstractions used across domain modules."""

from .exceptions import ConflictError, NotFoundError, ValidationError, WorkshopError
from .lookup import NameLookup
from .models import UNSET
from .repository import AsyncRepository

__all__ = [
    "AsyncRepository",
    "ConflictError",
    "NameLookup",
    "NotFoundError",
    "UNSET",
    "ValidationError",
    "WorkshopError",
]
