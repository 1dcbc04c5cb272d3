"""Public exports for the tag domain (services live in ``.service``)."""

from .exceptions import TagAlreadyExistsError, TagNotFoundError, TagValidationError
from .models import Tag, TagCreateInput, TagUpdateInput

__all__ = [
    "Tag",
    "TagAlreadyExistsError",
    "TagCreateInput",
    "TagNotFoundError",
    "TagUpdateInput",
    "TagValidationError",
]
