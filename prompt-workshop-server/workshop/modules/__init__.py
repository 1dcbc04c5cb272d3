"""Feature modules and their public exports."""

from . import categories, common, executions, prompts, suggestions, tags

__all__ = [
    "categories",
    "common",
    "executions",
    "prompts",
    "suggestions",
    "tags",
]
