"""Public exports for the prompt template domain (services live in ``.service``)."""

from .exceptions import (
    MalformedInterchangeError,
    MissingRequiredVariablesError,
    PromptNotFoundError,
    PromptValidationError,
)
from .models import (
    PromptTemplate,
    PromptTemplateCreateInput,
    PromptTemplateFilter,
    PromptTemplateUpdateInput,
    PromptVariable,
)

__all__ = [
    "MalformedInterchangeError",
    "MissingRequiredVariablesError",
    "PromptNotFoundError",
    "PromptTemplate",
    "PromptTemplateCreateInput",
    "PromptTemplateFilter",
    "PromptTemplateUpdateInput",
    "PromptValidationError",
    "PromptVariable",
]
