"""Prompt template domain specific exceptions."""

from __future__ import annotations

from typing import Sequence

from workshop.modules.common import NotFoundError, ValidationError, WorkshopError


class PromptNotFoundError(NotFoundError):
    """Raised when the requested prompt template cannot be found."""


class PromptValidationError(ValidationError):
    """Raised when a template is missing required fields or has an invalid variable list."""


class MissingRequiredVariablesError(ValidationError):
    """Raised when an execution omits one or more required variables."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required variables: {', '.join(self.missing)}")


class MalformedInterchangeError(WorkshopError):
    """Raised when interchange text cannot be parsed into a template."""
