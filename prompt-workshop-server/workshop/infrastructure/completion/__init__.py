"""Completion capability backed by an OpenAI-compatible chat endpoint."""

from .client import CompletionClient
from .errors import (
    CompletionError,
    CompletionTimeoutError,
    PermanentExecutionError,
    TransientExecutionError,
    is_transient_error,
)

__all__ = [
    "CompletionClient",
    "CompletionError",
    "CompletionTimeoutError",
    "PermanentExecutionError",
    "TransientExecutionError",
    "is_transient_error",
]
