"""Public exports for prompt execution (services live in ``.service``)."""

from .fallback import FALLBACK_MARKER, build_fallback_result, is_fallback_result
from .models import ExecutionRecord, InvocationOutcome, InvocationResult, RetryPolicy

__all__ = [
    "ExecutionRecord",
    "FALLBACK_MARKER",
    "InvocationOutcome",
    "InvocationResult",
    "RetryPolicy",
    "build_fallback_result",
    "is_fallback_result",
]
