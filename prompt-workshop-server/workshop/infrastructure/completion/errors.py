"""Error taxonomy raised by the completion client."""

from __future__ import annotations

from typing import Optional

_TRANSIENT_MARKERS = ("timeout", "timed out", "rate limit", "throttl", "429", "502", "503", "504")


class CompletionError(Exception):
    """Base class for completion capability failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransientExecutionError(CompletionError):
    """Failure worth retrying: throttling, gateway errors, slow upstream."""


class CompletionTimeoutError(TransientExecutionError):
    """The completion capability did not answer within the allotted time."""


class PermanentExecutionError(CompletionError):
    """Failure that will not improve on retry."""


def is_transient_error(exc: BaseException) -> bool:
    if isinstance(exc, TransientExecutionError):
        return True
    if isinstance(exc, PermanentExecutionError):
        return False
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and (status_code == 429 or status_code >= 500):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _TRANSIENT_MARKERS)
