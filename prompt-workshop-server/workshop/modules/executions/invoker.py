"""Calls the completion capability with a timeout and a retry policy."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol

from workshop.infrastructure.completion import CompletionTimeoutError, is_transient_error

from .models import InvocationOutcome, InvocationResult, RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0


class CompletionCapability(Protocol):
    async def complete(self, text: str, timeout: Optional[float] = None) -> str:
        ...


class CompletionInvoker:
    """
    Drives one logical completion request.

    A timeout ends the request at once with ``timed_out``. Transient failures
    are retried with exponential backoff until the policy runs out, anything
    else ends it with ``failed``. The invoker never raises for completion
    failures; the caller decides what to do with a result that has no text.
    Cancellation of the surrounding task propagates, including while waiting
    between retries.
    """

    def __init__(
        self,
        client: Optional[CompletionCapability],
        policy: Optional[RetryPolicy] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.client = client
        self.policy = policy or RetryPolicy()
        self.timeout = timeout
        self._sleep = sleep

    @property
    def available(self) -> bool:
        return self.client is not None

    async def invoke(self, text: str, *, label: str = "prompt") -> InvocationResult:
        if self.client is None:
            logger.warning("No completion provider configured; skipping invocation for %s", label)
            return InvocationResult(outcome=InvocationOutcome.UNAVAILABLE, attempts=0)

        max_attempts = self.policy.max_attempts
        for attempt in range(1, max_attempts + 1):
            logger.info("Invoking completion for %s (attempt %d/%d)", label, attempt, max_attempts)
            try:
                reply = await asyncio.wait_for(
                    self.client.complete(text, timeout=self.timeout),
                    timeout=self.timeout,
                )
            except (asyncio.TimeoutError, CompletionTimeoutError) as exc:
                logger.error("Completion for %s timed out after %.1fs", label, self.timeout)
                return InvocationResult(
                    outcome=InvocationOutcome.TIMED_OUT,
                    attempts=attempt,
                    error=str(exc) or "timed out",
                )
            except Exception as exc:
                if not is_transient_error(exc):
                    logger.error("Completion for %s failed permanently: %s", label, exc)
                    return InvocationResult(
                        outcome=InvocationOutcome.FAILED,
                        attempts=attempt,
                        error=str(exc),
                    )
                if attempt >= max_attempts:
                    logger.error(
                        "Completion for %s still failing after %d attempts: %s", label, attempt, exc
                    )
                    return InvocationResult(
                        outcome=InvocationOutcome.RETRIES_EXHAUSTED,
                        attempts=attempt,
                        error=str(exc),
                    )
                delay = self.policy.delay_for(attempt - 1)
                logger.warning(
                    "Transient completion error for %s (attempt %d/%d); retrying in %.1fs: %s",
                    label,
                    attempt,
                    max_attempts,
                    delay,
                    exc,
                )
                await self._sleep(delay)
                continue

            logger.info("Completion for %s succeeded on attempt %d", label, attempt)
            return InvocationResult(outcome=InvocationOutcome.SUCCEEDED, attempts=attempt, text=reply)

        return InvocationResult(outcome=InvocationOutcome.RETRIES_EXHAUSTED, attempts=max_attempts)
