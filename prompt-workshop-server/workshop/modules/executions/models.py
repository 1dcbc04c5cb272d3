"""Domain models for prompt executions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from workshop.db import models as orm


class InvocationOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    RETRIES_EXHAUSTED = "retries_exhausted"
    FAILED = "failed"
    UNAVAILABLE = "unavailable"


@dataclass(slots=True)
class RetryPolicy:
    """Exponential backoff for transient completion failures."""

    max_retries: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, retry_index: int) -> float:
        return self.base_delay * (self.multiplier ** retry_index)


@dataclass(slots=True)
class InvocationResult:
    outcome: InvocationOutcome
    attempts: int
    text: Optional[str] = None
    error: Optional[str] = None


@dataclass(slots=True)
class ExecutionRecord:
    id: str
    prompt_template_id: str
    variables: dict[str, Any] = field(default_factory=dict)
    result: str = ""
    status: str = InvocationOutcome.SUCCEEDED.value
    attempts: int = 0
    executed_at: Optional[datetime] = None

    @property
    def is_fallback(self) -> bool:
        return self.status != InvocationOutcome.SUCCEEDED.value

    @classmethod
    def from_orm(cls, instance: orm.PromptExecution) -> "ExecutionRecord":
        try:
            variables = json.loads(instance.variables) if instance.variables else {}
        except json.JSONDecodeError:
            variables = {}
        if not isinstance(variables, dict):
            variables = {}
        return cls(
            id=str(instance.id),
            prompt_template_id=instance.prompt_template_id,
            variables=variables,
            result=instance.result or "",
            status=instance.status or InvocationOutcome.SUCCEEDED.value,
            attempts=instance.attempts or 0,
            executed_at=instance.executed_at,
        )
