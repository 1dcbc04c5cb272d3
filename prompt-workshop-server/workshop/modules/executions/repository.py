"""Repository protocol for execution history."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from .models import ExecutionRecord


class ExecutionRepository(Protocol):
    async def append(
        self,
        *,
        prompt_template_id: str,
        variables: Mapping[str, Any],
        result: str,
        status: str,
        attempts: int,
    ) -> ExecutionRecord:
        ...

    async def list_for_template(self, prompt_template_id: str, limit: int | None = None) -> Sequence[ExecutionRecord]:
        """Newest first."""
        ...
