"""SQLAlchemy implementation for execution history."""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from sqlalchemy import select

from workshop.db.models import PromptExecution as PromptExecutionModel
from workshop.modules.common.repository import AsyncRepository
from workshop.modules.executions.models import ExecutionRecord


class SqlExecutionRepository(AsyncRepository[PromptExecutionModel]):
    model = PromptExecutionModel

    async def append(
        self,
        *,
        prompt_template_id: str,
        variables: Mapping[str, Any],
        result: str,
        status: str,
        attempts: int,
    ) -> ExecutionRecord:
        model = await self.add(
            PromptExecutionModel(
                prompt_template_id=prompt_template_id,
                variables=json.dumps(dict(variables), ensure_ascii=False, default=str),
                result=result,
                status=status,
                attempts=attempts,
            )
        )
        return ExecutionRecord.from_orm(model)

    async def list_for_template(self, prompt_template_id: str, limit: int | None = None) -> Sequence[ExecutionRecord]:
        stmt = (
            select(PromptExecutionModel)
            .where(PromptExecutionModel.prompt_template_id == prompt_template_id)
            .order_by(PromptExecutionModel.executed_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [ExecutionRecord.from_orm(model) for model in result.scalars().all()]
