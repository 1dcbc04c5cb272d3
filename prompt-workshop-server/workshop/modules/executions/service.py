"""Application service running prompt templates against the completion capability."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from workshop.infrastructure.database.repositories.execution_repository import SqlExecutionRepository
from workshop.infrastructure.database.repositories.prompt_repository import SqlPromptTemplateRepository
from workshop.modules.prompts.exceptions import MissingRequiredVariablesError, PromptNotFoundError
from workshop.modules.prompts.models import PromptTemplate
from workshop.modules.prompts.repository import PromptTemplateRepository
from workshop.modules.prompts.substitution import substitute

from .fallback import build_fallback_result
from .invoker import CompletionInvoker
from .models import ExecutionRecord
from .repository import ExecutionRepository

logger = logging.getLogger(__name__)


def find_missing_variables(template: PromptTemplate, values: Mapping[str, Any]) -> list[str]:
    """Names of required variables absent from ``values``; presence only, no type check."""
    return [variable.name for variable in template.variables if variable.required and variable.name not in values]


class ExecutionService:
    """Validates, renders and runs a template, recording exactly one result per run."""

    def __init__(
        self,
        templates: PromptTemplateRepository,
        executions: ExecutionRepository,
        invoker: CompletionInvoker,
    ) -> None:
        self._templates = templates
        self._executions = executions
        self._invoker = invoker

    @classmethod
    def with_session(cls, session: AsyncSession, invoker: CompletionInvoker) -> "ExecutionService":
        return cls(SqlPromptTemplateRepository(session), SqlExecutionRepository(session), invoker)

    async def execute(self, template_id: str, values: Optional[Mapping[str, Any]] = None) -> ExecutionRecord:
        values = dict(values or {})
        template = await self._templates.get_by_id(template_id)
        if template is None:
            raise PromptNotFoundError(f"Prompt with ID {template_id} not found")

        missing = find_missing_variables(template, values)
        if missing:
            raise MissingRequiredVariablesError(missing)

        rendered = substitute(template.content, values)
        logger.debug("Rendered prompt %s (%d characters)", template.id, len(rendered))

        result = await self._invoker.invoke(rendered, label=template.name)
        if result.text is not None:
            output = result.text
        else:
            logger.warning(
                "Using fallback result for %s after %s (%d attempts)",
                template.name,
                result.outcome.value,
                result.attempts,
            )
            output = build_fallback_result(template.name, result.outcome)

        record = await self._executions.append(
            prompt_template_id=template.id,
            variables=values,
            result=output,
            status=result.outcome.value,
            attempts=result.attempts,
        )
        logger.info("Recorded execution %s for prompt %s (%s)", record.id, template.id, record.status)
        return record

    async def list_executions(self, template_id: str, limit: Optional[int] = None) -> Sequence[ExecutionRecord]:
        if await self._templates.get_by_id(template_id) is None:
            raise PromptNotFoundError(f"Prompt with ID {template_id} not found")
        return await self._executions.list_for_template(template_id, limit)
