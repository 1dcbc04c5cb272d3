"""Repository protocol for prompt template persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import PromptTemplate, PromptVariable


class PromptTemplateRepository(Protocol):
    async def list_templates(self) -> Sequence[PromptTemplate]:
        """All templates, most recently updated first."""
        ...

    async def get_by_id(self, template_id: str) -> PromptTemplate | None:
        ...

    async def create(
        self,
        *,
        name: str,
        description: str,
        content: str,
        variables: Sequence[PromptVariable],
        category_id: str | None,
        tag_ids: Sequence[str],
        yaml_template: str,
    ) -> PromptTemplate:
        ...

    async def update(
        self,
        template_id: str,
        *,
        name: str,
        description: str,
        content: str,
        variables: Sequence[PromptVariable],
        category_id: str | None,
        tag_ids: Sequence[str],
        yaml_template: str,
        updated_at: datetime,
    ) -> PromptTemplate | None:
        ...

    async def delete(self, template_id: str) -> bool:
        """Remove the template and every execution recorded against it."""
        ...
