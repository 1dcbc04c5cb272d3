"""Application service handling prompt template workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from workshop.infrastructure.database.repositories.category_repository import SqlCategoryRepository
from workshop.infrastructure.database.repositories.prompt_repository import SqlPromptTemplateRepository
from workshop.infrastructure.database.repositories.tag_repository import SqlTagRepository
from workshop.modules.categories.exceptions import CategoryNotFoundError
from workshop.modules.categories.repository import CategoryRepository
from workshop.modules.common import UNSET, NameLookup
from workshop.modules.tags.repository import TagRepository

from .exceptions import PromptNotFoundError, PromptValidationError
from .interchange import export_to_interchange, import_from_interchange
from .models import (
    VARIABLE_TYPES,
    PromptTemplate,
    PromptTemplateCreateInput,
    PromptTemplateFilter,
    PromptTemplateUpdateInput,
    PromptVariable,
    dedupe_ids,
)
from .reconciler import reconcile
from .repository import PromptTemplateRepository

logger = logging.getLogger(__name__)


def validate_variables(variables: Sequence[PromptVariable]) -> None:
    seen: set[str] = set()
    for variable in variables:
        name = variable.name.strip()
        if not name:
            raise PromptValidationError("Variable name is required")
        if name in seen:
            raise PromptValidationError(f"Variable '{name}' is declared more than once")
        if variable.type not in VARIABLE_TYPES:
            raise PromptValidationError(
                f"Variable '{name}' has unsupported type '{variable.type}'; "
                f"expected one of {', '.join(VARIABLE_TYPES)}"
            )
        seen.add(name)


@dataclass(slots=True)
class PromptService:
    repository: PromptTemplateRepository
    categories: CategoryRepository
    tags: TagRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "PromptService":
        return cls(
            SqlPromptTemplateRepository(session),
            SqlCategoryRepository(session),
            SqlTagRepository(session),
        )

    async def list_templates(self, filters: PromptTemplateFilter | None = None) -> list[PromptTemplate]:
        templates = await self.repository.list_templates()
        if filters is None:
            return list(templates)
        return [template for template in templates if filters.matches(template)]

    async def get_template(self, template_id: str) -> PromptTemplate:
        template = await self.repository.get_by_id(template_id)
        if template is None:
            raise PromptNotFoundError(f"Prompt with ID {template_id} not found")
        return template

    async def create_template(self, payload: PromptTemplateCreateInput) -> PromptTemplate:
        draft = await self._prepare(
            name=payload.name,
            description=payload.description,
            content=payload.content,
            variables=payload.variables,
            category_id=payload.category_id,
            tag_ids=payload.tag_ids,
        )
        template = await self.repository.create(
            name=draft.name,
            description=draft.description,
            content=draft.content,
            variables=draft.variables,
            category_id=draft.category_id,
            tag_ids=draft.tag_ids,
            yaml_template=draft.yaml_template,
        )
        logger.info("Created prompt template %s (%s)", template.id, template.name)
        return template

    async def update_template(self, template_id: str, payload: PromptTemplateUpdateInput) -> PromptTemplate:
        current = await self.get_template(template_id)

        def _pick(value, fallback):
            return fallback if value is UNSET or value is None else value

        draft = await self._prepare(
            name=_pick(payload.name, current.name),
            description=_pick(payload.description, current.description),
            content=_pick(payload.content, current.content),
            variables=_pick(payload.variables, current.variables),
            category_id=current.category_id if payload.category_id is UNSET else payload.category_id,
            tag_ids=_pick(payload.tag_ids, current.tag_ids),
        )
        updated = await self.repository.update(
            template_id,
            name=draft.name,
            description=draft.description,
            content=draft.content,
            variables=draft.variables,
            category_id=draft.category_id,
            tag_ids=draft.tag_ids,
            yaml_template=draft.yaml_template,
            updated_at=datetime.now(timezone.utc),
        )
        if updated is None:
            raise PromptNotFoundError(f"Prompt with ID {template_id} not found")
        return updated

    async def delete_template(self, template_id: str) -> None:
        if not await self.repository.delete(template_id):
            raise PromptNotFoundError(f"Prompt with ID {template_id} not found")
        logger.info("Deleted prompt template %s", template_id)

    async def export_template(self, template_id: str) -> str:
        template = await self.get_template(template_id)
        category_lookup, tag_lookup = await self._lookups()
        return export_to_interchange(template, category_lookup, tag_lookup)

    async def import_template(self, text: str) -> PromptTemplate:
        category_lookup, tag_lookup = await self._lookups()
        payload = import_from_interchange(text, category_lookup, tag_lookup)
        return await self.create_template(payload)

    async def _lookups(self) -> tuple[NameLookup, NameLookup]:
        categories = await self.categories.list_categories()
        tags = await self.tags.list_tags()
        return NameLookup.from_entities(categories), NameLookup.from_entities(tags)

    async def _prepare(
        self,
        *,
        name: str,
        description: str | None,
        content: str,
        variables: Sequence[PromptVariable],
        category_id: str | None,
        tag_ids: Sequence[str],
    ) -> _Draft:
        name = (name or "").strip()
        if not name:
            raise PromptValidationError("Name is required")
        if not content or not content.strip():
            raise PromptValidationError("Content is required")
        variables = [replace(variable, name=variable.name.strip()) for variable in variables]
        validate_variables(variables)

        if category_id and await self.categories.get_by_id(category_id) is None:
            raise CategoryNotFoundError(f"Category with ID {category_id} not found")

        result = reconcile(content, variables)
        if result.changed:
            logger.debug(
                "Reconciled variables for '%s': added=%s removed=%s", name, result.added, result.removed
            )
        draft = _Draft(
            name=name,
            description=description or "",
            content=content,
            variables=result.variables,
            category_id=category_id or None,
            tag_ids=dedupe_ids(tag_ids),
        )
        category_lookup, tag_lookup = await self._lookups()
        draft.yaml_template = export_to_interchange(draft, category_lookup, tag_lookup)
        return draft


@dataclass(slots=True)
class _Draft:
    name: str
    description: str
    content: str
    variables: list[PromptVariable]
    category_id: str | None
    tag_ids: list[str]
    yaml_template: str = ""
