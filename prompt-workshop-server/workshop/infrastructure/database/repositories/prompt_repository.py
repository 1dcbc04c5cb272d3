"""SQLAlchemy implementation for prompt template repository."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, select

from workshop.db.models import PromptExecution as PromptExecutionModel
from workshop.db.models import PromptTemplate as PromptTemplateModel
from workshop.modules.common.repository import AsyncRepository
from workshop.modules.prompts.models import PromptTemplate, PromptVariable


def _dump_variables(variables: Sequence[PromptVariable]) -> str:
    return json.dumps([variable.to_dict() for variable in variables], ensure_ascii=False)


class SqlPromptTemplateRepository(AsyncRepository[PromptTemplateModel]):
    model = PromptTemplateModel

    async def list_templates(self) -> Sequence[PromptTemplate]:
        stmt = select(PromptTemplateModel).order_by(PromptTemplateModel.updated_at.desc())
        result = await self.session.execute(stmt)
        return [PromptTemplate.from_orm(model) for model in result.scalars().all()]

    async def get_by_id(self, template_id: str) -> PromptTemplate | None:
        model = await self._get_model(template_id)
        return PromptTemplate.from_orm(model) if model else None

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
        model = await self.add(
            PromptTemplateModel(
                name=name,
                description=description,
                content=content,
                variables=_dump_variables(variables),
                category_id=category_id,
                tag_ids=json.dumps(list(tag_ids)),
                yaml_template=yaml_template,
            )
        )
        return PromptTemplate.from_orm(model)

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
        model = await self._get_model(template_id)
        if model is None:
            return None
        model.name = name
        model.description = description
        model.content = content
        model.variables = _dump_variables(variables)
        model.category_id = category_id
        model.tag_ids = json.dumps(list(tag_ids))
        model.yaml_template = yaml_template
        model.updated_at = updated_at
        await self.session.flush()
        return PromptTemplate.from_orm(model)

    async def delete(self, template_id: str) -> bool:
        await self.session.execute(
            delete(PromptExecutionModel).where(PromptExecutionModel.prompt_template_id == template_id)
        )
        return await self._delete_by_id(template_id)
