"""SQLAlchemy implementation for tag repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select

from workshop.db.models import Tag as TagModel
from workshop.modules.common.repository import AsyncRepository
from workshop.modules.tags.models import Tag


class SqlTagRepository(AsyncRepository[TagModel]):
    model = TagModel

    async def list_tags(self) -> Sequence[Tag]:
        result = await self.session.execute(select(TagModel).order_by(TagModel.name))
        return [Tag.from_orm(model) for model in result.scalars().all()]

    async def get_by_id(self, tag_id: str) -> Tag | None:
        model = await self._get_model(tag_id)
        return Tag.from_orm(model) if model else None

    async def get_by_name(self, name: str) -> Tag | None:
        model = await self._get_model_by_name(name)
        return Tag.from_orm(model) if model else None

    async def create(self, *, name: str, description: str, color: str) -> Tag:
        model = await self.add(TagModel(name=name, description=description, color=color))
        return Tag.from_orm(model)

    async def update(
        self,
        tag_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        color: str | None = None,
    ) -> Tag | None:
        model = await self._get_model(tag_id)
        if model is None:
            return None
        if name is not None:
            model.name = name
        if description is not None:
            model.description = description
        if color is not None:
            model.color = color
        await self.session.flush()
        return Tag.from_orm(model)

    async def delete(self, tag_id: str) -> bool:
        return await self._delete_by_id(tag_id)
