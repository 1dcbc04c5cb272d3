"""SQLAlchemy implementation for category repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select

from workshop.db.models import Category as CategoryModel
from workshop.db.models import PromptTemplate as PromptTemplateModel
from workshop.modules.categories.models import Category
from workshop.modules.common.repository import AsyncRepository


class SqlCategoryRepository(AsyncRepository[CategoryModel]):
    model = CategoryModel

    async def list_categories(self) -> Sequence[Category]:
        result = await self.session.execute(select(CategoryModel).order_by(CategoryModel.name))
        return [Category.from_orm(model) for model in result.scalars().all()]

    async def get_by_id(self, category_id: str) -> Category | None:
        model = await self._get_model(category_id)
        return Category.from_orm(model) if model else None

    async def get_by_name(self, name: str) -> Category | None:
        model = await self._get_model_by_name(name)
        return Category.from_orm(model) if model else None

    async def create(self, *, name: str, description: str, color: str) -> Category:
        model = await self.add(CategoryModel(name=name, description=description, color=color))
        return Category.from_orm(model)

    async def update(
        self,
        category_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        color: str | None = None,
    ) -> Category | None:
        model = await self._get_model(category_id)
        if model is None:
            return None
        if name is not None:
            model.name = name
        if description is not None:
            model.description = description
        if color is not None:
            model.color = color
        await self.session.flush()
        return Category.from_orm(model)

    async def count_templates(self, category_id: str) -> int:
        stmt = select(func.count()).select_from(PromptTemplateModel).where(
            PromptTemplateModel.category_id == category_id
        )
        return int((await self.session.execute(stmt)).scalar_one())

    async def delete(self, category_id: str) -> bool:
        return await self._delete_by_id(category_id)
