"""Domain services for category management."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from workshop.infrastructure.database.repositories.category_repository import SqlCategoryRepository
from workshop.modules.common import UNSET

from .exceptions import (
    CategoryAlreadyExistsError,
    CategoryInUseError,
    CategoryNotFoundError,
    CategoryValidationError,
)
from .models import Category, CategoryCreateInput, CategoryUpdateInput
from .repository import CategoryRepository


class CategoryService:
    """Encapsulates category use cases."""

    def __init__(self, repository: CategoryRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CategoryService":
        return cls(SqlCategoryRepository(session))

    async def list_categories(self) -> Sequence[Category]:
        return await self._repository.list_categories()

    async def get_category(self, category_id: str) -> Category:
        category = await self._repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(f"Category with ID {category_id} not found")
        return category

    async def create_category(self, payload: CategoryCreateInput) -> Category:
        name = (payload.name or "").strip()
        if not name:
            raise CategoryValidationError("Category name is required")
        if await self._repository.get_by_name(name) is not None:
            raise CategoryAlreadyExistsError(f"Category with name '{name}' already exists")
        return await self._repository.create(
            name=name,
            description=payload.description or "",
            color=payload.color,
        )

    async def update_category(self, category_id: str, payload: CategoryUpdateInput) -> Category:
        current = await self.get_category(category_id)

        name = None
        if payload.name is not UNSET and payload.name is not None:
            name = payload.name.strip()
            if not name:
                raise CategoryValidationError("Category name cannot be empty")
            if name != current.name:
                existing = await self._repository.get_by_name(name)
                if existing is not None and existing.id != category_id:
                    raise CategoryAlreadyExistsError(f"Category with name '{name}' already exists")

        updated = await self._repository.update(
            category_id,
            name=name,
            description=None if payload.description is UNSET else payload.description,
            color=None if payload.color is UNSET else payload.color,
        )
        if updated is None:
            raise CategoryNotFoundError(f"Category with ID {category_id} not found")
        return updated

    async def delete_category(self, category_id: str) -> None:
        await self.get_category(category_id)
        if await self._repository.count_templates(category_id) > 0:
            raise CategoryInUseError(
                "Cannot delete category that has associated prompt templates. "
                "Please reassign or delete the prompts first."
            )
        await self._repository.delete(category_id)
