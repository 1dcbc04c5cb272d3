"""Repository protocol for category persistence."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Category


class CategoryRepository(Protocol):
    async def list_categories(self) -> Sequence[Category]:
        ...

    async def get_by_id(self, category_id: str) -> Category | None:
        ...

    async def get_by_name(self, name: str) -> Category | None:
        """Case-insensitive lookup."""
        ...

    async def create(self, *, name: str, description: str, color: str) -> Category:
        ...

    async def update(
        self,
        category_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        color: str | None = None,
    ) -> Category | None:
        ...

    async def count_templates(self, category_id: str) -> int:
        ...

    async def delete(self, category_id: str) -> bool:
        ...
