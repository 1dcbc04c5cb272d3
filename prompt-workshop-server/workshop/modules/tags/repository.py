"""Repository protocol for tag persistence."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Tag


class TagRepository(Protocol):
    async def list_tags(self) -> Sequence[Tag]:
        ...

    async def get_by_id(self, tag_id: str) -> Tag | None:
        ...

    async def get_by_name(self, name: str) -> Tag | None:
        """Case-insensitive lookup."""
        ...

    async def create(self, *, name: str, description: str, color: str) -> Tag:
        ...

    async def update(
        self,
        tag_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        color: str | None = None,
    ) -> Tag | None:
        ...

    async def delete(self, tag_id: str) -> bool:
        ...
