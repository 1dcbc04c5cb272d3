"""Domain services for tag management."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from workshop.infrastructure.database.repositories.tag_repository import SqlTagRepository
from workshop.modules.common import UNSET

from .exceptions import TagAlreadyExistsError, TagNotFoundError, TagValidationError
from .models import Tag, TagCreateInput, TagUpdateInput
from .repository import TagRepository


class TagService:
    """Encapsulates tag use cases.

    Deleting a tag never touches the templates that reference it; those ids
    simply stop resolving to a name.
    """

    def __init__(self, repository: TagRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TagService":
        return cls(SqlTagRepository(session))

    async def list_tags(self) -> Sequence[Tag]:
        return await self._repository.list_tags()

    async def get_tag(self, tag_id: str) -> Tag:
        tag = await self._repository.get_by_id(tag_id)
        if tag is None:
            raise TagNotFoundError(f"Tag with ID {tag_id} not found")
        return tag

    async def create_tag(self, payload: TagCreateInput) -> Tag:
        name = (payload.name or "").strip()
        if not name:
            raise TagValidationError("Tag name is required")
        if await self._repository.get_by_name(name) is not None:
            raise TagAlreadyExistsError(f"Tag with name '{name}' already exists")
        return await self._repository.create(
            name=name,
            description=payload.description or "",
            color=payload.color,
        )

    async def update_tag(self, tag_id: str, payload: TagUpdateInput) -> Tag:
        current = await self.get_tag(tag_id)

        name = None
        if payload.name is not UNSET and payload.name is not None:
            name = payload.name.strip()
            if not name:
                raise TagValidationError("Tag name cannot be empty")
            if name != current.name:
                existing = await self._repository.get_by_name(name)
                if existing is not None and existing.id != tag_id:
                    raise TagAlreadyExistsError(f"Tag with name '{name}' already exists")

        updated = await self._repository.update(
            tag_id,
            name=name,
            description=None if payload.description is UNSET else payload.description,
            color=None if payload.color is UNSET else payload.color,
        )
        if updated is None:
            raise TagNotFoundError(f"Tag with ID {tag_id} not found")
        return updated

    async def delete_tag(self, tag_id: str) -> None:
        if not await self._repository.delete(tag_id):
            raise TagNotFoundError(f"Tag with ID {tag_id} not found")
