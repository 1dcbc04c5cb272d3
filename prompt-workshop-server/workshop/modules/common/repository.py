"""Shared base for the SQL-backed catalog and template repositories."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class AsyncRepository(Generic[ModelT]):
    """Session holder with id and name lookups keyed on ``model``.

    Subclasses set ``model`` to an ORM class with a string ``id`` column;
    name lookups additionally need a ``name`` column.
    """

    model: ClassVar[type[Any]]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def add(self, instance: ModelT) -> ModelT:
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def _get_model(self, entity_id: str) -> ModelT | None:
        result = await self.session.execute(select(self.model).where(self.model.id == entity_id))
        return result.scalars().first()

    async def _get_model_by_name(self, name: str) -> ModelT | None:
        stmt = select(self.model).where(func.lower(self.model.name) == name.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def _delete_by_id(self, entity_id: str) -> bool:
        result = await self.session.execute(delete(self.model).where(self.model.id == entity_id))
        return result.rowcount > 0
