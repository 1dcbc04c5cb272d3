"""Domain models for categories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from workshop.db import models as orm
from workshop.modules.common import UNSET

DEFAULT_COLOR = "#3B82F6"


@dataclass(slots=True)
class Category:
    id: str
    name: str
    description: str
    color: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.Category) -> "Category":
        return cls(
            id=str(instance.id),
            name=instance.name,
            description=instance.description or "",
            color=instance.color or DEFAULT_COLOR,
            created_at=instance.created_at,
        )


@dataclass(slots=True)
class CategoryCreateInput:
    name: str
    description: str = ""
    color: str = DEFAULT_COLOR


@dataclass(slots=True)
class CategoryUpdateInput:
    name: Optional[str] | object = UNSET
    description: Optional[str] | object = UNSET
    color: Optional[str] | object = UNSET
