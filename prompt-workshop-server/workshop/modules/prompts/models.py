"""Domain models for prompt templates."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional

from workshop.db import models as orm
from workshop.modules.common import UNSET

VARIABLE_TYPES = ("string", "number", "boolean")


@dataclass(slots=True)
class PromptVariable:
    name: str
    description: str = ""
    type: str = "string"
    required: bool = False
    default_value: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "required": self.required,
            "defaultValue": self.default_value,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "PromptVariable":
        default_value = payload.get("defaultValue", payload.get("default_value"))
        return cls(
            name=str(payload.get("name", "")),
            description=payload.get("description") or "",
            type=payload.get("type") or "string",
            required=bool(payload.get("required", False)),
            default_value=None if default_value is None else str(default_value),
        )


def dedupe_ids(ids: Iterable[str]) -> list[str]:
    """Collapse duplicates while keeping first-seen order."""
    return list(dict.fromkeys(item for item in ids if item))


@dataclass(slots=True)
class PromptTemplate:
    id: str
    name: str
    description: str
    content: str
    variables: list[PromptVariable] = field(default_factory=list)
    category_id: Optional[str] = None
    tag_ids: list[str] = field(default_factory=list)
    yaml_template: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.PromptTemplate) -> "PromptTemplate":
        variables: list[PromptVariable] = []
        tag_ids: list[str] = []
        try:
            raw_variables = json.loads(instance.variables) if instance.variables else []
            variables = [PromptVariable.from_dict(item) for item in raw_variables if isinstance(item, dict)]
        except json.JSONDecodeError:
            variables = []
        try:
            raw_tags = json.loads(instance.tag_ids) if instance.tag_ids else []
            tag_ids = dedupe_ids(str(item) for item in raw_tags)
        except json.JSONDecodeError:
            tag_ids = []
        return cls(
            id=str(instance.id),
            name=instance.name,
            description=instance.description or "",
            content=instance.content or "",
            variables=variables,
            category_id=instance.category_id,
            tag_ids=tag_ids,
            yaml_template=instance.yaml_template or "",
            created_at=instance.created_at,
            updated_at=instance.updated_at,
        )


@dataclass(slots=True)
class PromptTemplateCreateInput:
    name: str
    content: str
    description: str = ""
    category_id: Optional[str] = None
    tag_ids: list[str] = field(default_factory=list)
    variables: list[PromptVariable] = field(default_factory=list)


@dataclass(slots=True)
class PromptTemplateUpdateInput:
    name: Optional[str] | object = UNSET
    description: Optional[str] | object = UNSET
    content: Optional[str] | object = UNSET
    category_id: Optional[str] | object = UNSET
    tag_ids: Optional[list[str]] | object = UNSET
    variables: Optional[list[PromptVariable]] | object = UNSET


@dataclass(slots=True)
class PromptTemplateFilter:
    category_id: Optional[str] = None
    tag_id: Optional[str] = None
    search: Optional[str] = None

    def matches(self, template: PromptTemplate) -> bool:
        if self.category_id and template.category_id != self.category_id:
            return False
        if self.tag_id and self.tag_id not in template.tag_ids:
            return False
        term = (self.search or "").strip().lower()
        if not term:
            return True
        haystacks = [template.name, template.description, template.content]
        for variable in template.variables:
            haystacks.extend((variable.name, variable.description))
        return any(term in (text or "").lower() for text in haystacks)
