"""Domain models for category/tag suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SuggestionSource(str, Enum):
    COMPLETION = "completion"
    HEURISTIC = "heuristic"


@dataclass(slots=True)
class Suggestion:
    category_id: Optional[str]
    tag_ids: list[str] = field(default_factory=list)
    reasoning: str = ""
    source: SuggestionSource = SuggestionSource.HEURISTIC


class SuggestionPayload(BaseModel):
    """Shape a completion reply must have before any of its fields are used."""

    model_config = ConfigDict(extra="ignore", strict=True, populate_by_name=True)

    category_id: Optional[str] = Field(default=None, alias="suggestedCategoryId")
    tag_ids: list[str] = Field(default_factory=list, alias="suggestedTagIds")
    reasoning: str = "AI analysis completed"
