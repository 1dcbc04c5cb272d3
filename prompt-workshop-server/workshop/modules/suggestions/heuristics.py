"""Keyword-overlap scoring used when no trustworthy completion is available."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

NAME_MATCH_SCORE = 10
WORD_MATCH_SCORE = 3
MIN_WORD_LENGTH = 4


class Describable(Protocol):
    id: str
    name: str
    description: str


def match_score(text: str, name: str, description: Optional[str]) -> int:
    """Score how well ``name``/``description`` overlap with lower-cased ``text``."""
    score = 0
    if name and name.lower() in text:
        score += NAME_MATCH_SCORE
    for word in (description or "").lower().split():
        if len(word) >= MIN_WORD_LENGTH and word in text:
            score += WORD_MATCH_SCORE
    return score


def _ranked(text: str, entities: Iterable[Describable]) -> list[tuple[int, Describable]]:
    scored = [(match_score(text, entity.name, entity.description), entity) for entity in entities]
    positive = [item for item in scored if item[0] > 0]
    # sorted() is stable, so ties keep catalog order
    return sorted(positive, key=lambda item: item[0], reverse=True)


def suggest_category(text: str, categories: Iterable[Describable]) -> Optional[str]:
    ranked = _ranked(text, categories)
    return ranked[0][1].id if ranked else None


def suggest_tags(text: str, tags: Iterable[Describable], limit: int) -> list[str]:
    return [entity.id for _, entity in _ranked(text, tags)[:limit]]
