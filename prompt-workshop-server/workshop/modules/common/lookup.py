"""In-memory id <-> name index over categories or tags."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol


class _Named(Protocol):
    id: str
    name: str


class NameLookup:
    """Resolves ids to display names and names back to ids.

    Name matching is case-insensitive because category and tag names are
    unique regardless of case. Misses return ``None``; callers decide whether
    a miss is an error.
    """

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        self._names_by_id: dict[str, str] = {}
        self._ids_by_name: dict[str, str] = {}
        for entity_id, name in entries:
            self._names_by_id[entity_id] = name
            self._ids_by_name.setdefault(name.casefold(), entity_id)

    @classmethod
    def from_entities(cls, entities: Iterable[_Named]) -> "NameLookup":
        return cls((entity.id, entity.name) for entity in entities)

    def name_for(self, entity_id: Optional[str]) -> Optional[str]:
        if not entity_id:
            return None
        return self._names_by_id.get(entity_id)

    def find_by_name(self, name: Optional[str]) -> Optional[str]:
        if not name:
            return None
        return self._ids_by_name.get(name.strip().casefold())
