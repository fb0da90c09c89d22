"""Dictionary repository: read access to entity snapshots by id and predicate."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol

from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import entity_kind

Predicate = Callable[[Any], bool]


class DictionaryRepository(Protocol):
    """Synchronous, consistent read view over the dictionary.

    ``query`` returns matches in dictionary order; callers that need a single
    row take the first one.
    """

    def get(self, kind: EntityKind, entity_id: str | None) -> Any | None:
        """Return the entity with ``entity_id``, or None."""

    def query(self, kind: EntityKind, predicate: Predicate | None = None) -> list[Any]:
        """Return every entity of ``kind`` matching ``predicate``."""

    def first(self, kind: EntityKind, predicate: Predicate | None = None) -> Any | None:
        """Return the first matching entity, or None."""


class InMemoryDictionary:
    """Repository backed by per-kind insertion-ordered dicts.

    Args:
        entities: Optional initial entities; their kind is taken from their type.
    """

    def __init__(self, entities: Iterable[Any] = ()) -> None:
        self._store: dict[EntityKind, dict[str, Any]] = {kind: {} for kind in EntityKind}
        self.add_all(entities)

    def add(self, entity: Any) -> Any:
        """Register an entity, replacing any previous one with the same id."""
        self._store[entity_kind(entity)][entity.id] = entity
        return entity

    def add_all(self, entities: Iterable[Any]) -> None:
        for entity in entities:
            self.add(entity)

    def get(self, kind: EntityKind, entity_id: str | None) -> Any | None:
        if entity_id is None:
            return None
        return self._store[kind].get(entity_id)

    def query(self, kind: EntityKind, predicate: Predicate | None = None) -> list[Any]:
        values = self._store[kind].values()
        if predicate is None:
            return list(values)
        return [e for e in values if predicate(e)]

    def first(self, kind: EntityKind, predicate: Predicate | None = None) -> Any | None:
        for entity in self._store[kind].values():
            if predicate is None or predicate(entity):
                return entity
        return None

    def count(self, kind: EntityKind) -> int:
        return len(self._store[kind])
