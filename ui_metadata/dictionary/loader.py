"""JSON snapshot loader.

A snapshot is a single JSON object mapping entity kind names to lists of
rows, each row using the entity's snake_case attribute names::

    {
      "Window": [{"id": "W1", "name": "Sales Order"}],
      "Tab": [{"id": "T0", "window_id": "W1", "table_id": "Order", "name": "Header"}]
    }

Rows are registered in file order, which becomes dictionary order.
"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from ui_metadata.dictionary.repository import InMemoryDictionary
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import ENTITY_TYPES
from ui_metadata.errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_snapshot(path: str | Path) -> InMemoryDictionary:
    """Read a snapshot file into an in-memory dictionary.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigurationError: If the file names an unknown kind or attribute.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Snapshot not found: {path}")
    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    repository = build_dictionary(data)
    logger.info("Loaded dictionary snapshot %s", path)
    return repository


def build_dictionary(data: dict[str, list[dict[str, Any]]]) -> InMemoryDictionary:
    """Build an in-memory dictionary from already-parsed snapshot data."""
    if not isinstance(data, dict):
        raise ConfigurationError("Snapshot root must be an object keyed by entity kind")

    repository = InMemoryDictionary()
    for kind_name, rows in data.items():
        try:
            kind = EntityKind(kind_name)
        except ValueError:
            raise ConfigurationError(f"Unknown entity kind in snapshot: {kind_name}") from None

        if not isinstance(rows, list):
            raise ConfigurationError(f"Snapshot entry {kind_name} must be a list of rows")

        cls = ENTITY_TYPES[kind]
        allowed = {f.name for f in fields(cls)}
        for row in rows:
            if not isinstance(row, dict):
                raise ConfigurationError(f"{kind_name} row must be an object, got {type(row).__name__}")
            unknown = set(row) - allowed
            if unknown:
                raise ConfigurationError(
                    f"Unknown attributes for {kind_name} {row.get('id')}: {', '.join(sorted(unknown))}"
                )
            try:
                entity = cls(**row)
            except TypeError as e:
                raise ConfigurationError(f"Invalid {kind_name} row {row.get('id')}: {e}") from e
            repository.add(entity)
        logger.debug("Loaded %d %s rows", len(rows), kind_name)
    return repository
