"""Native entity projection: dataclass attributes as a camelCase document."""

from dataclasses import fields
from enum import Enum
from typing import Any

from ui_metadata.domain.constants import IDENTIFIER
from ui_metadata.domain.translations import translate

_SKIPPED = frozenset({'translations', 'children'})


def to_camel(name: str) -> str:
    """``db_column_name`` → ``dbColumnName``."""
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def identifier(entity: Any, language: str | None = None) -> str:
    """Display identifier of an entity: its translated name, else its id."""
    name = translate(entity, 'name', language) if hasattr(entity, 'name') else None
    return name if name else entity.id


def project(entity: Any, language: str | None = None, exclude: tuple[str, ...] = ()) -> dict[str, Any]:
    """Project every attribute of ``entity`` into a JSON-ready dict.

    Translatable attributes are resolved for ``language``; enum values are
    unwrapped; ``_identifier`` is always added.
    """
    translatable = getattr(entity, 'TRANSLATABLE', ())
    doc: dict[str, Any] = {}
    for f in fields(entity):
        if f.name in _SKIPPED or f.name in exclude:
            continue
        value = translate(entity, f.name, language) if f.name in translatable else getattr(entity, f.name)
        if isinstance(value, Enum):
            value = value.value
        doc[to_camel(f.name)] = value
    doc[IDENTIFIER] = identifier(entity, language)
    return doc
