"""Registry of button fields whose processes still run on the legacy engine."""

from typing import Protocol

from ui_metadata.domain.constants import LEGACY_PROCESS_FIELD_IDS, LEGACY_PROCESS_PLACEHOLDER_NAME
from ui_metadata.domain.models import LegacyProcess


class LegacyProcessRegistry(Protocol):
    def is_legacy_process(self, field_id: str) -> bool:
        """Whether ``field_id`` launches a process served by the legacy engine."""

    def get_legacy_process(self, field_id: str) -> LegacyProcess | None:
        """Return the legacy process launched by ``field_id``, or None."""


class StaticLegacyProcessRegistry:
    """Fixed set of legacy button fields, each mapped to a placeholder process.

    Args:
        field_ids: Field ids to treat as legacy process launchers.
    """

    def __init__(self, field_ids: frozenset[str] = LEGACY_PROCESS_FIELD_IDS) -> None:
        self._field_ids = frozenset(field_ids)

    def is_legacy_process(self, field_id: str) -> bool:
        return field_id in self._field_ids

    def get_legacy_process(self, field_id: str) -> LegacyProcess | None:
        if not self.is_legacy_process(field_id):
            return None
        return LegacyProcess(id=field_id, name=LEGACY_PROCESS_PLACEHOLDER_NAME)
