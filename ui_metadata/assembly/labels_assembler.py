"""Translated UI labels and the system language list."""

from typing import Any

from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.translations import translate


class LabelsAssembler:
    """UI label texts keyed by message search key."""

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope

    def build(self) -> dict[str, str]:
        language = self._scope.language
        return {
            message.search_key: translate(message, 'text', language)
            for message in self._scope.repository.query(EntityKind.MESSAGE)
        }

    def label(self, search_key: str, default: str | None = None) -> str | None:
        """Translated text of one message, or ``default`` when there is none."""
        message = self._scope.repository.first(EntityKind.MESSAGE, lambda m: m.search_key == search_key)
        if message is None:
            return default
        return translate(message, 'text', self._scope.language)


class LanguageAssembler:
    """Active system languages keyed by language code."""

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope

    def build(self) -> dict[str, dict[str, Any]]:
        languages = self._scope.repository.query(
            EntityKind.LANGUAGE, lambda lang: lang.system_language and lang.active,
        )
        return {
            lang.language: {'id': lang.id, 'language': lang.language, 'name': lang.name}
            for lang in languages
        }
