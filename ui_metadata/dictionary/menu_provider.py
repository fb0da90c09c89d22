"""Builds the role-filtered menu tree from dictionary menu rows."""

from __future__ import annotations

import logging
from typing import Protocol

from ui_metadata.config import MetadataContext
from ui_metadata.dictionary.repository import DictionaryRepository
from ui_metadata.domain.enums import EntityKind, MenuEntryType
from ui_metadata.domain.models import MenuEntry, MenuNode

logger = logging.getLogger(__name__)

ROOT_MENU_ID = '0'

# Menu action codes -> entry types
_ACTION_TYPES = {
    'W': MenuEntryType.WINDOW,
    'P': MenuEntryType.PROCESS,
    'R': MenuEntryType.REPORT,
    'X': MenuEntryType.FORM,
}


class MenuProvider(Protocol):
    def build_menu(self, context: MetadataContext) -> MenuNode:
        """Return the root node of the menu visible to ``context``'s role."""


class DictionaryMenuProvider:
    """Menu provider reading ``MenuEntry`` rows.

    Window entries are kept only when the role holds an active window grant;
    summary folders left without children are dropped.

    Args:
        repository: Dictionary to read menu rows and grants from.
    """

    def __init__(self, repository: DictionaryRepository) -> None:
        self._repository = repository

    def build_menu(self, context: MetadataContext) -> MenuNode:
        entries = [e for e in self._repository.query(EntityKind.MENU_ENTRY) if e.active]
        by_parent: dict[str | None, list[MenuEntry]] = {}
        for entry in entries:
            by_parent.setdefault(entry.parent_id, []).append(entry)
        for siblings in by_parent.values():
            siblings.sort(key=lambda e: e.sequence)

        allowed_windows = {
            a.window_id for a in self._repository.query(
                EntityKind.WINDOW_ACCESS,
                lambda a: a.role_id == context.role_id and a.active,
            )
        }

        roots = by_parent.get(None, []) + by_parent.get(ROOT_MENU_ID, [])
        children = self._build_children(roots, by_parent, allowed_windows, set())
        return MenuNode(id=ROOT_MENU_ID, entry_type=MenuEntryType.SUMMARY, name='Menu', children=children)

    def _build_children(self, entries: list[MenuEntry], by_parent: dict[str | None, list[MenuEntry]],
                        allowed_windows: set[str], visited: set[str]) -> tuple[MenuNode, ...]:
        nodes = []
        for entry in entries:
            if entry.id in visited:
                logger.warning("Menu entry %s appears twice in the tree, skipping", entry.id)
                continue
            visited.add(entry.id)

            entry_type = self.entry_type(entry)
            if entry_type == MenuEntryType.WINDOW and entry.window_id not in allowed_windows:
                continue

            children = self._build_children(by_parent.get(entry.id, []), by_parent, allowed_windows, visited)
            if entry_type == MenuEntryType.SUMMARY and not children:
                continue

            nodes.append(MenuNode(
                id=entry.id,
                entry_type=entry_type,
                name=entry.name,
                description=entry.description,
                icon=entry.icon,
                url=entry.url,
                action=entry.action,
                window_id=entry.window_id,
                process_id=entry.process_id,
                process_definition_id=entry.process_definition_id,
                form_id=entry.form_id,
                translations=entry.translations,
                children=children,
            ))
        return tuple(nodes)

    @staticmethod
    def entry_type(entry: MenuEntry) -> MenuEntryType:
        """Classify a menu row by its summary flag, targets, and action code."""
        if entry.summary_level:
            return MenuEntryType.SUMMARY
        if entry.process_definition_id:
            return MenuEntryType.PROCESS_DEFINITION
        if entry.action in _ACTION_TYPES:
            return _ACTION_TYPES[entry.action]
        if entry.window_id:
            return MenuEntryType.WINDOW
        if entry.url:
            return MenuEntryType.EXTERNAL
        return MenuEntryType.VIEW
