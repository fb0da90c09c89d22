"""Tab documents: logic pass-through, parent linkage, and the keyed field map."""

from __future__ import annotations

import logging
from typing import Any

from ui_metadata.assembly.field_assembler import ColumnBoundField, FieldAssembler, field_variant
from ui_metadata.assembly.navigation import parent_tab
from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.domain.constants import (
    AUDIT_COLUMNS,
    AUDIT_GRID_KEYS,
    AUDIT_GRID_POSITION_START,
    AUDIT_USER_ENTITY,
    AUDIT_USER_KEYS,
    DISPLAY_FIELD_PROPERTY,
    ID,
    IDENTIFIER,
    VALUE_FIELD_PROPERTY,
)
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import Column, Field, FieldAccess, Tab, TabAccess, Table
from ui_metadata.domain.translations import translate
from ui_metadata.errors import AssemblyError
from ui_metadata.resolution.projection import identifier, project

logger = logging.getLogger(__name__)


class TabAssembler:
    """Builds one tab document.

    Args:
        scope: Per-request collaborators.
    """

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope
        self._repository = scope.repository
        self._fields = FieldAssembler(scope)

    def build(self, tab: Tab, tab_access: TabAccess | None = None) -> dict[str, Any]:
        """Assemble ``tab``, restricted to ``tab_access``'s field grants when it has any."""
        table = self._repository.get(EntityKind.TABLE, tab.table_id)
        if table is None:
            raise AssemblyError(f"Tab {tab.id} belongs to unknown table {tab.table_id}")

        doc = project(tab, self._scope.language)
        doc['filter'] = tab.filter_clause or ''
        doc['displayLogic'] = tab.display_logic or ''
        doc['entityName'] = table.name
        doc['parentColumns'] = self.parent_columns(tab)

        fields = self.build_fields(tab, tab_access)
        if self._scope.options.include_audit_fields:
            self._add_audit_fields(fields, tab, table)
        doc['fields'] = fields

        parent = parent_tab(self._repository, tab)
        if parent is not None:
            doc['parentTabId'] = parent.id
        return doc

    def parent_columns(self, tab: Tab) -> list[str]:
        """Entity names of the tab table's link-to-parent columns; ``[]`` at level 0."""
        if tab.tab_level == 0:
            return []
        columns = self._repository.query(
            EntityKind.COLUMN, lambda c: c.table_id == tab.table_id and c.link_to_parent,
        )
        names = []
        for column in columns:
            if column.property_name is None:
                logger.warning("Link-to-parent column %s has no entity property, skipping", column.db_column_name)
                continue
            names.append(column.property_name)
        return names

    # ── Fields ──────────────────────────────────────────────────────────

    def build_fields(self, tab: Tab, tab_access: TabAccess | None = None) -> dict[str, dict[str, Any]]:
        result: dict[str, dict[str, Any]] = {}
        for field, access in self._selected_fields(tab, tab_access):
            variant = field_variant(self._repository, field, access)
            key = self._fields.document_key(variant)
            if key is None:
                logger.warning("Could not determine entity column name for field %s, skipping", field.id)
                continue
            if isinstance(variant, ColumnBoundField) and not self._can_launch_process(variant.column):
                logger.debug("Role %s cannot launch the process of field %s, skipping",
                             self._scope.context.role_id, field.id)
                continue
            if key in result:
                logger.warning("Field %s replaces another field keyed '%s' in tab %s", field.id, key, tab.id)
            result[key] = self._fields.build(variant)
        return result

    def _can_launch_process(self, column: Column) -> bool:
        definition = self._fields.processes.bound_definition(column)
        return definition is None or self._scope.has_process_access(definition.id)

    def _selected_fields(self, tab: Tab,
                         tab_access: TabAccess | None) -> list[tuple[Field, FieldAccess | None]]:
        grants: list[FieldAccess] = []
        if tab_access is not None:
            grants = self._repository.query(EntityKind.FIELD_ACCESS, lambda a: a.tab_access_id == tab_access.id)

        if not grants:
            fields = self._repository.query(EntityKind.FIELD, lambda f: f.tab_id == tab.id and f.active)
            return [(f, None) for f in fields]

        selected = []
        for grant in grants:
            if not grant.active:
                continue
            field = self._repository.get(EntityKind.FIELD, grant.field_id)
            if field is None:
                raise AssemblyError(f"Field access {grant.id} references unknown field {grant.field_id}")
            if field.active:
                selected.append((field, grant))
        return selected

    # ── Audit fields ────────────────────────────────────────────────────

    def _add_audit_fields(self, fields: dict[str, dict[str, Any]], tab: Tab, table: Table) -> None:
        columns = {
            c.db_column_name: c
            for c in self._repository.query(EntityKind.COLUMN, lambda c: c.table_id == table.id)
        }
        position = AUDIT_GRID_POSITION_START
        for db_name, key in AUDIT_COLUMNS.items():
            if key in fields:
                continue
            column = columns.get(db_name)
            if column is None:
                logger.debug("Audit column '%s' not found in table '%s', skipping", db_name, table.name)
                continue
            fields[key] = self._audit_field(column, key, position, tab)
            position += 1

    def _audit_field(self, column: Column, key: str, grid_position: int, tab: Tab) -> dict[str, Any]:
        language = self._scope.language
        doc: dict[str, Any] = {
            'id': 'audit_' + column.id,
            'name': translate(column, 'name', language),
            'hqlName': key,
            'columnName': column.db_column_name,
            'displayed': False,
            'showInGrid': key in AUDIT_GRID_KEYS,
            'gridPosition': grid_position,
            'isReadOnly': True,
            'isEditable': False,
            'updatable': False,
            'readOnly': True,
            'checkOnSave': False,
            'isMandatory': column.mandatory,
            'isParentRecordProperty': False,
            'column': project(column, language),
            'displayLogic': None,
            'tabId': tab.id,
            'tab$' + IDENTIFIER: identifier(tab, language),
        }
        if key in AUDIT_USER_KEYS:
            doc['selector'] = {DISPLAY_FIELD_PROPERTY: IDENTIFIER, VALUE_FIELD_PROPERTY: ID}
            doc['referencedEntity'] = AUDIT_USER_ENTITY
        return doc
