"""Field documents.

A field is either bound to a column or column-less. The variant is chosen
once by :func:`field_variant` and never changes afterwards; the assembler
dispatches on the variant type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ui_metadata.assembly.navigation import parent_tab
from ui_metadata.assembly.process_assembler import ProcessAssembler
from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.dictionary.repository import DictionaryRepository
from ui_metadata.domain.constants import DEFAULT_CHECK_ON_SAVE, DEFAULT_EDITABLE_FIELD, INPUT_NAME_PREFIX
from ui_metadata.domain.enums import EntityKind, ReferenceKind
from ui_metadata.domain.models import Column, Field, FieldAccess, Table, Tab
from ui_metadata.errors import AssemblyError
from ui_metadata.resolution.expression_translator import column_name_resolver, translate_logic
from ui_metadata.resolution.projection import project
from ui_metadata.resolution.reference_resolver import (
    classify,
    is_button,
    resolve_list_info,
    resolve_selector_info,
)

logger = logging.getLogger(__name__)


# ── Variants ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ColumnBoundField:
    """A field backed by a table column."""

    field: Field
    tab: Tab
    column: Column
    table: Table
    access: FieldAccess | None = None


@dataclass(frozen=True)
class ColumnLessField:
    """A field with no underlying column."""

    field: Field
    tab: Tab
    access: FieldAccess | None = None


FieldVariant = ColumnBoundField | ColumnLessField


def field_variant(repository: DictionaryRepository, field: Field,
                  access: FieldAccess | None = None) -> FieldVariant:
    """Read everything a field needs and pick its variant.

    Raises:
        AssemblyError: If the field's tab, column, or column table is missing.
    """
    tab = repository.get(EntityKind.TAB, field.tab_id)
    if tab is None:
        raise AssemblyError(f"Field {field.id} belongs to unknown tab {field.tab_id}")

    if field.column_id is None:
        return ColumnLessField(field=field, tab=tab, access=access)

    column = repository.get(EntityKind.COLUMN, field.column_id)
    if column is None:
        raise AssemblyError(f"Field {field.id} references unknown column {field.column_id}")
    table = repository.get(EntityKind.TABLE, column.table_id)
    if table is None:
        raise AssemblyError(f"Column {column.id} belongs to unknown table {column.table_id}")
    return ColumnBoundField(field=field, tab=tab, column=column, table=table, access=access)


def input_name(column: Column) -> str:
    """Legacy form input name: ``inp`` + camel-cased db column name.

    ``C_BPartner_ID`` → ``inpcBpartnerId``
    """
    head, *rest = column.db_column_name.lower().split('_')
    return INPUT_NAME_PREFIX + head + ''.join(part[:1].upper() + part[1:] for part in rest)


# ── Assembler ───────────────────────────────────────────────────────────


class FieldAssembler:
    """Builds one field document per variant.

    Args:
        scope: Per-request collaborators.
    """

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope
        self._repository = scope.repository
        self._processes: ProcessAssembler | None = None

    @property
    def processes(self) -> ProcessAssembler:
        if self._processes is None:
            self._processes = ProcessAssembler(self._scope)
        return self._processes

    def build(self, variant: FieldVariant) -> dict[str, Any]:
        if isinstance(variant, ColumnBoundField):
            return self._build_column_bound(variant)
        return self._build_column_less(variant)

    @staticmethod
    def document_key(variant: FieldVariant) -> str | None:
        """Key of the field inside its tab's ``fields`` map."""
        if isinstance(variant, ColumnBoundField):
            return variant.column.property_name
        return variant.field.name

    # ── Common ──────────────────────────────────────────────────────────

    def _base(self, variant: FieldVariant, hql_name: str, updatable: bool) -> dict[str, Any]:
        field, access = variant.field, variant.access
        doc = project(field, self._scope.language)
        doc['hqlName'] = hql_name
        doc['checkOnSave'] = access.check_on_save if access is not None else DEFAULT_CHECK_ON_SAVE
        doc['isEditable'] = access.editable_field if access is not None else DEFAULT_EDITABLE_FIELD
        doc['isReadOnly'] = field.read_only or (access is not None and not access.editable_field)
        doc['updatable'] = updatable

        expression = translate_logic(
            self._scope.translator,
            field.display_logic,
            column_name_resolver(self._repository, variant.tab.table_id),
        )
        if expression is not None:
            doc['displayLogicExpression'] = expression
        return doc

    def _build_column_less(self, variant: ColumnLessField) -> dict[str, Any]:
        return self._base(variant, variant.field.name, updatable=True)

    # ── Column-bound ────────────────────────────────────────────────────

    def _build_column_bound(self, variant: ColumnBoundField) -> dict[str, Any]:
        field, column = variant.field, variant.column
        language = self._scope.language

        doc = self._base(variant, column.property_name or field.name, updatable=column.updatable)
        doc['columnName'] = column.db_column_name
        doc['column'] = project(column, language)
        doc['isMandatory'] = column.mandatory
        doc['inputName'] = input_name(column)
        doc['isParentRecordProperty'] = self._is_parent_record_property(variant)

        self._add_process(doc, variant)
        self._add_referenced_entity(doc, column)

        read_only = translate_logic(
            self._scope.translator,
            column.read_only_logic,
            column_name_resolver(self._repository, variant.tab.table_id),
        )
        if read_only is not None:
            doc['readOnlyLogicExpression'] = read_only

        kind = classify(column.reference_id)
        if kind == ReferenceKind.LIST:
            doc['refList'] = resolve_list_info(self._repository, column.reference_search_key_id, language)
        elif kind in (ReferenceKind.SELECTOR, ReferenceKind.TREE_SELECTOR):
            doc['selector'] = resolve_selector_info(self._repository, field.id, column.reference_search_key_id)
        elif is_button(column.reference_id) and column.reference_search_key_id is not None:
            doc['buttonRefList'] = resolve_list_info(self._repository, column.reference_search_key_id, language)
        return doc

    def _add_process(self, doc: dict[str, Any], variant: ColumnBoundField) -> None:
        """New-style process first, then legacy (registry before column)."""
        field, column = variant.field, variant.column

        definition = self.processes.bound_definition(column)
        if definition is not None:
            process_doc = self.processes.build_definition(definition.id)
            doc['processDefinition'] = self.processes.build_field_process(process_doc, variant.field, variant.tab, column)
            return

        registry = self._scope.legacy_registry
        if registry.is_legacy_process(field.id):
            legacy = registry.get_legacy_process(field.id)
        elif column.legacy_process_id is not None:
            legacy = self._repository.get(EntityKind.LEGACY_PROCESS, column.legacy_process_id)
            if legacy is None:
                raise AssemblyError(f"Column {column.id} references unknown process {column.legacy_process_id}")
        else:
            return

        if legacy is not None:
            process_doc = self.processes.build_legacy_process(legacy)
            doc['processAction'] = self.processes.build_field_process(process_doc, variant.field, variant.tab, column)

    def _add_referenced_entity(self, doc: dict[str, Any], column: Column) -> None:
        if column.referenced_table_id is None:
            return
        table = self._repository.get(EntityKind.TABLE, column.referenced_table_id)
        if table is None:
            raise AssemblyError(f"Column {column.id} references unknown table {column.referenced_table_id}")

        referenced_tab = (
            self._repository.first(EntityKind.TAB, lambda t: t.table_id == table.id and t.active)
            or self._repository.first(EntityKind.TAB, lambda t: t.table_id == table.id)
        )
        window_id = referenced_tab.window_id if referenced_tab is not None else None

        doc['referencedEntity'] = table.name
        doc['referencedWindowId'] = window_id
        doc['referencedTabId'] = referenced_tab.id if referenced_tab is not None else None
        doc['isReferencedWindowAccessible'] = self._scope.window_access(window_id) is not None

    def _is_parent_record_property(self, variant: ColumnBoundField) -> bool:
        """Whether the column links to the record of the parent tab."""
        column = variant.column
        if not column.link_to_parent or column.referenced_table_id is None:
            return False
        parent = parent_tab(self._repository, variant.tab)
        if parent is None:
            return False
        parent_table = self._repository.get(EntityKind.TABLE, parent.table_id)
        return (parent_table is not None
                and parent_table.data_origin == 'Table'
                and parent_table.id == column.referenced_table_id)
