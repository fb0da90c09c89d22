"""Process and report documents.

New-style process definitions list their parameters as an ordered array;
legacy reports and processes key them by db column name.
"""

from __future__ import annotations

import logging
from typing import Any

from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.domain.enums import EntityKind, ReferenceKind
from ui_metadata.domain.models import Column, Field, LegacyProcess, Parameter, ProcessDefinition, ProcessParameter, Tab
from ui_metadata.domain.translations import translate
from ui_metadata.errors import AssemblyError, NotFoundError
from ui_metadata.resolution.expression_translator import NameResolver, column_name_resolver, translate_logic
from ui_metadata.resolution.projection import project
from ui_metadata.resolution.reference_resolver import classify, resolve_list_info, resolve_selector_info

logger = logging.getLogger(__name__)

# Copied through only when set
_OPTIONAL_PARAMETER_ATTRS = {
    'is_range': 'isRange',
    'value_format': 'valueFormat',
    'min_value': 'minValue',
    'max_value': 'maxValue',
}
_HOOK_ATTRS = {'on_load': 'onLoad', 'on_process': 'onProcess'}


class ProcessAssembler:
    """Builds process definition, legacy process, and parameter documents.

    Args:
        scope: Per-request collaborators.
    """

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope
        self._repository = scope.repository

    # ── New-style processes ─────────────────────────────────────────────

    def build_definition(self, process_id: str) -> dict[str, Any]:
        """Process definition document with ordered ``parameters``."""
        process = self._repository.get(EntityKind.PROCESS_DEFINITION, process_id)
        if process is None:
            raise NotFoundError('Process definition', process_id)

        doc = project(process, self._scope.language, exclude=tuple(_HOOK_ATTRS))
        parameters = sorted(
            self._repository.query(EntityKind.PARAMETER, lambda p: p.process_id == process.id and p.active),
            key=lambda p: p.sequence,
        )
        resolver = self._parameter_name_resolver(parameters)
        doc['parameters'] = [self.build_parameter(p, resolver) for p in parameters]

        for attr, key in _HOOK_ATTRS.items():
            value = getattr(process, attr)
            if value is not None:
                doc[key] = value

        report = self._repository.first(
            EntityKind.REPORT_DEFINITION, lambda r: r.process_definition_id == process.id,
        )
        if report is not None:
            doc['reportDefinition'] = {
                'pdfTemplate': report.pdf_template,
                'xlsTemplate': report.xls_template,
                'htmlTemplate': report.html_template,
                'usePdfAsXlsTemplate': report.use_pdf_as_xls_template,
                'usePdfAsHtmlTemplate': report.use_pdf_as_html_template,
            }
        return doc

    # ── Legacy reports and processes ────────────────────────────────────

    def build_legacy(self, process_id: str) -> dict[str, Any]:
        """Legacy report/process document with ``parameters`` keyed by db column name."""
        process = self._repository.get(EntityKind.LEGACY_PROCESS, process_id)
        if process is None:
            raise NotFoundError('Process', process_id)
        return self.build_legacy_process(process)

    def build_legacy_process(self, process: LegacyProcess) -> dict[str, Any]:
        doc = project(process, self._scope.language)
        parameters = sorted(
            self._repository.query(EntityKind.PROCESS_PARAMETER, lambda p: p.process_id == process.id and p.active),
            key=lambda p: p.sequence,
        )
        resolver = self._parameter_name_resolver(parameters)
        doc['parameters'] = {p.db_column_name: self.build_parameter(p, resolver) for p in parameters}
        return doc

    # ── Parameters ──────────────────────────────────────────────────────

    def build_parameter(self, parameter: Parameter | ProcessParameter,
                        name_resolver: NameResolver | None = None) -> dict[str, Any]:
        """Parameter document, resolved by reference kind like a field."""
        language = self._scope.language
        doc = project(parameter, language, exclude=tuple(_OPTIONAL_PARAMETER_ATTRS))

        for attr, key in _OPTIONAL_PARAMETER_ATTRS.items():
            value = getattr(parameter, attr, None)
            if value is not None:
                doc[key] = value

        read_only = translate_logic(self._scope.translator, parameter.read_only_logic, name_resolver)
        if read_only is not None:
            doc['readOnlyLogicExpression'] = read_only
        display = translate_logic(self._scope.translator, parameter.display_logic, name_resolver)
        if display is not None:
            doc['displayLogicExpression'] = display

        kind = classify(parameter.reference_id)
        search_key = parameter.reference_search_key_id
        if kind == ReferenceKind.LIST:
            doc['refList'] = resolve_list_info(self._repository, search_key, language)
        elif kind in (ReferenceKind.SELECTOR, ReferenceKind.TREE_SELECTOR):
            doc['selector'] = resolve_selector_info(self._repository, parameter.id, search_key)
        elif kind == ReferenceKind.WINDOW_REFERENCE:
            window = self._referenced_window(parameter)
            if window is not None:
                doc['window'] = window
        return doc

    def _referenced_window(self, parameter: Parameter | ProcessParameter) -> dict[str, Any] | None:
        ref_window = self._repository.first(
            EntityKind.REF_WINDOW, lambda r: r.reference_id == parameter.reference_search_key_id,
        )
        if ref_window is None:
            logger.debug("Window reference parameter %s has no ref-window", parameter.id)
            return None
        from ui_metadata.assembly.window_assembler import WindowAssembler
        return WindowAssembler(self._scope).build(ref_window.window_id)

    @staticmethod
    def _parameter_name_resolver(parameters: list) -> NameResolver:
        names = {p.db_column_name.lower(): p.db_column_name for p in parameters}
        return lambda name: names.get(name.lower())

    # ── Field-launched processes ────────────────────────────────────────

    def bound_definition(self, column: Column) -> ProcessDefinition | None:
        """Process definition launched by a button column, if any.

        Raises:
            AssemblyError: If the column names a process definition that does not exist.
        """
        if column.process_definition_id is None:
            return None
        process = self._repository.get(EntityKind.PROCESS_DEFINITION, column.process_definition_id)
        if process is None:
            raise AssemblyError(
                f"Column {column.id} references unknown process definition {column.process_definition_id}"
            )
        return process

    def build_field_process(self, process_doc: dict[str, Any], field: Field, tab: Tab, column: Column) -> dict[str, Any]:
        """Decorate a process document with the button field that launches it."""
        language = self._scope.language
        process_doc['fieldId'] = field.id
        process_doc['columnId'] = column.id
        process_doc['displayLogic'] = field.display_logic
        expression = translate_logic(
            self._scope.translator,
            field.display_logic,
            column_name_resolver(self._repository, tab.table_id),
        )
        if expression is not None:
            process_doc['displayLogicExpression'] = expression
        process_doc['buttonText'] = translate(column, 'name', language)
        process_doc['fieldName'] = translate(field, 'name', language)
        process_doc['reference'] = column.reference_id
        return process_doc
