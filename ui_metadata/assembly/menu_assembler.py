"""Menu documents, rendered depth-first from a provider's node tree."""

from __future__ import annotations

import logging
from typing import Any

from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.dictionary.menu_provider import DictionaryMenuProvider, MenuProvider
from ui_metadata.domain.constants import (
    ACTION_BUTTON_JAVA_URL,
    ACTION_BUTTON_URL,
    EXTERNAL_REPORT_SERVICE_TYPE,
    EXTERNAL_REPORT_URL,
    PROCESS_MENU_ACTION,
    SIMPLE_UI_PATTERN,
    STANDARD_UI_PATTERN,
)
from ui_metadata.domain.enums import EntityKind, MenuEntryType
from ui_metadata.domain.models import LegacyProcess, MenuNode
from ui_metadata.domain.translations import translate
from ui_metadata.errors import AssemblyError

logger = logging.getLogger(__name__)


class MenuAssembler:
    """Renders the role's menu tree.

    Args:
        scope: Per-request collaborators.
        provider: Source of the menu tree; defaults to one reading the
            scope's dictionary.
    """

    def __init__(self, scope: AssemblyScope, provider: MenuProvider | None = None) -> None:
        self._scope = scope
        self._repository = scope.repository
        self._provider = provider or DictionaryMenuProvider(scope.repository)

    def build(self, root: MenuNode | None = None) -> dict[str, Any]:
        """``{"menu": [...]}`` holding the children of ``root`` (the provider's tree when omitted)."""
        if root is None:
            root = self._provider.build_menu(self._scope.context)
        return {'menu': [self.build_node(child) for child in root.children]}

    def build_node(self, node: MenuNode) -> dict[str, Any]:
        language = self._scope.language
        doc: dict[str, Any] = {
            'id': node.id,
            'type': node.entry_type.value,
            'icon': translate(node, 'icon', language),
            'name': translate(node, 'name', language),
            'description': translate(node, 'description', language),
            'url': node.url,
            'action': node.action,
        }
        if node.window_id is not None:
            doc['windowId'] = node.window_id
        if node.process_id is not None:
            self._add_process(doc, node)
        if node.process_definition_id is not None:
            doc['processDefinitionId'] = node.process_definition_id
        if node.form_id is not None:
            doc['formId'] = node.form_id

        if node.children:
            doc['children'] = [self.build_node(child) for child in node.children]
        return doc

    # ── Process entries ─────────────────────────────────────────────────

    def _add_process(self, doc: dict[str, Any], node: MenuNode) -> None:
        process = self._repository.get(EntityKind.LEGACY_PROCESS, node.process_id)
        if process is None:
            raise AssemblyError(f"Menu entry {node.id} references unknown process {node.process_id}")

        url, entry_type, modal, report = self.process_target(process, node.action)
        doc['processId'] = process.id
        doc['processUrl'] = url
        doc['processType'] = (entry_type or node.entry_type).value
        doc['isModalProcess'] = modal
        doc['isReport'] = report

    def process_target(self, process: LegacyProcess,
                       action: str | None) -> tuple[str | None, MenuEntryType | None, bool, bool]:
        """Work out how the client opens a process menu entry.

        The default model mapping wins; without one, process actions fall back
        to the reporting service or the action-button responders.

        Returns:
            ``(url, entry type, modal, report)``; url and type are None for
            inactive processes or entries with nothing to open.
        """
        if not process.active:
            return None, None, False, False

        mapping = self._repository.first(
            EntityKind.MODEL_MAPPING, lambda m: m.process_id == process.id and m.default,
        )
        if mapping is not None:
            if process.ui_pattern == STANDARD_UI_PATTERN:
                return mapping.mapping_name, MenuEntryType.PROCESS, process.modal, False
            if process.report or process.jasper_report:
                return mapping.mapping_name, MenuEntryType.REPORT, False, True
            return mapping.mapping_name, MenuEntryType.PROCESS_MANUAL, False, False

        if action != PROCESS_MENU_ACTION:
            logger.debug("Process %s has no default mapping and action %r", process.id, action)
            return None, None, False, False

        if process.external_service and process.service_type == EXTERNAL_REPORT_SERVICE_TYPE:
            url = EXTERNAL_REPORT_URL.format(process_id=process.id)
        elif process.ui_pattern == SIMPLE_UI_PATTERN and not process.jasper_report and process.procedure is None:
            url = ACTION_BUTTON_JAVA_URL
        else:
            url = ACTION_BUTTON_URL
        return url, MenuEntryType.PROCESS, process.modal, False
