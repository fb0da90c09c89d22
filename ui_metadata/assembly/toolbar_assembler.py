"""Window toolbar: standard record actions plus process buttons."""

from __future__ import annotations

from typing import Any

from ui_metadata.assembly.labels_assembler import LabelsAssembler
from ui_metadata.assembly.navigation import window_tabs
from ui_metadata.assembly.process_assembler import ProcessAssembler
from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.assembly.window_assembler import WindowAssembler
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import Field, Tab
from ui_metadata.domain.translations import translate
from ui_metadata.errors import AssemblyError, NotFoundError

PROCESS_ACTION = 'PROCESS'

# (action id, label message, icon)
STANDARD_BUTTONS = (
    ('NEW', 'OBUIAPP_NewDoc', 'plus'),
    ('SAVE', 'OBUIAPP_SaveRow', 'save'),
    ('DELETE', 'OBUIAPP_DeleteRow', 'trash'),
    ('REFRESH', 'OBUIAPP_RefreshData', 'refresh-cw'),
    ('FIND', 'OBUIAPP_Find', 'search'),
    ('EXPORT', 'OBUIAPP_ExportGrid', 'download'),
    ('ATTACHMENTS', 'OBUIAPP_Attachments', 'paperclip'),
    ('GRID_VIEW', 'OBUIAPP_GridView', 'grid'),
)


class ToolbarAssembler:
    """Builds the toolbar of a window, optionally narrowed to one tab.

    Args:
        scope: Per-request collaborators.
    """

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope
        self._repository = scope.repository
        self._labels = LabelsAssembler(scope)
        self._processes = ProcessAssembler(scope)

    def build(self, window_id: str, tab_id: str | None = None, is_new: bool = False) -> dict[str, Any]:
        """Assemble ``{buttons, windowId, tabId, isNew}``.

        Raises:
            NotFoundError: If the window, or the given tab, does not exist.
            UnauthorizedError: If the role has no access to the window.
        """
        WindowAssembler(self._scope).authorize(window_id)

        if tab_id is None:
            tabs = [t for t in window_tabs(self._repository, window_id) if t.active]
        else:
            tab = self._repository.get(EntityKind.TAB, tab_id)
            if tab is None or tab.window_id != window_id:
                raise NotFoundError('Tab', tab_id)
            tabs = [tab]

        buttons = self.standard_buttons(is_new)
        for tab in tabs:
            buttons.extend(self.process_buttons(tab))
        return {'buttons': buttons, 'windowId': window_id, 'tabId': tab_id, 'isNew': is_new}

    def standard_buttons(self, is_new: bool = False) -> list[dict[str, Any]]:
        buttons = []
        for action, message, icon in STANDARD_BUTTONS:
            buttons.append({
                'id': action,
                'name': self._labels.label(message, default=message),
                'action': action,
                'enabled': not is_new if action == 'DELETE' else True,
                'visible': True,
                'icon': icon,
            })
        return buttons

    def process_buttons(self, tab: Tab) -> list[dict[str, Any]]:
        """One PROCESS button per active field whose column runs a process definition the role may launch."""
        language = self._scope.language
        buttons = []
        for field in self._repository.query(EntityKind.FIELD, lambda f: f.tab_id == tab.id and f.active):
            column = self._process_column(field)
            if column is None or not self._scope.has_process_access(column.process_definition_id):
                continue
            buttons.append({
                'id': field.name,
                'name': self._labels.label(field.name, default=field.name),
                'action': PROCESS_ACTION,
                'processId': column.process_definition_id,
                'processInfo': self._processes.build_definition(column.process_definition_id),
                'displayLogic': field.display_logic,
                'buttonText': translate(column, 'name', language),
                'tabId': tab.id,
            })
        return buttons

    def _process_column(self, field: Field):
        if field.column_id is None:
            return None
        column = self._repository.get(EntityKind.COLUMN, field.column_id)
        if column is None:
            raise AssemblyError(f"Field {field.id} references unknown column {field.column_id}")
        return column if self._processes.bound_definition(column) is not None else None
