"""Window documents: the top-level entry point of metadata assembly."""

from __future__ import annotations

import logging
from typing import Any

from ui_metadata.assembly.navigation import window_tabs
from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.assembly.tab_assembler import TabAssembler
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import Tab, TabAccess, Window, WindowAccess
from ui_metadata.errors import AssemblyError, NotFoundError, UnauthorizedError
from ui_metadata.resolution.projection import project

logger = logging.getLogger(__name__)


class WindowAssembler:
    """Resolves role access to a window and assembles its authorized tabs.

    Args:
        scope: Per-request collaborators.
    """

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope
        self._repository = scope.repository

    def build(self, window_id: str) -> dict[str, Any]:
        """Assemble a window document.

        Raises:
            NotFoundError: If the window does not exist.
            UnauthorizedError: If the current role has no active grant for it.
            AssemblyError: If window references loop back to a window being assembled.
        """
        window, access = self.authorize(window_id)

        in_progress = self._scope.windows_in_progress
        if window_id in in_progress:
            raise AssemblyError(
                f"Window reference cycle: {' -> '.join(in_progress + [window_id])}"
            )

        in_progress.append(window_id)
        try:
            tabs = TabAssembler(self._scope)
            doc = project(window, self._scope.language)
            doc['tabs'] = [tabs.build(tab, tab_access) for tab, tab_access in self.authorized_tabs(window, access)]
        finally:
            in_progress.pop()

        logger.debug("Assembled window %s with %d tabs", window_id, len(doc['tabs']))
        return doc

    def authorize(self, window_id: str) -> tuple[Window, WindowAccess]:
        """Return the window and the current role's grant for it."""
        window = self._repository.get(EntityKind.WINDOW, window_id)
        if window is None:
            raise NotFoundError('Window', window_id)

        access = self._scope.window_access(window_id)
        if access is None:
            context = self._scope.context
            raise UnauthorizedError(context.role_name or context.role_id, window_id)
        return window, access

    def authorized_tabs(self, window: Window,
                        access: WindowAccess) -> list[tuple[Tab, TabAccess | None]]:
        """Tabs visible through ``access``, in window order.

        Tab grants, when the window grant has any, select exactly the active,
        readable ones; otherwise every active tab of the window is visible.
        """
        tabs = window_tabs(self._repository, window.id)
        tab_accesses = self._repository.query(EntityKind.TAB_ACCESS, lambda a: a.window_access_id == access.id)

        if not tab_accesses:
            return [(tab, None) for tab in tabs if tab.active]

        granted: dict[str, TabAccess] = {}
        for tab_access in tab_accesses:
            if not (tab_access.active and tab_access.allow_read):
                continue
            if self._repository.get(EntityKind.TAB, tab_access.tab_id) is None:
                raise AssemblyError(f"Tab access {tab_access.id} references unknown tab {tab_access.tab_id}")
            granted.setdefault(tab_access.tab_id, tab_access)

        return [(tab, granted[tab.id]) for tab in tabs if tab.id in granted]
