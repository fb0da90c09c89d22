"""Tab ordering and parent-tab lookup within a window."""

from ui_metadata.dictionary.repository import DictionaryRepository
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import Tab


def window_tabs(repository: DictionaryRepository, window_id: str) -> list[Tab]:
    """Tabs of a window in sequence order (ties keep dictionary order)."""
    return sorted(repository.query(EntityKind.TAB, lambda t: t.window_id == window_id),
                  key=lambda t: t.sequence)


def parent_tab(repository: DictionaryRepository, tab: Tab) -> Tab | None:
    """Nearest preceding tab of the same window one level up, if any."""
    if tab.tab_level <= 0:
        return None
    tabs = window_tabs(repository, tab.window_id)
    position = next((i for i, t in enumerate(tabs) if t.id == tab.id), None)
    if position is None:
        return None
    for candidate in reversed(tabs[:position]):
        if candidate.tab_level == tab.tab_level - 1:
            return candidate
    return None
