"""Tests for the dictionary menu provider."""

from ui_metadata.config import MetadataContext
from ui_metadata.dictionary import DictionaryMenuProvider
from ui_metadata.domain.enums import MenuEntryType
from ui_metadata.domain.models import MenuEntry, WindowAccess


class TestDictionaryMenuProvider:

    def test_tree_for_role(self, dictionary, context):
        root = DictionaryMenuProvider(dictionary).build_menu(context)
        assert root.id == '0'
        assert [n.id for n in root.children] == ['M_SALES']
        assert [n.id for n in root.children[0].children] == ['M_ORDER', 'M_PRINT']
        assert root.children[0].children[0].is_leaf

    def test_window_grants_filter_entries(self, dictionary):
        dictionary.add(WindowAccess(id='WA2', role_id='R2', window_id='W2'))
        root = DictionaryMenuProvider(dictionary).build_menu(MetadataContext(role_id='R2'))
        assert [n.id for n in root.children[0].children] == ['M_PARTNER', 'M_PRINT']

    def test_empty_summaries_dropped(self, dictionary, context):
        root = DictionaryMenuProvider(dictionary).build_menu(context)
        assert 'M_EMPTY' not in [n.id for n in root.children]

    def test_children_sorted_by_sequence(self, dictionary, context):
        dictionary.add(MenuEntry(id='M_FIRST', name='First', parent_id='M_SALES', action='X', form_id='F',
                                 sequence=5))
        root = DictionaryMenuProvider(dictionary).build_menu(context)
        assert root.children[0].children[0].id == 'M_FIRST'

    def test_entry_types(self):
        entry_type = DictionaryMenuProvider.entry_type
        assert entry_type(MenuEntry(id='1', name='s', summary_level=True)) == MenuEntryType.SUMMARY
        assert entry_type(MenuEntry(id='2', name='pd', process_definition_id='PD')) == \
            MenuEntryType.PROCESS_DEFINITION
        assert entry_type(MenuEntry(id='3', name='p', action='P')) == MenuEntryType.PROCESS
        assert entry_type(MenuEntry(id='4', name='w', window_id='W')) == MenuEntryType.WINDOW
        assert entry_type(MenuEntry(id='5', name='u', url='https://example.com')) == MenuEntryType.EXTERNAL
        assert entry_type(MenuEntry(id='6', name='v')) == MenuEntryType.VIEW
