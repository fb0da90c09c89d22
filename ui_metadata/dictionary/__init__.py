"""Dictionary collaborators: repository, snapshot loader, menu provider, legacy registry."""

from ui_metadata.dictionary.repository import DictionaryRepository, InMemoryDictionary
from ui_metadata.dictionary.loader import load_snapshot
from ui_metadata.dictionary.legacy_registry import LegacyProcessRegistry, StaticLegacyProcessRegistry
from ui_metadata.dictionary.menu_provider import DictionaryMenuProvider, MenuProvider

__all__ = [
    'DictionaryRepository',
    'InMemoryDictionary',
    'load_snapshot',
    'LegacyProcessRegistry',
    'StaticLegacyProcessRegistry',
    'DictionaryMenuProvider',
    'MenuProvider',
]
