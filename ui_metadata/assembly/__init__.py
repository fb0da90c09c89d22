"""Assemblers turning dictionary rows into UI metadata documents."""

from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.assembly.field_assembler import FieldAssembler, field_variant
from ui_metadata.assembly.process_assembler import ProcessAssembler
from ui_metadata.assembly.tab_assembler import TabAssembler
from ui_metadata.assembly.window_assembler import WindowAssembler
from ui_metadata.assembly.menu_assembler import MenuAssembler
from ui_metadata.assembly.labels_assembler import LabelsAssembler, LanguageAssembler
from ui_metadata.assembly.session_assembler import SessionAssembler
from ui_metadata.assembly.toolbar_assembler import ToolbarAssembler

__all__ = [
    'AssemblyScope',
    'FieldAssembler',
    'field_variant',
    'ProcessAssembler',
    'TabAssembler',
    'WindowAssembler',
    'MenuAssembler',
    'LabelsAssembler',
    'LanguageAssembler',
    'SessionAssembler',
    'ToolbarAssembler',
]
