"""Tests for field documents."""

import pytest

from ui_metadata.assembly.field_assembler import (
    ColumnBoundField,
    ColumnLessField,
    FieldAssembler,
    field_variant,
    input_name,
)
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import Column, Field, FieldAccess, Tab
from ui_metadata.errors import AssemblyError


def build_field(scope, field_id, access=None):
    field = scope.repository.get(EntityKind.FIELD, field_id)
    return FieldAssembler(scope).build(field_variant(scope.repository, field, access))


class TestFieldVariant:

    def test_column_bound(self, dictionary):
        variant = field_variant(dictionary, dictionary.get(EntityKind.FIELD, 'F_DOCSTATUS'))
        assert isinstance(variant, ColumnBoundField)
        assert variant.column.id == 'C_DOCSTATUS'
        assert variant.table.name == 'Order'

    def test_column_less(self, dictionary):
        variant = field_variant(dictionary, dictionary.get(EntityKind.FIELD, 'F_NOTE'))
        assert isinstance(variant, ColumnLessField)
        assert FieldAssembler.document_key(variant) == 'note'

    def test_missing_column_fails(self, dictionary):
        with pytest.raises(AssemblyError, match='NOPE'):
            field_variant(dictionary, Field(id='F_X', tab_id='T0', name='Broken', column_id='NOPE'))

    def test_missing_tab_fails(self, dictionary):
        with pytest.raises(AssemblyError):
            field_variant(dictionary, Field(id='F_X', tab_id='NOPE', name='Orphan'))

    def test_missing_column_table_fails(self, dictionary):
        dictionary.add(Column(id='C_LOST', table_id='GONE', db_column_name='Lost', name='Lost',
                              property_name='lost'))
        with pytest.raises(AssemblyError, match='GONE'):
            field_variant(dictionary, Field(id='F_X', tab_id='T0', name='Lost', column_id='C_LOST'))


class TestInputName:

    def test_input_names(self):
        assert input_name(Column(id='C', table_id='T', db_column_name='C_BPartner_ID', name='x')) == 'inpcBpartnerId'
        assert input_name(Column(id='C', table_id='T', db_column_name='DocStatus', name='x')) == 'inpdocstatus'


class TestColumnBoundField:

    def test_list_field(self, scope):
        doc = build_field(scope, 'F_DOCSTATUS')
        assert doc['id'] == 'F_DOCSTATUS'
        assert doc['hqlName'] == 'documentStatus'
        assert doc['columnName'] == 'DocStatus'
        assert doc['inputName'] == 'inpdocstatus'
        assert doc['isMandatory'] is True
        assert doc['updatable'] is False
        assert doc['checkOnSave'] is True
        assert doc['isEditable'] is True
        assert doc['isReadOnly'] is False
        assert doc['isParentRecordProperty'] is False
        assert doc['column']['dbColumnName'] == 'DocStatus'
        assert [v['value'] for v in doc['refList']] == ['DR', 'CO']
        assert 'selector' not in doc

    def test_logic_expressions(self, scope):
        doc = build_field(scope, 'F_DOCSTATUS')
        assert doc['displayLogicExpression'] == (
            "currentValues['documentStatus'] === 'DR' && context['#IsAdmin'] === 'Y'"
        )
        assert doc['readOnlyLogicExpression'] == "currentValues['processed'] === 'Y'"

    def test_no_logic_no_expression_keys(self, scope):
        doc = build_field(scope, 'F_LINE_QTY')
        assert 'displayLogicExpression' not in doc
        assert 'readOnlyLogicExpression' not in doc

    def test_selector_field_and_referenced_entity(self, scope):
        doc = build_field(scope, 'F_BPARTNER')
        assert doc['selector']['_selectorDefinitionId'] == 'S_BP'
        assert doc['selector']['fieldId'] == 'F_BPARTNER'
        assert doc['referencedEntity'] == 'BusinessPartner'
        assert doc['referencedWindowId'] == 'W2'
        assert doc['referencedTabId'] == 'T_BP'
        assert doc['isReferencedWindowAccessible'] is False

    def test_parent_record_property(self, scope):
        doc = build_field(scope, 'F_LINE_ORDER')
        assert doc['isParentRecordProperty'] is True
        assert doc['referencedEntity'] == 'Order'
        assert doc['referencedWindowId'] == 'W1'
        assert doc['isReferencedWindowAccessible'] is True

    def test_button_with_process_definition(self, scope):
        doc = build_field(scope, 'F_DOCACTION')
        process = doc['processDefinition']
        assert process['id'] == 'PD1'
        assert process['fieldId'] == 'F_DOCACTION'
        assert process['columnId'] == 'C_DOCACTION'
        assert process['displayLogic'] == "@Processed@='N'"
        assert process['displayLogicExpression'] == "currentValues['processed'] === 'N'"
        assert process['buttonText'] == 'Post'
        assert process['reference'] == '28'
        assert [p['dbColumnName'] for p in process['parameters']] == ['DateAcct', 'DocStatus']
        assert [v['value'] for v in doc['buttonRefList']] == ['PO']
        assert 'processAction' not in doc

    def test_button_text_translated(self, make_scope):
        doc = build_field(make_scope(language='es_ES'), 'F_DOCACTION')
        assert doc['processDefinition']['buttonText'] == 'Contabilizar'

    def test_legacy_process_from_column(self, scope):
        scope.repository.add(Column(id='C_PRINT', table_id='Order', db_column_name='Print', name='Print',
                                    property_name='print', reference_id='28', legacy_process_id='LP1'))
        scope.repository.add(Field(id='F_PRINT', tab_id='T0', name='Print', column_id='C_PRINT'))
        doc = build_field(scope, 'F_PRINT')
        action = doc['processAction']
        assert action['id'] == 'LP1'
        assert list(action['parameters']) == ['C_Order_ID', 'C_BPartner_ID']
        assert action['fieldId'] == 'F_PRINT'
        assert 'processDefinition' not in doc

    def test_legacy_registry_field(self, scope):
        scope.repository.add(Field(id='3663', tab_id='T0', name='Legacy', column_id='C_PROCESSED'))
        doc = build_field(scope, '3663')
        assert doc['processAction']['name'] == 'Legacy Process Placeholder'
        assert doc['processAction']['parameters'] == {}

    def test_unknown_legacy_process_fails(self, scope):
        scope.repository.add(Column(id='C_BAD', table_id='Order', db_column_name='Bad', name='Bad',
                                    property_name='bad', legacy_process_id='NOPE'))
        scope.repository.add(Field(id='F_BAD', tab_id='T0', name='Bad', column_id='C_BAD'))
        with pytest.raises(AssemblyError):
            build_field(scope, 'F_BAD')

    def test_unknown_process_definition_fails(self, scope):
        scope.repository.add(Column(id='C_BAD', table_id='Order', db_column_name='Bad', name='Bad',
                                    property_name='bad', reference_id='28', process_definition_id='NOPE'))
        scope.repository.add(Field(id='F_BAD', tab_id='T0', name='Bad', column_id='C_BAD'))
        with pytest.raises(AssemblyError, match='NOPE'):
            build_field(scope, 'F_BAD')

    def test_unknown_referenced_table_fails(self, scope):
        scope.repository.add(Column(id='C_REF', table_id='Order', db_column_name='Ref', name='Ref',
                                    property_name='ref', referenced_table_id='GONE'))
        scope.repository.add(Field(id='F_REF', tab_id='T0', name='Ref', column_id='C_REF'))
        with pytest.raises(AssemblyError, match='GONE'):
            build_field(scope, 'F_REF')

    def test_referenced_tab_prefers_active_tab(self, scope):
        scope.repository.add(Tab(id='T_BP', window_id='W2', table_id='BPartner', name='Partner', active=False))
        scope.repository.add(Tab(id='T_BP_NEW', window_id='W2', table_id='BPartner', name='Partner'))
        assert build_field(scope, 'F_BPARTNER')['referencedTabId'] == 'T_BP_NEW'

    def test_referenced_tab_falls_back_to_inactive_tab(self, scope):
        scope.repository.add(Tab(id='T_BP', window_id='W2', table_id='BPartner', name='Partner', active=False))
        assert build_field(scope, 'F_BPARTNER')['referencedTabId'] == 'T_BP'

    def test_field_access_overrides(self, scope):
        access = FieldAccess(id='FA', tab_access_id='TA', field_id='F_DOCSTATUS',
                             editable_field=False, check_on_save=False)
        doc = build_field(scope, 'F_DOCSTATUS', access)
        assert doc['isEditable'] is False
        assert doc['isReadOnly'] is True
        assert doc['checkOnSave'] is False


class TestColumnLessField:

    def test_column_less_document(self, scope):
        doc = build_field(scope, 'F_NOTE')
        assert doc['hqlName'] == 'note'
        assert doc['updatable'] is True
        assert 'columnName' not in doc
        assert 'column' not in doc
