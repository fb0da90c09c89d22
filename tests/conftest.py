"""Shared test fixtures."""

import json

import pytest

from ui_metadata.assembly import AssemblyScope
from ui_metadata.config import AssemblyOptions, MetadataContext
from ui_metadata.dictionary import InMemoryDictionary
from ui_metadata.domain.constants import (
    BUTTON_REFERENCE_ID,
    LIST_REFERENCE_ID,
    SEARCH_REFERENCE_ID,
    TREE_REFERENCE_ID,
    WINDOW_REFERENCE_ID,
)
from ui_metadata.domain.enums import DomainType
from ui_metadata.domain.models import (
    Column,
    Field,
    Language,
    LegacyProcess,
    ListValue,
    MenuEntry,
    Message,
    ModelMapping,
    Organization,
    Parameter,
    ProcessDefinition,
    ProcessAccess,
    ProcessParameter,
    RefWindow,
    ReportDefinition,
    Role,
    RoleOrganization,
    Selector,
    SelectorField,
    Tab,
    Table,
    TreeSelector,
    User,
    UserRole,
    Warehouse,
    Window,
    WindowAccess,
)


# ── Sales Order Dictionary ───────────────────────────────────────────────
#
# W1 "Sales Order": T0 (level 0, Order) and T1 (level 1, OrderLine, linked
# to its parent through order_id -> orderId). Role R can open W1 and has no
# tab grants and may launch PD1 and PD_PICK; role R2 can open nothing.

def sales_order_entities() -> list:
    return [
        # Windows and tables
        Window(id='W1', name='Sales Order', translations={'es_ES': {'name': 'Pedido de venta'}}),
        Window(id='W2', name='Business Partner'),
        Table(id='Order', name='Order', db_table_name='C_Order'),
        Table(id='OrderLine', name='OrderLine', db_table_name='C_OrderLine'),
        Table(id='BPartner', name='BusinessPartner', db_table_name='C_BPartner'),

        # Order columns
        Column(id='C_ORDER_ID', table_id='Order', db_column_name='C_Order_ID', name='Order',
               property_name='id'),
        Column(id='C_DOCSTATUS', table_id='Order', db_column_name='DocStatus', name='Document Status',
               property_name='documentStatus', mandatory=True, updatable=False,
               reference_id=LIST_REFERENCE_ID, reference_search_key_id='REF_DOCSTATUS',
               read_only_logic="@Processed@='Y'"),
        Column(id='C_BPARTNER', table_id='Order', db_column_name='C_BPartner_ID', name='Business Partner',
               property_name='businessPartner', reference_id=SEARCH_REFERENCE_ID,
               reference_search_key_id='REF_BPARTNER', referenced_table_id='BPartner'),
        Column(id='C_DOCACTION', table_id='Order', db_column_name='DocAction', name='Post',
               property_name='documentAction', reference_id=BUTTON_REFERENCE_ID,
               reference_search_key_id='REF_DOCACTION', process_definition_id='PD1',
               translations={'es_ES': {'name': 'Contabilizar'}}),
        Column(id='C_PROCESSED', table_id='Order', db_column_name='Processed', name='Processed',
               property_name='processed'),
        Column(id='C_CREATED', table_id='Order', db_column_name='Created', name='Creation Date',
               property_name='creationDate'),
        Column(id='C_CREATEDBY', table_id='Order', db_column_name='CreatedBy', name='Created By',
               property_name='createdBy', mandatory=True),

        # OrderLine columns
        Column(id='C_LINE_ORDER', table_id='OrderLine', db_column_name='C_Order_ID', name='Order',
               property_name='orderId', link_to_parent=True, referenced_table_id='Order'),
        Column(id='C_LINE_QTY', table_id='OrderLine', db_column_name='QtyOrdered', name='Quantity',
               property_name='orderedQuantity'),

        # Tabs and fields
        Tab(id='T0', window_id='W1', table_id='Order', name='Header', tab_level=0, sequence=10),
        Tab(id='T1', window_id='W1', table_id='OrderLine', name='Lines', tab_level=1, sequence=20,
            filter_clause='e.active = true', display_logic="@DocStatus@!'VO'"),
        Tab(id='T_BP', window_id='W2', table_id='BPartner', name='Partner'),
        Field(id='F_DOCSTATUS', tab_id='T0', name='Document Status', column_id='C_DOCSTATUS',
              display_logic="@DocStatus@='DR' & @#IsAdmin@=Y"),
        Field(id='F_BPARTNER', tab_id='T0', name='Business Partner', column_id='C_BPARTNER'),
        Field(id='F_DOCACTION', tab_id='T0', name='Post', column_id='C_DOCACTION',
              display_logic="@Processed@='N'"),
        Field(id='F_NOTE', tab_id='T0', name='note'),
        Field(id='F_INACTIVE', tab_id='T0', name='Old', column_id='C_PROCESSED', active=False),
        Field(id='F_LINE_ORDER', tab_id='T1', name='Order', column_id='C_LINE_ORDER'),
        Field(id='F_LINE_QTY', tab_id='T1', name='Quantity', column_id='C_LINE_QTY'),

        # Document status list
        ListValue(id='LV_DR', reference_id='REF_DOCSTATUS', search_key='DR', name='Draft',
                  translations={'es_ES': {'name': 'Borrador'}}),
        ListValue(id='LV_CO', reference_id='REF_DOCSTATUS', search_key='CO', name='Completed', color='green'),
        ListValue(id='LV_PROCESS', reference_id='REF_DOCACTION', search_key='PO', name='Post'),

        # Business partner selector
        Selector(id='S_BP', reference_id='REF_BPARTNER', table_id='BPartner', display_field_id='SF_NAME'),
        SelectorField(id='SF_NAME', selector_id='S_BP', property='name', search_in_suggestion_box=True,
                      outfield=True, sequence=10),
        SelectorField(id='SF_CATEGORY', selector_id='S_BP', property='category',
                      domain_type=DomainType.FOREIGN_KEY.value, search_in_suggestion_box=True, sequence=20),
        SelectorField(id='SF_VENDOR', selector_id='S_BP', property='vendor',
                      domain_type=DomainType.BOOLEAN.value, search_in_suggestion_box=True, sequence=30),
        SelectorField(id='SF_CITY', selector_id='S_BP', property='location.city', sequence=40),

        # Tree selector
        TreeSelector(id='TS_ACCOUNT', reference_id='REF_ACCOUNT_TREE', display_property='name'),

        # Process definition posted from the DocAction button
        ProcessDefinition(id='PD1', name='Post Order', search_key='POST_ORDER', on_load='onLoadPost'),
        Parameter(id='P_STATUS', process_id='PD1', name='Status', db_column_name='DocStatus',
                  reference_id=LIST_REFERENCE_ID, reference_search_key_id='REF_DOCSTATUS', sequence=20,
                  display_logic="@DateAcct@!''"),
        Parameter(id='P_DATE', process_id='PD1', name='Accounting Date', db_column_name='DateAcct',
                  sequence=10, mandatory=True),
        Parameter(id='P_INACTIVE', process_id='PD1', name='Unused', db_column_name='Unused', active=False),
        ReportDefinition(id='RD1', process_definition_id='PD1', pdf_template='post.jrxml'),

        # Process definition picking orders from the W1 window
        ProcessDefinition(id='PD_PICK', name='Pick Orders'),
        Parameter(id='P_ORDERS', process_id='PD_PICK', name='Orders', db_column_name='Orders',
                  reference_id=WINDOW_REFERENCE_ID, reference_search_key_id='REF_ORDER_WINDOW'),
        Parameter(id='P_ACCOUNT', process_id='PD_PICK', name='Account', db_column_name='Account_ID',
                  reference_id=TREE_REFERENCE_ID, reference_search_key_id='REF_ACCOUNT_TREE', sequence=20),
        RefWindow(id='RW1', reference_id='REF_ORDER_WINDOW', window_id='W1'),

        # Legacy report
        LegacyProcess(id='LP1', name='Print Order', report=True),
        ProcessParameter(id='PP_ORDER', process_id='LP1', name='Order', db_column_name='C_Order_ID',
                         sequence=10, is_range=True),
        ProcessParameter(id='PP_PARTNER', process_id='LP1', name='Partner', db_column_name='C_BPartner_ID',
                         reference_id=SEARCH_REFERENCE_ID, reference_search_key_id='REF_BPARTNER', sequence=20),
        ModelMapping(id='MM1', process_id='LP1', mapping_name='/reports/PrintOrder.html', default=True),
        LegacyProcess(id='LP_PS', name='Sales Dashboard', external_service=True, service_type='PS'),

        # Security
        Role(id='R', name='Sales Role'),
        Role(id='R2', name='Guest'),
        WindowAccess(id='WA1', role_id='R', window_id='W1'),
        ProcessAccess(id='PA1', role_id='R', process_definition_id='PD1'),
        ProcessAccess(id='PA2', role_id='R', process_definition_id='PD_PICK'),
        User(id='U1', name='Alice', username='alice'),
        UserRole(id='UR1', user_id='U1', role_id='R'),
        UserRole(id='UR2', user_id='U1', role_id='R2'),
        Organization(id='ORG1', name='Main'),
        Warehouse(id='WH1', organization_id='ORG1', name='Central'),
        Warehouse(id='WH2', organization_id='ORG1', name='Closed', active=False),
        RoleOrganization(id='RO1', role_id='R', organization_id='ORG1'),

        # Languages and labels
        Language(id='L_EN', language='en_US', name='English (USA)', system_language=True, base_language=True),
        Language(id='L_ES', language='es_ES', name='Español (España)', system_language=True),
        Language(id='L_FR', language='fr_FR', name='Français'),
        Message(id='MSG_NEW', search_key='OBUIAPP_NewDoc', text='New', translations={'es_ES': {'text': 'Nuevo'}}),
        Message(id='MSG_SAVE', search_key='OBUIAPP_SaveRow', text='Save'),

        # Menu
        MenuEntry(id='M_SALES', name='Sales', parent_id='0', summary_level=True, sequence=10),
        MenuEntry(id='M_ORDER', name='Sales Order', parent_id='M_SALES', action='W', window_id='W1', sequence=10),
        MenuEntry(id='M_PARTNER', name='Business Partner', parent_id='M_SALES', action='W', window_id='W2',
                  sequence=20),
        MenuEntry(id='M_PRINT', name='Print Order', parent_id='M_SALES', action='R', process_id='LP1', sequence=30),
        MenuEntry(id='M_EMPTY', name='Empty Folder', parent_id='0', summary_level=True, sequence=20),
    ]


@pytest.fixture
def dictionary():
    """In-memory sales order dictionary."""
    return InMemoryDictionary(sales_order_entities())


@pytest.fixture
def context():
    return MetadataContext(role_id='R', role_name='Sales Role')


@pytest.fixture
def scope(dictionary, context):
    """Assembly scope for role R in the base language."""
    return AssemblyScope(repository=dictionary, context=context)


@pytest.fixture
def make_scope(dictionary):
    """Factory for scopes with another role, language, user, or options."""
    def _make(role_id='R', role_name='Sales Role', language='en_US', user_id=None, **options):
        context = MetadataContext(role_id=role_id, role_name=role_name, language=language, user_id=user_id)
        return AssemblyScope(
            repository=dictionary,
            context=context,
            options=AssemblyOptions(language=language, **options),
        )
    return _make


@pytest.fixture
def snapshot_file(tmp_path):
    """Minimal JSON snapshot with one window, one tab and a grant for role R."""
    data = {
        'Window': [{'id': 'W1', 'name': 'Sales Order'}],
        'Table': [{'id': 'Order', 'name': 'Order'}],
        'Column': [
            {'id': 'C1', 'table_id': 'Order', 'db_column_name': 'DocumentNo', 'name': 'Document No',
             'property_name': 'documentNo'},
        ],
        'Tab': [{'id': 'T0', 'window_id': 'W1', 'table_id': 'Order', 'name': 'Header'}],
        'Field': [{'id': 'F1', 'tab_id': 'T0', 'name': 'Document No', 'column_id': 'C1'}],
        'Role': [{'id': 'R', 'name': 'Sales Role'}],
        'WindowAccess': [{'id': 'WA1', 'role_id': 'R', 'window_id': 'W1'}],
        'Message': [{'id': 'MSG1', 'search_key': 'OBUIAPP_NewDoc', 'text': 'New',
                     'translations': {'es_ES': {'text': 'Nuevo'}}}],
    }
    path = tmp_path / 'dictionary.json'
    path.write_text(json.dumps(data), encoding='utf-8')
    return str(path)
