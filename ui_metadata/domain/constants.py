"""Shared constants: well-known dictionary ids, document keys, and regex patterns.

Centralizes identifiers that are shared across resolution and assembly
modules.
"""

import re

# ── Reference Identifiers ────────────────────────────────────────────────

LIST_REFERENCE_ID = '17'
TABLE_REFERENCE_ID = '18'
TABLE_DIR_REFERENCE_ID = '19'
BUTTON_REFERENCE_ID = '28'
SEARCH_REFERENCE_ID = '30'
SELECTOR_REFERENCE_ID = '95E2A8B50A254B2AAE6774B8C2F28120'
TREE_REFERENCE_ID = '8C57A4A2E05F4261A1FADF47C30398AD'
WINDOW_REFERENCE_ID = 'FF80818132D8F0F30132D9BC395D0038'

SELECTOR_REFERENCE_IDS = frozenset({
    TABLE_REFERENCE_ID,
    TABLE_DIR_REFERENCE_ID,
    SEARCH_REFERENCE_ID,
    SELECTOR_REFERENCE_ID,
})

# ── Selector Datasources ─────────────────────────────────────────────────

CUSTOM_QUERY_DATASOURCE = 'F8DD408F2F3A414188668836F84C21AF'
TREE_DATASOURCE = '90034CAE96E847D78FBEF6D38CB1930D'
SELECTOR_FILTER_CLASS = 'org.openbravo.userinterface.selector.SelectorDataSourceFilter'

# ── Selector Descriptor Keys ─────────────────────────────────────────────

DATASOURCE_PROPERTY = 'datasourceName'
SELECTOR_DEFINITION_PROPERTY = '_selectorDefinitionId'
FIELD_ID_PROPERTY = 'fieldId'
DISPLAY_FIELD_PROPERTY = 'displayField'
VALUE_FIELD_PROPERTY = 'valueField'
SORT_BY_PARAMETER = '_sortBy'
NO_COUNT_PARAMETER = '_noCount'
TEXT_MATCH_PARAMETER = '_textMatchStyle'
SELECTED_PROPERTIES_PARAMETER = '_selectedProperties'
EXTRA_PROPERTIES_PARAMETER = '_extraProperties'
TEXT_MATCH_SUBSTRING = 'substring'

IDENTIFIER = '_identifier'
ID = 'id'
FIELD_SEPARATOR = '$'

# ── Field Defaults ───────────────────────────────────────────────────────

DEFAULT_CHECK_ON_SAVE = True
DEFAULT_EDITABLE_FIELD = True
INPUT_NAME_PREFIX = 'inp'

# Button fields whose processes are still served by the legacy engine
LEGACY_PROCESS_FIELD_IDS = frozenset({'3663', '4242', '3670', '4248'})
LEGACY_PROCESS_PLACEHOLDER_NAME = 'Legacy Process Placeholder'

# ── Audit Fields ─────────────────────────────────────────────────────────

# db column name -> document key, in the order they are appended to a tab
AUDIT_COLUMNS = {
    'Created': 'creationDate',
    'CreatedBy': 'createdBy',
    'Updated': 'updated',
    'UpdatedBy': 'updatedBy',
}
AUDIT_GRID_KEYS = frozenset({'creationDate', 'updated'})
AUDIT_USER_KEYS = frozenset({'createdBy', 'updatedBy'})
AUDIT_USER_ENTITY = 'ADUser'
AUDIT_GRID_POSITION_START = 9000

# ── Menu ─────────────────────────────────────────────────────────────────

EXTERNAL_REPORT_SERVICE_TYPE = 'PS'
EXTERNAL_REPORT_URL = '/utility/OpenPentaho.html?inpadProcessId={process_id}'
ACTION_BUTTON_JAVA_URL = '/ad_actionButton/ActionButtonJava_Responser.html'
ACTION_BUTTON_URL = '/ad_actionButton/ActionButton_Responser.html'
PROCESS_MENU_ACTION = 'P'
STANDARD_UI_PATTERN = 'Standard'
SIMPLE_UI_PATTERN = 'S'

# ── Legacy Logic Expressions ─────────────────────────────────────────────

# Variables are @ColumnName@, @#ContextVar@ or @$SessionVar@
LOGIC_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<variable>@[#$]?[A-Za-z_][\w.]*@)
    | (?P<string>'[^']*'|"[^"]*")
    | (?P<number>-?\d+(?:\.\d+)?)
    | (?P<operator><>|!=|<=|>=|=|!|<|>|&|\|)
    | (?P<paren>[()])
    | (?P<literal>[A-Za-z_]\w*)
    """,
    re.VERBOSE,
)
