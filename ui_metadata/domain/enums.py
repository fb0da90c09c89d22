"""Domain enums for the metadata engine."""
from enum import Enum


class ReferenceKind(Enum):
    """What a field or parameter displays and submits."""
    PLAIN = "Plain"
    LIST = "List"
    SELECTOR = "Selector"
    TREE_SELECTOR = "TreeSelector"
    WINDOW_REFERENCE = "WindowReference"


class EntityKind(Enum):
    """Dictionary entity kinds addressable through the repository."""
    WINDOW = "Window"
    TAB = "Tab"
    TABLE = "Table"
    COLUMN = "Column"
    FIELD = "Field"
    REFERENCE = "Reference"
    LIST_VALUE = "ListValue"
    SELECTOR = "Selector"
    SELECTOR_FIELD = "SelectorField"
    DATASOURCE = "Datasource"
    DATASOURCE_FIELD = "DatasourceField"
    TREE_SELECTOR = "TreeSelector"
    REF_WINDOW = "RefWindow"
    PROCESS_DEFINITION = "ProcessDefinition"
    PARAMETER = "Parameter"
    REPORT_DEFINITION = "ReportDefinition"
    LEGACY_PROCESS = "LegacyProcess"
    PROCESS_PARAMETER = "ProcessParameter"
    MODEL_MAPPING = "ModelMapping"
    WINDOW_ACCESS = "WindowAccess"
    TAB_ACCESS = "TabAccess"
    FIELD_ACCESS = "FieldAccess"
    PROCESS_ACCESS = "ProcessAccess"
    ROLE = "Role"
    ROLE_ORGANIZATION = "RoleOrganization"
    ORGANIZATION = "Organization"
    WAREHOUSE = "Warehouse"
    USER = "User"
    USER_ROLE = "UserRole"
    LANGUAGE = "Language"
    MESSAGE = "Message"
    MENU_ENTRY = "MenuEntry"


class MenuEntryType(Enum):
    """Menu node kinds."""
    SUMMARY = "Summary"
    WINDOW = "Window"
    PROCESS = "Process"
    PROCESS_MANUAL = "ProcessManual"
    PROCESS_DEFINITION = "ProcessDefinition"
    REPORT = "Report"
    FORM = "Form"
    EXTERNAL = "External"
    VIEW = "View"


class DomainType(Enum):
    """Value domain of a selector field property."""
    PRIMITIVE = "primitive"
    BOOLEAN = "boolean"
    FOREIGN_KEY = "foreign_key"
