"""Read-only dictionary entity snapshots.

Entities reference their owners and related entities by id; ordered child
collections are whatever the repository returns for an owner-id query.
Translatable properties are listed in ``TRANSLATABLE`` and their per-language
text lives in ``translations`` as ``{language: {property: text}}``.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from ui_metadata.domain.enums import EntityKind, MenuEntryType

Translations = dict[str, dict[str, str]]


# ── Windows, Tabs, Fields ───────────────────────────────────────────────


@dataclass(frozen=True)
class Window:
    """A window: the top-level unit of UI metadata."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description', 'help')

    id: str
    name: str
    description: str | None = None
    help: str | None = None
    window_type: str = 'M'
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class Tab:
    """A tab of a window, bound to one table."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description')

    id: str
    window_id: str
    table_id: str
    name: str
    tab_level: int = 0
    sequence: int = 10
    filter_clause: str | None = None
    display_logic: str | None = None
    description: str | None = None
    ui_pattern: str = 'STD'
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class Table:
    """A dictionary table; ``name`` is its entity name."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    name: str
    db_table_name: str | None = None
    data_origin: str = 'Table'
    active: bool = True


@dataclass(frozen=True)
class Column:
    """A table column and the entity property it maps to."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name',)

    id: str
    table_id: str
    db_column_name: str
    name: str
    property_name: str | None = None
    mandatory: bool = False
    updatable: bool = True
    link_to_parent: bool = False
    reference_id: str | None = None
    reference_search_key_id: str | None = None
    process_definition_id: str | None = None
    legacy_process_id: str | None = None
    read_only_logic: str | None = None
    referenced_table_id: str | None = None
    length: int | None = None
    default_value: str | None = None
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class Field:
    """A tab field, optionally bound to a column."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description', 'help')

    id: str
    tab_id: str
    name: str
    column_id: str | None = None
    read_only: bool = False
    display_logic: str | None = None
    displayed: bool = True
    show_in_grid: bool = True
    grid_position: int | None = None
    sequence: int | None = None
    description: str | None = None
    help: str | None = None
    active: bool = True
    translations: Translations = field(default_factory=dict)


# ── References ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Reference:
    """A reference: the discriminant of what a column displays."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name',)

    id: str
    name: str
    parent_reference_id: str | None = None
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class ListValue:
    """One option of a list reference."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'color')

    id: str
    reference_id: str
    search_key: str
    name: str
    color: str | None = None
    sequence: int = 10
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class Selector:
    """A searchable lookup definition attached to a reference."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    reference_id: str
    table_id: str | None = None
    datasource_id: str | None = None
    custom_query: bool = False
    display_field_id: str | None = None
    value_field_id: str | None = None
    suggestion_text_match_style: str = 'startsWith'
    active: bool = True


@dataclass(frozen=True)
class SelectorField:
    """A property shown or searched by a selector.

    ``domain_type`` holds a :class:`DomainType` value, or None when the
    property domain is unknown.
    """

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    selector_id: str
    property: str | None = None
    display_column_alias: str | None = None
    datasource_field_id: str | None = None
    domain_type: str | None = None
    search_in_suggestion_box: bool = False
    outfield: bool = False
    sequence: int = 10
    active: bool = True


@dataclass(frozen=True)
class Datasource:
    """A custom selector datasource, optionally backed by a table."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    name: str
    table_id: str | None = None


@dataclass(frozen=True)
class DatasourceField:
    """A field exposed by a custom datasource."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    datasource_id: str
    name: str


@dataclass(frozen=True)
class TreeSelector:
    """A hierarchical lookup attached to a reference."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    reference_id: str
    value_property: str = 'id'
    display_property: str | None = None


@dataclass(frozen=True)
class RefWindow:
    """Links a window-reference to the window it opens."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    reference_id: str
    window_id: str


# ── Processes ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ProcessDefinition:
    """A new-style process definition."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description', 'help')

    id: str
    name: str
    search_key: str | None = None
    description: str | None = None
    help: str | None = None
    ui_pattern: str = 'A'
    java_class_name: str | None = None
    on_load: str | None = None
    on_process: str | None = None
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class Parameter:
    """A parameter of a new-style process definition."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description', 'help')

    id: str
    process_id: str
    name: str
    db_column_name: str
    reference_id: str | None = None
    reference_search_key_id: str | None = None
    sequence: int = 10
    mandatory: bool = False
    default_value: str | None = None
    read_only_logic: str | None = None
    display_logic: str | None = None
    description: str | None = None
    help: str | None = None
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class ReportDefinition:
    """Report templates attached to a process definition."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    process_definition_id: str
    pdf_template: str | None = None
    xls_template: str | None = None
    html_template: str | None = None
    use_pdf_as_xls_template: bool = False
    use_pdf_as_html_template: bool = False


@dataclass(frozen=True)
class LegacyProcess:
    """A legacy report or process."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description', 'help')

    id: str
    name: str
    search_key: str | None = None
    description: str | None = None
    help: str | None = None
    ui_pattern: str = 'S'
    report: bool = False
    jasper_report: bool = False
    external_service: bool = False
    service_type: str | None = None
    procedure: str | None = None
    java_class_name: str | None = None
    modal: bool = True
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessParameter:
    """A parameter of a legacy report or process."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description', 'help')

    id: str
    process_id: str
    name: str
    db_column_name: str
    reference_id: str | None = None
    reference_search_key_id: str | None = None
    sequence: int = 10
    mandatory: bool = False
    is_range: bool = False
    value_format: str | None = None
    min_value: str | None = None
    max_value: str | None = None
    default_value: str | None = None
    read_only_logic: str | None = None
    display_logic: str | None = None
    description: str | None = None
    help: str | None = None
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class ModelMapping:
    """Model-implementation mapping (URL) of a legacy process."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    process_id: str
    mapping_name: str
    default: bool = False


# ── Access Grants ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class WindowAccess:
    """Grants a role access to a window."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    role_id: str
    window_id: str
    active: bool = True
    allow_read: bool = True
    editable_field: bool = True


@dataclass(frozen=True)
class TabAccess:
    """Restricts a window grant to a tab."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    window_access_id: str
    tab_id: str
    active: bool = True
    allow_read: bool = True
    editable_field: bool = True


@dataclass(frozen=True)
class FieldAccess:
    """Restricts a tab grant to a field."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    tab_access_id: str
    field_id: str
    active: bool = True
    editable_field: bool = True
    check_on_save: bool = True


@dataclass(frozen=True)
class ProcessAccess:
    """Grants a role access to a process definition launched from a button."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    role_id: str
    process_definition_id: str
    active: bool = True


# ── Security Principals ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Role:
    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description')

    id: str
    name: str
    description: str | None = None
    client_id: str | None = None
    manual: bool = True
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class RoleOrganization:
    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    role_id: str
    organization_id: str
    active: bool = True


@dataclass(frozen=True)
class Organization:
    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    name: str
    search_key: str | None = None
    active: bool = True


@dataclass(frozen=True)
class Warehouse:
    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    organization_id: str
    name: str
    search_key: str | None = None
    active: bool = True


@dataclass(frozen=True)
class User:
    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    name: str
    username: str | None = None
    email: str | None = None
    default_role_id: str | None = None
    default_language: str | None = None
    active: bool = True


@dataclass(frozen=True)
class UserRole:
    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    user_id: str
    role_id: str
    active: bool = True


# ── Languages, Labels, Menu ─────────────────────────────────────────────


@dataclass(frozen=True)
class Language:
    TRANSLATABLE: ClassVar[tuple[str, ...]] = ()

    id: str
    language: str
    name: str
    system_language: bool = False
    base_language: bool = False
    active: bool = True


@dataclass(frozen=True)
class Message:
    """A translatable UI label keyed by search key."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('text',)

    id: str
    search_key: str
    text: str
    message_type: str = 'I'
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class MenuEntry:
    """A flat dictionary menu row; ``parent_id`` builds the tree."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description')

    id: str
    name: str
    parent_id: str | None = None
    sequence: int = 10
    action: str | None = None
    summary_level: bool = False
    window_id: str | None = None
    process_id: str | None = None
    process_definition_id: str | None = None
    form_id: str | None = None
    url: str | None = None
    icon: str | None = None
    description: str | None = None
    active: bool = True
    translations: Translations = field(default_factory=dict)


@dataclass(frozen=True)
class MenuNode:
    """Immutable menu tree node handed to the menu assembler."""

    TRANSLATABLE: ClassVar[tuple[str, ...]] = ('name', 'description', 'icon')

    id: str
    entry_type: MenuEntryType
    name: str
    description: str | None = None
    icon: str | None = None
    url: str | None = None
    action: str | None = None
    window_id: str | None = None
    process_id: str | None = None
    process_definition_id: str | None = None
    form_id: str | None = None
    translations: Translations = field(default_factory=dict)
    children: tuple['MenuNode', ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children


ENTITY_TYPES: dict[EntityKind, type] = {
    EntityKind.WINDOW: Window,
    EntityKind.TAB: Tab,
    EntityKind.TABLE: Table,
    EntityKind.COLUMN: Column,
    EntityKind.FIELD: Field,
    EntityKind.REFERENCE: Reference,
    EntityKind.LIST_VALUE: ListValue,
    EntityKind.SELECTOR: Selector,
    EntityKind.SELECTOR_FIELD: SelectorField,
    EntityKind.DATASOURCE: Datasource,
    EntityKind.DATASOURCE_FIELD: DatasourceField,
    EntityKind.TREE_SELECTOR: TreeSelector,
    EntityKind.REF_WINDOW: RefWindow,
    EntityKind.PROCESS_DEFINITION: ProcessDefinition,
    EntityKind.PARAMETER: Parameter,
    EntityKind.REPORT_DEFINITION: ReportDefinition,
    EntityKind.LEGACY_PROCESS: LegacyProcess,
    EntityKind.PROCESS_PARAMETER: ProcessParameter,
    EntityKind.MODEL_MAPPING: ModelMapping,
    EntityKind.WINDOW_ACCESS: WindowAccess,
    EntityKind.TAB_ACCESS: TabAccess,
    EntityKind.FIELD_ACCESS: FieldAccess,
    EntityKind.PROCESS_ACCESS: ProcessAccess,
    EntityKind.ROLE: Role,
    EntityKind.ROLE_ORGANIZATION: RoleOrganization,
    EntityKind.ORGANIZATION: Organization,
    EntityKind.WAREHOUSE: Warehouse,
    EntityKind.USER: User,
    EntityKind.USER_ROLE: UserRole,
    EntityKind.LANGUAGE: Language,
    EntityKind.MESSAGE: Message,
    EntityKind.MENU_ENTRY: MenuEntry,
}

KIND_BY_TYPE: dict[type, EntityKind] = {cls: kind for kind, cls in ENTITY_TYPES.items()}


def entity_kind(entity: Any) -> EntityKind:
    """Return the repository kind of an entity instance."""
    return KIND_BY_TYPE[type(entity)]
