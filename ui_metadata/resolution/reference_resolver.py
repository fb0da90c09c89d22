"""Reference classification and selector/list resolution.

Every function is stateless: the repository, owner ids, and language are
passed explicitly. References are addressed by the id of the concrete
reference that carries lists, selectors, tree selectors, and ref-windows
(a column's or parameter's "reference search key").
"""

from __future__ import annotations

from typing import Any, NamedTuple

from ui_metadata.dictionary.repository import DictionaryRepository
from ui_metadata.domain.constants import (
    BUTTON_REFERENCE_ID,
    CUSTOM_QUERY_DATASOURCE,
    DATASOURCE_PROPERTY,
    DISPLAY_FIELD_PROPERTY,
    EXTRA_PROPERTIES_PARAMETER,
    FIELD_ID_PROPERTY,
    FIELD_SEPARATOR,
    ID,
    IDENTIFIER,
    LIST_REFERENCE_ID,
    NO_COUNT_PARAMETER,
    SELECTED_PROPERTIES_PARAMETER,
    SELECTOR_DEFINITION_PROPERTY,
    SELECTOR_FILTER_CLASS,
    SELECTOR_REFERENCE_IDS,
    SORT_BY_PARAMETER,
    TEXT_MATCH_PARAMETER,
    TEXT_MATCH_SUBSTRING,
    TREE_DATASOURCE,
    TREE_REFERENCE_ID,
    VALUE_FIELD_PROPERTY,
    WINDOW_REFERENCE_ID,
)
from ui_metadata.domain.enums import DomainType, EntityKind, ReferenceKind
from ui_metadata.domain.models import Selector, SelectorField, TreeSelector
from ui_metadata.domain.translations import translate
from ui_metadata.errors import AssemblyError, ConfigurationError

_KIND_BY_REFERENCE: dict[str, ReferenceKind] = {
    LIST_REFERENCE_ID: ReferenceKind.LIST,
    TREE_REFERENCE_ID: ReferenceKind.TREE_SELECTOR,
    WINDOW_REFERENCE_ID: ReferenceKind.WINDOW_REFERENCE,
    **{ref_id: ReferenceKind.SELECTOR for ref_id in SELECTOR_REFERENCE_IDS},
}


class ReferenceSelectors(NamedTuple):
    """Selector pair of a reference; at most one is set."""

    selector: Selector | None = None
    tree_selector: TreeSelector | None = None


# ── Classification ──────────────────────────────────────────────────────


def classify(reference_id: str | None) -> ReferenceKind:
    """Map a reference id to its kind; unknown ids are Plain."""
    if reference_id is None:
        return ReferenceKind.PLAIN
    return _KIND_BY_REFERENCE.get(reference_id, ReferenceKind.PLAIN)


def is_button(reference_id: str | None) -> bool:
    return reference_id == BUTTON_REFERENCE_ID


def find_reference_selectors(repository: DictionaryRepository, reference_id: str | None) -> ReferenceSelectors:
    """Return the reference's first selector, else its first tree selector."""
    if reference_id is None:
        return ReferenceSelectors()

    selector = repository.first(EntityKind.SELECTOR, lambda s: s.reference_id == reference_id)
    if selector is not None:
        return ReferenceSelectors(selector=selector)

    tree = repository.first(EntityKind.TREE_SELECTOR, lambda t: t.reference_id == reference_id)
    return ReferenceSelectors(tree_selector=tree)


# ── Selector Descriptors ────────────────────────────────────────────────


def resolve_selector_info(repository: DictionaryRepository, owner_id: str,
                          reference_id: str | None) -> dict[str, Any]:
    """Build the selector descriptor for a field or parameter.

    Args:
        repository: Dictionary to read selector definitions from.
        owner_id: Field or parameter id echoed back as ``fieldId``.
        reference_id: Reference search key carrying the selectors.

    Returns:
        Selector descriptor, tree-selector descriptor, or ``{}`` when the
        reference carries neither.
    """
    selectors = find_reference_selectors(repository, reference_id)
    if selectors.selector is not None:
        return _selector_info(repository, owner_id, selectors.selector)
    if selectors.tree_selector is not None:
        return _tree_selector_info(owner_id, selectors.tree_selector)
    return {}


def _selector_info(repository: DictionaryRepository, owner_id: str, selector: Selector) -> dict[str, Any]:
    display_field = _selector_field(repository, selector.display_field_id)

    if display_field is not None:
        sort_by = display_field.display_column_alias or display_field.property
    else:
        sort_by = IDENTIFIER

    info: dict[str, Any] = {
        DATASOURCE_PROPERTY: _datasource_name(repository, selector),
        SELECTOR_DEFINITION_PROPERTY: selector.id,
        'filterClass': SELECTOR_FILTER_CLASS,
        SORT_BY_PARAMETER: sort_by,
        NO_COUNT_PARAMETER: True,
        FIELD_ID_PROPERTY: owner_id,
        TEXT_MATCH_PARAMETER: selector.suggestion_text_match_style,
    }
    info.update(_selector_properties(repository, selector))
    info['extraSearchFields'] = extra_search_fields(repository, selector)
    info[DISPLAY_FIELD_PROPERTY] = resolve_display_field(repository, selector)
    info[VALUE_FIELD_PROPERTY] = resolve_value_field(repository, selector)
    return info


def _tree_selector_info(owner_id: str, tree: TreeSelector) -> dict[str, Any]:
    info: dict[str, Any] = {
        DATASOURCE_PROPERTY: TREE_DATASOURCE,
        SELECTOR_DEFINITION_PROPERTY: tree.id,
        'treeReferenceId': tree.id,
    }
    if tree.display_property is not None:
        info[SORT_BY_PARAMETER] = tree.display_property
        info[DISPLAY_FIELD_PROPERTY] = tree.display_property
    info.update({
        TEXT_MATCH_PARAMETER: TEXT_MATCH_SUBSTRING,
        NO_COUNT_PARAMETER: True,
        FIELD_ID_PROPERTY: owner_id,
        VALUE_FIELD_PROPERTY: tree.value_property,
        SELECTED_PROPERTIES_PARAMETER: ID,
        EXTRA_PROPERTIES_PARAMETER: ID + ',',
    })
    return info


def _datasource_name(repository: DictionaryRepository, selector: Selector) -> str:
    if selector.datasource_id is not None:
        return selector.datasource_id
    if selector.custom_query:
        return CUSTOM_QUERY_DATASOURCE
    table = repository.get(EntityKind.TABLE, selector.table_id)
    if table is None:
        raise AssemblyError(f"Selector {selector.id} has no datasource and no table {selector.table_id}")
    return table.name


def _selector_properties(repository: DictionaryRepository, selector: Selector) -> dict[str, str]:
    """Compute ``_selectedProperties`` and ``_extraProperties``."""
    display_field = _selector_field(repository, selector.display_field_id)
    value_field = _selector_field(repository, selector.value_field_id)
    value_property = resolve_value_field(repository, selector) if value_field else IDENTIFIER
    display_property = resolve_display_field(repository, selector) if display_field else IDENTIFIER

    selected = [ID]
    derived: list[str] = []
    extra = [value_property]

    if display_field is not None and display_property != IDENTIFIER:
        extra.append(display_property)
        selected.append(display_property)

    for sf in _selector_fields(repository, selector):
        name = selector_field_name(repository, sf)
        if name in (ID, IDENTIFIER):
            continue

        if FIELD_SEPARATOR in name:
            derived.append(name)
        else:
            selected.append(name)

        if (sf.outfield
                and (display_field is None or name == display_property)
                and (value_field is None or name == value_property)):
            extra.append(name)

    return {
        SELECTED_PROPERTIES_PARAMETER: ','.join(selected),
        EXTRA_PROPERTIES_PARAMETER: ','.join(extra) + ',' + ','.join(derived),
    }


def extra_search_fields(repository: DictionaryRepository, selector: Selector) -> str:
    """Comma-separated suggestion-box search fields, excluding the display field.

    Boolean properties are never searchable; foreign keys search on their
    identifier.
    """
    display = resolve_display_field(repository, selector)
    names = []
    for sf in _selector_fields(repository, selector):
        if not sf.active:
            continue
        name = selector_field_name(repository, sf)
        if name == display:
            continue
        if sf.search_in_suggestion_box and sf.domain_type != DomainType.BOOLEAN.value:
            if sf.domain_type == DomainType.FOREIGN_KEY.value:
                name = name + FIELD_SEPARATOR + IDENTIFIER
            names.append(name)
    return ','.join(names)


# ── Field Names ─────────────────────────────────────────────────────────


def resolve_field_name(explicit_property: str | None, display_column_alias: str | None,
                       datasource_field: str | None) -> str:
    """Pick the first configured name and replace dots with ``$``.

    Precedence: explicit property → display-column alias → datasource field.

    Raises:
        ConfigurationError: If all three are absent.
    """
    for candidate in (explicit_property, display_column_alias, datasource_field):
        if candidate is not None:
            return candidate.replace('.', FIELD_SEPARATOR)
    raise ConfigurationError("Selector field has no property, display column alias, or datasource field")


def selector_field_name(repository: DictionaryRepository, selector_field: SelectorField) -> str:
    """Resolved property name of a selector field."""
    ds_field = repository.get(EntityKind.DATASOURCE_FIELD, selector_field.datasource_field_id)
    try:
        return resolve_field_name(
            selector_field.property,
            selector_field.display_column_alias,
            ds_field.name if ds_field is not None else None,
        )
    except ConfigurationError:
        raise ConfigurationError(
            f"Selector field {selector_field.id} has a null datasource and a null property"
        ) from None


def resolve_display_field(repository: DictionaryRepository, selector: Selector) -> str:
    """Display property of a selector, defaulting to ``_identifier``."""
    display_field = _selector_field(repository, selector.display_field_id)
    if display_field is not None:
        return selector_field_name(repository, display_field)

    ds_field = _first_tableless_datasource_field(repository, selector)
    if ds_field is not None:
        return ds_field.name.replace('.', FIELD_SEPARATOR)

    return IDENTIFIER


def resolve_value_field(repository: DictionaryRepository, selector: Selector) -> str:
    """Value property of a selector, defaulting to ``id``.

    Foreign-key value fields of table-backed selectors submit the referenced
    record's id (``<name>$id``).
    """
    value_field = _selector_field(repository, selector.value_field_id)
    if value_field is not None:
        name = selector_field_name(repository, value_field)
        if not selector.custom_query and value_field.domain_type == DomainType.FOREIGN_KEY.value:
            return name + FIELD_SEPARATOR + ID
        return name

    ds_field = _first_tableless_datasource_field(repository, selector)
    if ds_field is not None:
        return ds_field.name

    return ID


def _selector_field(repository: DictionaryRepository, field_id: str | None) -> SelectorField | None:
    if field_id is None:
        return None
    selector_field = repository.get(EntityKind.SELECTOR_FIELD, field_id)
    if selector_field is None:
        raise AssemblyError(f"Selector field not found: {field_id}")
    return selector_field


def _selector_fields(repository: DictionaryRepository, selector: Selector) -> list[SelectorField]:
    return sorted(
        repository.query(EntityKind.SELECTOR_FIELD, lambda f: f.selector_id == selector.id),
        key=lambda f: f.sequence,
    )


def _first_tableless_datasource_field(repository: DictionaryRepository, selector: Selector):
    """First field of a manual (table-less) datasource, if the selector has one."""
    datasource = repository.get(EntityKind.DATASOURCE, selector.datasource_id)
    if datasource is None or datasource.table_id is not None:
        return None
    return repository.first(EntityKind.DATASOURCE_FIELD, lambda f: f.datasource_id == datasource.id)


# ── Lists ───────────────────────────────────────────────────────────────


def resolve_list_info(repository: DictionaryRepository, reference_id: str | None,
                      language: str | None) -> list[dict[str, Any]]:
    """List options of a reference in dictionary order; ``[]`` when there are none."""
    if reference_id is None:
        return []
    return [
        {
            'id': value.id,
            'value': value.search_key,
            'label': translate(value, 'name', language),
            'color': translate(value, 'color', language),
            'active': value.active,
        }
        for value in repository.query(EntityKind.LIST_VALUE, lambda v: v.reference_id == reference_id)
    ]
