"""Checks on ``parameters-metadata`` and ``properties-metadata`` sections."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping, Optional

from mtalint.checks import PROPERTY_EXISTS_ERROR_MSG
from mtalint.issues import ValidationIssue
from mtalint.yamlnode import YamlNode, get_prop_by_name, get_prop_content, get_prop_value_by_name

UNKNOWN_NAME_IN_METADATA_MSG = 'metadata cannot be defined for the "{}" undefined {}'
EMPTY_REQUIRED_FIELD_MSG = 'the value for the required and non-overwritable "{}" {} cannot be empty'
PROPERTIES_METADATA_WITH_LIST_OR_GROUP_MSG = (
    'the "properties-metadata" cannot be used in the context of list and group'
)

_DATATYPE_FIELD = "datatype"
_LIST_FIELD = "list"
_GROUP_FIELD = "group"


class MapType(Enum):
    """The two kinds of maps that may carry metadata."""

    PARAMETERS = ("parameter", "parameters", "parameters-metadata")
    PROPERTIES = ("property", "properties", "properties-metadata")

    def __init__(self, entity_kind: str, map_node_name: str, metadata_node_name: str):
        self.entity_kind = entity_kind
        self.map_node_name = map_node_name
        self.metadata_node_name = metadata_node_name


MetadataChecker = Callable[
    [Mapping, Mapping, Optional[YamlNode], MapType], list[ValidationIssue]
]


def _as_map(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _entries(container: Any, field: str) -> list[Mapping]:
    items = _as_map(container).get(field)
    if not isinstance(items, list):
        return []
    return [_as_map(item) for item in items]


def _node_at(nodes: list[YamlNode], index: int) -> Optional[YamlNode]:
    return nodes[index] if 0 <= index < len(nodes) else None


def _issue_at(msg: str, node: Optional[YamlNode]) -> ValidationIssue:
    if node is None:
        return ValidationIssue(msg, 0, 0)
    return ValidationIssue(msg, node.line, node.column)


def is_property_overwritable(value: Any) -> bool:
    """Return the ``overwritable`` flag; it defaults to True."""
    return value if isinstance(value, bool) else True


def is_property_optional(value: Any) -> bool:
    """Return the ``optional`` flag; it defaults to False."""
    return value if isinstance(value, bool) else False


def _check_metadata(
    values: Mapping, metadata: Mapping, parent_node: Optional[YamlNode], map_type: MapType
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    metadata_value_node = get_prop_value_by_name(parent_node, map_type.metadata_node_name)
    for key in metadata:
        if key not in values:
            key_node = get_prop_by_name(metadata_value_node, str(key))
            msg = UNKNOWN_NAME_IN_METADATA_MSG.format(key, map_type.entity_kind)
            issues.append(_issue_at(msg, key_node))

    map_node = get_prop_value_by_name(parent_node, map_type.map_node_name)
    for key, value in values.items():
        if key not in metadata or value is not None:
            continue
        meta = _as_map(metadata[key])
        if is_property_optional(meta.get("optional")):
            continue
        if is_property_overwritable(meta.get("overwritable")):
            continue
        key_node = get_prop_by_name(map_node, str(key))
        msg = EMPTY_REQUIRED_FIELD_MSG.format(key, map_type.entity_kind)
        issues.append(_issue_at(msg, key_node))

    metadata_key_node = get_prop_by_name(parent_node, map_type.metadata_node_name)
    if map_type is MapType.PROPERTIES and metadata_key_node is not None:
        if (
            get_prop_by_name(parent_node, _LIST_FIELD) is not None
            or get_prop_by_name(parent_node, _GROUP_FIELD) is not None
        ):
            issues.append(_issue_at(PROPERTIES_METADATA_WITH_LIST_OR_GROUP_MSG, metadata_key_node))

    return issues


def _check_no_datatype_in_parameters_metadata(
    values: Mapping, metadata: Mapping, parent_node: Optional[YamlNode], map_type: MapType
) -> list[ValidationIssue]:
    if map_type is not MapType.PARAMETERS:
        return []
    metadata_node = get_prop_value_by_name(parent_node, MapType.PARAMETERS.metadata_node_name)
    msg = PROPERTY_EXISTS_ERROR_MSG.format(_DATATYPE_FIELD, MapType.PARAMETERS.metadata_node_name)
    issues: list[ValidationIssue] = []
    for key in metadata:
        value_node = get_prop_value_by_name(metadata_node, str(key))
        datatype_node = get_prop_by_name(value_node, _DATATYPE_FIELD)
        if datatype_node is not None:
            issues.append(_issue_at(msg, datatype_node))
    return issues


def _run(
    checker: MetadataChecker, owner: Mapping, node: Optional[YamlNode], map_type: MapType
) -> list[ValidationIssue]:
    return checker(
        _as_map(owner.get(map_type.map_node_name)),
        _as_map(owner.get(map_type.metadata_node_name)),
        node,
        map_type,
    )


def _check_requires(
    checker: MetadataChecker, owner: Mapping, owner_node: Optional[YamlNode]
) -> list[ValidationIssue]:
    nodes = get_prop_content(owner_node, "requires")
    issues: list[ValidationIssue] = []
    for index, requires in enumerate(_entries(owner, "requires")):
        node = _node_at(nodes, index)
        issues.extend(_run(checker, requires, node, MapType.PARAMETERS))
        issues.extend(_run(checker, requires, node, MapType.PROPERTIES))
    return issues


def validate_metadata(
    mta: Any, mta_node: Optional[YamlNode], checker: MetadataChecker
) -> list[ValidationIssue]:
    """Run ``checker`` on every map with metadata in the descriptor.

    ``checker`` receives the values, their metadata, the node that holds both
    and the MapType, and returns the issues it found.
    """
    descriptor = _as_map(mta)
    issues = _run(checker, descriptor, mta_node, MapType.PARAMETERS)

    modules_nodes = get_prop_content(mta_node, "modules")
    for index, module in enumerate(_entries(descriptor, "modules")):
        module_node = _node_at(modules_nodes, index)
        issues.extend(_run(checker, module, module_node, MapType.PARAMETERS))
        issues.extend(_run(checker, module, module_node, MapType.PROPERTIES))

        provides_nodes = get_prop_content(module_node, "provides")
        for j, provides in enumerate(_entries(module, "provides")):
            issues.extend(_run(checker, provides, _node_at(provides_nodes, j), MapType.PROPERTIES))

        issues.extend(_check_requires(checker, module, module_node))

        hooks_nodes = get_prop_content(module_node, "hooks")
        for j, hook in enumerate(_entries(module, "hooks")):
            hook_node = _node_at(hooks_nodes, j)
            issues.extend(_run(checker, hook, hook_node, MapType.PARAMETERS))
            issues.extend(_check_requires(checker, hook, hook_node))

    resources_nodes = get_prop_content(mta_node, "resources")
    for index, resource in enumerate(_entries(descriptor, "resources")):
        resource_node = _node_at(resources_nodes, index)
        issues.extend(_run(checker, resource, resource_node, MapType.PARAMETERS))
        issues.extend(_run(checker, resource, resource_node, MapType.PROPERTIES))
        issues.extend(_check_requires(checker, resource, resource_node))

    return issues


def check_params_and_properties_metadata(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Check metadata refers to defined keys, required values are set, and
    ``properties-metadata`` is not combined with ``list`` or ``group``.

    The issues are errors when ``strict`` is set and warnings otherwise.
    """
    issues = validate_metadata(mta, mta_node, _check_metadata)
    if strict:
        return issues, []
    return [], issues


def check_metadata_schema(mta: Any, mta_node: Optional[YamlNode]) -> list[ValidationIssue]:
    """Report ``datatype`` fields inside ``parameters-metadata``."""
    return validate_metadata(mta, mta_node, _check_no_datatype_in_parameters_metadata)