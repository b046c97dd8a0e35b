"""Global uniqueness of module, provided property set and resource names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue, append_issue
from mtalint.positions import (
    get_indexed_node_prop_position,
    get_named_object_node_by_index,
    get_named_object_position_by_index,
)
from mtalint.yamlnode import YamlNode, get_prop_value_by_name

MODULE_ENTITY_KIND = "module"
RESOURCE_ENTITY_KIND = "resource"
PROVIDED_PROP_ENTITY_KIND = "provided property set"


@dataclass(frozen=True)
class NameInfo:
    """Where a name was first seen and for what kind of object."""

    object: str
    line: int
    column: int


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _entries(container: Any, field: str) -> list[Mapping]:
    items = container.get(field) if isinstance(container, Mapping) else None
    if not isinstance(items, list):
        return []
    return [item if isinstance(item, Mapping) else {} for item in items]


def validate_name_uniqueness(
    names: dict[str, NameInfo],
    name: str,
    object_name: str,
    issues: list[ValidationIssue],
    line: int,
    column: int,
) -> list[ValidationIssue]:
    """Record ``name`` in ``names``, or add an issue to ``issues`` if it is taken."""
    previous = names.get(name)
    if previous is None:
        names[name] = NameInfo(object_name, line, column)
        return issues
    article = "another" if previous.object == object_name else "a"
    msg = (
        f'the "{name}" {object_name} name is already in use; {article} '
        f"{previous.object} was found with the same name on line {previous.line}"
    )
    return append_issue(issues, msg, line, column)


def _provided_set_position(
    mta_node: Optional[YamlNode], module_index: int, provided_index: int
) -> tuple[int, int]:
    module_node = get_named_object_node_by_index(mta_node, "modules", module_index)
    provided = get_prop_value_by_name(module_node, "provides")
    line, column, _ = get_indexed_node_prop_position(provided, provided_index, "name")
    return line, column


def is_name_unique(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Report names of modules, provided property sets and resources used twice."""
    names: dict[str, NameInfo] = {}
    issues: list[ValidationIssue] = []
    for i, module in enumerate(_entries(mta, "modules")):
        line, column = get_named_object_position_by_index(mta_node, "modules", i)
        issues = validate_name_uniqueness(
            names, _text(module.get("name")), MODULE_ENTITY_KIND, issues, line, column
        )
        for j, provides in enumerate(_entries(module, "provides")):
            line, column = _provided_set_position(mta_node, i, j)
            issues = validate_name_uniqueness(
                names, _text(provides.get("name")), PROVIDED_PROP_ENTITY_KIND, issues, line, column
            )
    for i, resource in enumerate(_entries(mta, "resources")):
        line, column = get_named_object_position_by_index(mta_node, "resources", i)
        issues = validate_name_uniqueness(
            names, _text(resource.get("name")), RESOURCE_ENTITY_KIND, issues, line, column
        )
    return issues, []