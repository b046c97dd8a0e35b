"""Checks that required property sets and ``~{...}`` placeholders can be resolved."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue, append_issue
from mtalint.yamlnode import YamlNode, get_prop_content, get_prop_value_by_name

CONFIGURATION_RESOURCE_TYPE = "configuration"

_PLACEHOLDER_RE = re.compile(r"~\{[^{}]+\}")

_MODULE_FIELDS = (
    ("properties", "property"),
    ("parameters", "parameter"),
    ("build-parameters", "build parameter"),
)
_PROVIDES_FIELDS = (("properties", "property"),)
_RESOURCE_FIELDS = (
    ("properties", "property"),
    ("parameters", "parameter"),
)

Result = tuple[list[ValidationIssue], list[ValidationIssue]]


def _as_map(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _entries(container: Any, field: str) -> list[Mapping]:
    items = _as_map(container).get(field)
    if not isinstance(items, list):
        return []
    return [_as_map(item) for item in items]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _node_at(nodes: list[YamlNode], index: int) -> Optional[YamlNode]:
    return nodes[index] if 0 <= index < len(nodes) else None


def _position(node: Optional[YamlNode]) -> tuple[int, int]:
    return (node.line, node.column) if node is not None else (0, 0)


def _check_required_property(
    provided: Mapping[str, Mapping],
    configuration: set[str],
    entity_name: str,
    entity_kind: str,
    required_set: str,
    required_prop: str,
    requiring_object: str,
) -> str:
    found = required_set in provided and required_prop in provided[required_set]
    if not found:
        found = required_set in configuration
    if found:
        return ""
    return (
        f'the "{entity_name}" {entity_kind} of the {requiring_object} is unresolved; '
        f'the "{required_set}/{required_prop}" property is not provided'
    )


def _check_string_value(
    provided: Mapping[str, Mapping],
    configuration: set[str],
    entity_name: str,
    value: str,
    entity_kind: str,
    prop_set: str,
    requiring_object: str,
    node: Optional[YamlNode],
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    line, column = _position(node)
    for match in _PLACEHOLDER_RE.findall(value):
        required_prop = match[2:-1]
        if prop_set:
            msg = _check_required_property(
                provided, configuration, entity_name, entity_kind,
                prop_set, required_prop, requiring_object,
            )
        else:
            parts = required_prop.split("/", 1)
            if len(parts) != 2:
                msg = (
                    f'the "{entity_name}" {entity_kind} of the {requiring_object} is '
                    f'unresolved; the "{required_prop}" property is not provided'
                )
            else:
                msg = _check_required_property(
                    provided, configuration, entity_name, entity_kind,
                    parts[0], parts[1], requiring_object,
                )
        append_issue(issues, msg, line, column)
    return issues


def _check_value(
    provided: Mapping[str, Mapping],
    configuration: set[str],
    entity_name: str,
    entity_kind: str,
    prop_set: str,
    requiring_object: str,
    value: Any,
    node: Optional[YamlNode],
) -> list[ValidationIssue]:
    if isinstance(value, str):
        return _check_string_value(
            provided, configuration, entity_name, value, entity_kind,
            prop_set, requiring_object, node,
        )
    if isinstance(value, Mapping):
        issues: list[ValidationIssue] = []
        for key, child in value.items():
            child_node = get_prop_value_by_name(node, str(key))
            issues.extend(
                _check_value(
                    provided, configuration, f"{entity_name}.{key}", entity_kind,
                    prop_set, requiring_object, child, child_node,
                )
            )
        return issues
    return []


def _check_required_properties(
    provided: Mapping[str, Mapping],
    configuration: set[str],
    prop_set: str,
    entities: Any,
    requiring_object: str,
    node: Optional[YamlNode],
    entity_kind: str,
) -> list[ValidationIssue]:
    if not isinstance(entities, Mapping):
        return []
    issues: list[ValidationIssue] = []
    for name, value in entities.items():
        entity_node = get_prop_value_by_name(node, str(name))
        issues.extend(
            _check_value(
                provided, configuration, str(name), entity_kind,
                prop_set, requiring_object, value, entity_node,
            )
        )
    return issues


def _check_component(
    provided: Mapping[str, Mapping],
    configuration: set[str],
    component: Mapping,
    comp_node: Optional[YamlNode],
    comp_desc: str,
    fields: tuple[tuple[str, str], ...],
    has_requires: bool,
) -> list[ValidationIssue]:
    name = _text(component.get("name"))
    requiring_object = f'"{name}" {comp_desc}'
    issues: list[ValidationIssue] = []

    for field, kind in fields:
        issues.extend(
            _check_required_properties(
                provided, configuration, "", component.get(field), requiring_object,
                get_prop_value_by_name(comp_node, field), kind,
            )
        )

    if not has_requires:
        return issues

    requires_nodes = get_prop_content(comp_node, "requires")
    for index, requires in enumerate(_entries(component, "requires")):
        req_node = _node_at(requires_nodes, index)
        req_name = _text(requires.get("name"))
        if req_name not in provided and req_name not in configuration:
            line, column = _position(get_prop_value_by_name(req_node, "name"))
            append_issue(
                issues,
                f'the "{req_name}" property set required by the "{name}" {comp_desc} '
                "is not defined",
                line,
                column,
            )
        issues.extend(
            _check_required_properties(
                provided, configuration, req_name, requires.get("properties"),
                requiring_object, get_prop_value_by_name(req_node, "properties"), "property",
            )
        )
        issues.extend(
            _check_required_properties(
                provided, configuration, req_name, requires.get("parameters"),
                requiring_object, get_prop_value_by_name(req_node, "parameters"), "parameter",
            )
        )
    return issues


def if_required_defined(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> Result:
    """Report required property sets that nothing provides and placeholders
    that refer to properties that are not provided."""
    modules = _entries(mta, "modules")
    resources = _entries(mta, "resources")

    provided: dict[str, Mapping] = {}
    for module in modules:
        provided[_text(module.get("name"))] = _as_map(module.get("properties"))
        for provides in _entries(module, "provides"):
            provided[_text(provides.get("name"))] = _as_map(provides.get("properties"))

    configuration: set[str] = set()
    for resource in resources:
        name = _text(resource.get("name"))
        if resource.get("type") == CONFIGURATION_RESOURCE_TYPE:
            configuration.add(name)
        else:
            provided[name] = _as_map(resource.get("properties"))

    issues: list[ValidationIssue] = []
    modules_nodes = get_prop_content(mta_node, "modules")
    for index, module in enumerate(modules):
        module_node = _node_at(modules_nodes, index)
        issues.extend(
            _check_component(
                provided, configuration, module, module_node, "module", _MODULE_FIELDS, True
            )
        )
        provides_nodes = get_prop_content(module_node, "provides")
        desc = f"provided property set of the {_text(module.get('name'))} module"
        for j, provides in enumerate(_entries(module, "provides")):
            issues.extend(
                _check_component(
                    provided, configuration, provides, _node_at(provides_nodes, j),
                    desc, _PROVIDES_FIELDS, False,
                )
            )

    resources_nodes = get_prop_content(mta_node, "resources")
    for index, resource in enumerate(resources):
        issues.extend(
            _check_component(
                provided, configuration, resource, _node_at(resources_nodes, index),
                "resource", _RESOURCE_FIELDS, True,
            )
        )
    return issues, []