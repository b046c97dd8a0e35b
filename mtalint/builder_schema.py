"""Schema checks on build parameters that the declarative schema cannot express."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue
from mtalint.yamlnode import YamlNode, get_prop_content, get_prop_value_by_name

_COMMANDS_MSG = (
    'the "commands" property is defined incorrectly; the property must be a sequence of strings'
)


def _deref(node: Optional[YamlNode]) -> Optional[YamlNode]:
    if node is not None and node.alias is not None:
        return node.alias
    return node


def _issue_at(msg: str, node: Optional[YamlNode]) -> ValidationIssue:
    if node is None:
        return ValidationIssue(msg, 0, 0)
    return ValidationIssue(msg, node.line, node.column)


def _check_string_property(
    props: Any, props_node: Optional[YamlNode], name: str
) -> list[ValidationIssue]:
    value = props.get(name) if isinstance(props, Mapping) else None
    if value is None or isinstance(value, str):
        return []
    node = get_prop_value_by_name(_deref(props_node), name)
    msg = f'the "{name}" property is defined incorrectly; the property must be a string'
    return [_issue_at(msg, node)]


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def check_builder_schema(mta: Any, mta_node: Optional[YamlNode]) -> list[ValidationIssue]:
    """Check that ``deploy_mode`` and each module's ``builder`` are strings and
    that ``commands`` is a sequence of strings.

    ``mta`` is the descriptor loaded as plain data, ``mta_node`` its node tree.
    """
    descriptor = mta if isinstance(mta, Mapping) else {}
    issues = _check_string_property(
        descriptor.get("parameters"),
        get_prop_value_by_name(mta_node, "parameters"),
        "deploy_mode",
    )

    modules = descriptor.get("modules")
    modules_nodes = get_prop_content(mta_node, "modules")
    for index, module in enumerate(modules if isinstance(modules, list) else []):
        build_params = module.get("build-parameters") if isinstance(module, Mapping) else None
        if not isinstance(build_params, Mapping):
            continue
        module_node = modules_nodes[index] if index < len(modules_nodes) else None
        params_node = _deref(get_prop_value_by_name(module_node, "build-parameters"))

        issues.extend(_check_string_property(build_params, params_node, "builder"))

        commands = build_params.get("commands")
        if commands is not None and not _is_string_list(commands):
            commands_node = get_prop_value_by_name(params_node, "commands")
            issues.append(_issue_at(_COMMANDS_MSG, commands_node))

    return issues