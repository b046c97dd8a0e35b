"""Semantic checks on the use of ``commands`` with builders."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue
from mtalint.yamlnode import YamlNode, get_prop_content, get_prop_value_by_name

CUSTOM_BUILDER = "custom"


def _deref(node: Optional[YamlNode]) -> Optional[YamlNode]:
    if node is not None and node.alias is not None:
        return node.alias
    return node


def _issue_at(msg: str, node: Optional[YamlNode]) -> ValidationIssue:
    if node is None:
        return ValidationIssue(msg, 0, 0)
    return ValidationIssue(msg, node.line, node.column)


def _check_custom_builder(
    builder: str,
    commands_defined: bool,
    builder_node: Optional[YamlNode],
    commands_node: Optional[YamlNode],
) -> list[ValidationIssue]:
    if builder == CUSTOM_BUILDER and not commands_defined:
        return [_issue_at('the "commands" property is missing in the "custom" builder', builder_node)]
    if builder != CUSTOM_BUILDER and commands_defined:
        return [
            _issue_at(
                f'the "commands" property is not supported by the "{builder}" builder',
                commands_node,
            )
        ]
    return []


def _check_project_builders(
    builders: Any, mta_node: Optional[YamlNode], field_name: str
) -> list[ValidationIssue]:
    if not isinstance(builders, list):
        return []
    params_node = _deref(get_prop_value_by_name(mta_node, "build-parameters"))
    builder_nodes = get_prop_content(params_node, field_name)
    issues: list[ValidationIssue] = []
    for index, entry in enumerate(builders):
        entry = entry if isinstance(entry, Mapping) else {}
        builder = entry.get("builder")
        builder = "" if builder is None else str(builder)
        builder_node = builder_nodes[index] if index < len(builder_nodes) else None
        commands_node = get_prop_value_by_name(builder_node, "commands")
        issues.extend(
            _check_custom_builder(
                builder, entry.get("commands") is not None, builder_node, commands_node
            )
        )
    return issues


def check_builders_semantic(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Report ``custom`` builders without ``commands`` and other builders with them.

    The issues are errors when ``strict`` is set and warnings otherwise.
    """
    descriptor = mta if isinstance(mta, Mapping) else {}
    issues: list[ValidationIssue] = []

    project_params = descriptor.get("build-parameters")
    if isinstance(project_params, Mapping):
        issues.extend(
            _check_project_builders(project_params.get("before-all"), mta_node, "before-all")
        )
        issues.extend(
            _check_project_builders(project_params.get("after-all"), mta_node, "after-all")
        )

    modules = descriptor.get("modules")
    modules_nodes = get_prop_content(mta_node, "modules")
    for index, module in enumerate(modules if isinstance(modules, list) else []):
        params = module.get("build-parameters") if isinstance(module, Mapping) else None
        if not isinstance(params, Mapping) or params.get("builder") is None:
            continue
        builder = params["builder"]
        if not isinstance(builder, str):
            # a non-string builder is reported by the schema checks
            continue
        module_node = modules_nodes[index] if index < len(modules_nodes) else None
        params_node = _deref(get_prop_value_by_name(module_node, "build-parameters"))
        issues.extend(
            _check_custom_builder(
                builder,
                params.get("commands") is not None,
                get_prop_value_by_name(params_node, "builder"),
                get_prop_value_by_name(params_node, "commands"),
            )
        )

    if strict:
        return issues, []
    return [], issues