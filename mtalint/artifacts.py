"""Semantic checks on module paths and the ``no-source`` build parameter."""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue
from mtalint.positions import get_indexed_node_prop_position
from mtalint.yamlnode import YamlNode, get_prop_value_by_name

Result = tuple[list[ValidationIssue], list[ValidationIssue]]

_NO_SOURCE_MSG = 'the "no-source" build parameter must be a boolean'


def _deref(node: Optional[YamlNode]) -> Optional[YamlNode]:
    if node is not None and node.alias is not None:
        return node.alias
    return node


def _issue_at(msg: str, node: Optional[YamlNode]) -> ValidationIssue:
    if node is None:
        return ValidationIssue(msg, 0, 0)
    return ValidationIssue(msg, node.line, node.column)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _modules(mta: Any) -> list[Mapping]:
    modules = mta.get("modules") if isinstance(mta, Mapping) else None
    if not isinstance(modules, list):
        return []
    return [module if isinstance(module, Mapping) else {} for module in modules]


def _module_node(modules_node: Optional[YamlNode], index: int) -> Optional[YamlNode]:
    if modules_node is None or not 0 <= index < len(modules_node.content):
        return None
    return modules_node.content[index]


def _no_source(
    module: Mapping, modules_node: Optional[YamlNode], index: int
) -> tuple[bool, Optional[ValidationIssue]]:
    build_params = module.get("build-parameters")
    if not isinstance(build_params, Mapping) or build_params.get("no-source") is None:
        return False, None
    value = build_params["no-source"]
    if isinstance(value, bool):
        return value, None
    module_node = _module_node(modules_node, index)
    params_node = _deref(get_prop_value_by_name(module_node, "build-parameters"))
    return False, _issue_at(_NO_SOURCE_MSG, get_prop_value_by_name(params_node, "no-source"))


def if_no_source_param_bool(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> Result:
    """Report modules whose ``no-source`` build parameter is set but not a boolean."""
    modules_node = get_prop_value_by_name(mta_node, "modules")
    issues = []
    for index, module in enumerate(_modules(mta)):
        _, issue = _no_source(module, modules_node, index)
        if issue is not None:
            issues.append(issue)
    return issues, []


def if_module_path_exists(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> Result:
    """Report module paths that do not exist under the project folder ``source``."""
    modules_node = get_prop_value_by_name(mta_node, "modules")
    issues = []
    for index, module in enumerate(_modules(mta)):
        no_source, _ = _no_source(module, modules_node, index)
        path = _text(module.get("path"))
        if no_source or not path:
            continue
        if not os.path.exists(os.path.join(source, path)):
            line, column, _ = get_indexed_node_prop_position(modules_node, index, "path")
            name = _text(module.get("name"))
            issues.append(
                ValidationIssue(
                    f'the "{path}" path of the "{name}" module does not exist', line, column
                )
            )
    return issues, []


def if_module_path_empty(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> Result:
    """Report modules without a path unless they declare ``no-source: true``."""
    modules_node = get_prop_value_by_name(mta_node, "modules")
    issues = []
    for index, module in enumerate(_modules(mta)):
        no_source, _ = _no_source(module, modules_node, index)
        if no_source or _text(module.get("path")):
            continue
        name = _text(module.get("name"))
        module_node = _module_node(modules_node, index)
        path_node = get_prop_value_by_name(module_node, "path")
        if path_node is None:
            issues.append(_issue_at(f'the path of the "{name}" module is not defined', module_node))
        else:
            issues.append(_issue_at(f'the path of the "{name}" module is empty', path_node))
    return issues, []