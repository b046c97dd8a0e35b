"""Composable checks run against a YAML node tree."""

from __future__ import annotations

import re
from typing import Callable, Optional, Sequence

from mtalint.issues import ValidationIssue
from mtalint.yamlnode import NodeKind, YamlNode, get_prop_by_name, get_prop_value_by_name

PROPERTY_EXISTS_ERROR_MSG = 'the "{}" key is not allowed inside the "{}"'

Path = tuple[str, ...]
YamlCheck = Callable[[Optional[YamlNode], Optional[YamlNode], Path], list[ValidationIssue]]


def _run_all(
    checks: Sequence[YamlCheck], node: Optional[YamlNode], parent: Optional[YamlNode], path: Path
) -> list[ValidationIssue]:
    return [issue for check in checks for issue in check(node, parent, path)]


def prop(name: str, *checks: YamlCheck) -> YamlCheck:
    """Run ``checks`` on the value of the property ``name``."""

    def check(node, parent, path):
        return _run_all(checks, get_prop_value_by_name(node, name), node, (*path, name))

    return check


def prop_name(name: str, *checks: YamlCheck) -> YamlCheck:
    """Run ``checks`` on the key node of the property ``name``."""

    def check(node, parent, path):
        return _run_all(checks, get_prop_by_name(node, name), node, (*path, name))

    return check


def _sequence(fail_fast: bool, checks: Sequence[YamlCheck]) -> YamlCheck:
    def check(node, parent, path):
        issues: list[ValidationIssue] = []
        for inner in checks:
            found = inner(node, parent, path)
            if found:
                issues.extend(found)
                if fail_fast:
                    break
        return issues

    return check


def sequence(*checks: YamlCheck) -> YamlCheck:
    """Run all ``checks`` in order on the same node."""
    return _sequence(False, checks)


def sequence_fail_fast(*checks: YamlCheck) -> YamlCheck:
    """Run ``checks`` in order, stopping after the first one that finds issues."""
    return _sequence(True, checks)


def for_each(*checks: YamlCheck) -> YamlCheck:
    """Run ``checks`` on every item of a sequence."""
    validation = sequence(*checks)

    def check(node, parent, path):
        if node is None:
            return []
        return [
            issue
            for index, child in enumerate(node.content)
            for issue in validation(child, node, (*path, f"[{index}]"))
        ]

    return check


def for_each_property(*checks: YamlCheck) -> YamlCheck:
    """Run ``checks`` on every value of a mapping."""
    validation = sequence(*checks)

    def check(node, parent, path):
        if node is None:
            return []
        return [
            issue
            for key, value in zip(node.content[::2], node.content[1::2])
            for issue in validation(value, node, (*path, key.value))
        ]

    return check


def required() -> YamlCheck:
    """Report the property as missing when its node is absent."""

    def check(node, parent, path):
        if node is not None:
            return []
        line, column = (parent.line, parent.column) if parent is not None else (0, 0)
        msg = (
            f'missing the "{path[-1]}" required property in the '
            f"{build_path_string(path[:-1])} .yaml node"
        )
        return [ValidationIssue(msg, line, column)]

    return check


def does_not_exist() -> YamlCheck:
    """Report the property when its node is present."""

    def check(node, parent, path):
        if node is None:
            return []
        msg = PROPERTY_EXISTS_ERROR_MSG.format(path[-1], build_path_string(path[:-1]))
        return [ValidationIssue(msg, node.line, node.column)]

    return check


def optional(*checks: YamlCheck) -> YamlCheck:
    """Run ``checks`` only when the node is present."""

    def check(node, parent, path):
        if node is None:
            return []
        return _run_all(checks, node, parent, path)

    return check


def _type_check(bad: Callable[[YamlNode], bool], description: str) -> YamlCheck:
    def check(node, parent, path):
        if node is None or not bad(node):
            return []
        msg = f'the "{build_path_string(path)}" property must be {description}'
        return [ValidationIssue(msg, node.line, node.column)]

    return check


def type_is_not_map_array() -> YamlCheck:
    """Report a node that is a sequence or a mapping."""
    return _type_check(lambda n: n.kind in (NodeKind.SEQUENCE, NodeKind.MAPPING), "a string")


def type_is_array() -> YamlCheck:
    """Report a node that is not a sequence."""
    return _type_check(lambda n: n.kind is not NodeKind.SEQUENCE, "an array")


def type_is_map() -> YamlCheck:
    """Report a node that is not a mapping."""
    return _type_check(lambda n: n.kind is not NodeKind.MAPPING, "a map")


def type_is_boolean() -> YamlCheck:
    """Report a node whose tag is not a boolean."""
    return _type_check(lambda n: n.tag != "!!bool", "a boolean")


def matches_regexp(pattern: str) -> YamlCheck:
    """Report a node whose value does not match ``pattern`` anywhere."""
    compiled = re.compile(pattern)

    def check(node, parent, path):
        if node is None or compiled.search(node.value):
            return []
        msg = (
            f'the "{node.value}" value of the "{build_path_string(path)}" property '
            f'does not match the "{pattern}" pattern'
        )
        return [ValidationIssue(msg, node.line, node.column)]

    return check


def matches_enum_values(enum_values: Sequence[str]) -> YamlCheck:
    """Report a node whose value is not one of ``enum_values``."""
    values = list(enum_values)
    expected = ",".join(values[:4])

    def check(node, parent, path):
        if node is None or node.value in values:
            return []
        msg = (
            f'the "{node.value}" value of the "{build_path_string(path)}" enum property '
            f"is invalid; expected one of the following: {expected}"
        )
        return [ValidationIssue(msg, node.line, node.column)]

    return check


def build_path_string(path: Sequence[str]) -> str:
    """Render a property path as text, e.g. ``modules[0].name`` or ``root.ID``."""
    if not path:
        return "root"
    if len(path) == 1:
        return build_path_string(("root", *path))
    return ".".join(path).replace(".[", "[")


def run_schema_validations(node: Optional[YamlNode], *validations: YamlCheck) -> list[ValidationIssue]:
    """Run each validation on the root node and collect all issues."""
    return _run_all(validations, node, None, ())