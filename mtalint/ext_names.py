"""Checks that each object in an extension file is extended only once."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue, append_issue
from mtalint.positions import get_named_object_node_by_index, get_named_object_position_by_index
from mtalint.uniqueness import NameInfo
from mtalint.yamlnode import YamlNode

NAME_ALREADY_EXTENDED_MSG = (
    'the "{name}" {kind} has already been extended in this file; '
    "{article} {previous} with the same name was found on line {line}"
)

MODULE_ENTITY_KIND = "module"
RESOURCE_ENTITY_KIND = "resource"
PROVIDED_PROP_ENTITY_KIND = "provided property set"
REQUIRES_PROP_ENTITY_KIND = "requires property set"
HOOK_ENTITY_KIND = "hook"


def _entries(container: Any, field: str) -> list[Mapping]:
    items = container.get(field) if isinstance(container, Mapping) else None
    if not isinstance(items, list):
        return []
    return [item if isinstance(item, Mapping) else {} for item in items]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _extended_once(
    names: dict[str, NameInfo],
    name: str,
    kind: str,
    issues: list[ValidationIssue],
    line: int,
    column: int,
) -> None:
    previous = names.get(name)
    if previous is None:
        names[name] = NameInfo(kind, line, column)
        return
    article = "another" if previous.object == kind else "a"
    msg = NAME_ALREADY_EXTENDED_MSG.format(
        name=name, kind=kind, article=article, previous=previous.object, line=previous.line
    )
    append_issue(issues, msg, line, column)


def _check_requires(
    owner: Mapping, owner_node: Optional[YamlNode], issues: list[ValidationIssue]
) -> None:
    names: dict[str, NameInfo] = {}
    for index, requires in enumerate(_entries(owner, "requires")):
        line, column = get_named_object_position_by_index(owner_node, "requires", index)
        _extended_once(
            names, _text(requires.get("name")), REQUIRES_PROP_ENTITY_KIND, issues, line, column
        )


def check_single_extend_names(
    mta: Any, root: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Report modules, resources, hooks, provided and required sets extended
    more than once within their own section."""
    issues: list[ValidationIssue] = []

    module_names: dict[str, NameInfo] = {}
    for i, module in enumerate(_entries(mta, "modules")):
        module_node = get_named_object_node_by_index(root, "modules", i)
        line, column = get_named_object_position_by_index(root, "modules", i)
        _extended_once(
            module_names, _text(module.get("name")), MODULE_ENTITY_KIND, issues, line, column
        )

        provides_names: dict[str, NameInfo] = {}
        for j, provides in enumerate(_entries(module, "provides")):
            line, column = get_named_object_position_by_index(module_node, "provides", j)
            _extended_once(
                provides_names, _text(provides.get("name")), PROVIDED_PROP_ENTITY_KIND,
                issues, line, column,
            )

        _check_requires(module, module_node, issues)

        hook_names: dict[str, NameInfo] = {}
        for j, hook in enumerate(_entries(module, "hooks")):
            hook_node = get_named_object_node_by_index(module_node, "hooks", j)
            line, column = get_named_object_position_by_index(module_node, "hooks", j)
            _extended_once(
                hook_names, _text(hook.get("name")), HOOK_ENTITY_KIND, issues, line, column
            )
            _check_requires(hook, hook_node, issues)

    resource_names: dict[str, NameInfo] = {}
    for i, resource in enumerate(_entries(mta, "resources")):
        resource_node = get_named_object_node_by_index(root, "resources", i)
        line, column = get_named_object_position_by_index(root, "resources", i)
        _extended_once(
            resource_names, _text(resource.get("name")), RESOURCE_ENTITY_KIND,
            issues, line, column,
        )
        _check_requires(resource, resource_node, issues)

    return issues, []