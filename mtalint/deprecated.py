"""Reports build options that are no longer supported."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue
from mtalint.yamlnode import YamlNode, get_prop_by_name, get_prop_content, get_prop_value_by_name

CUSTOM_BUILDER_DOC_LINK = "https://docs.example.com/mta-build/configuration#custom-builder"
DEPRECATED_OPT_MSG = (
    'the "{opt}" build configuration parameter is not supported by Cloud MTA Build tool; '
    'use the "custom" builder instead; see "{link}"'
)

DEPRECATED_OPTS = ("npm-opts", "grunt-opts", "maven-opts")


def _deprecated_opt_issues(
    build_params: Mapping, params_node: Optional[YamlNode]
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for opt in DEPRECATED_OPTS:
        if build_params.get(opt) is None:
            continue
        key_node = get_prop_by_name(params_node, opt)
        msg = DEPRECATED_OPT_MSG.format(opt=opt, link=CUSTOM_BUILDER_DOC_LINK)
        if key_node is None:
            issues.append(ValidationIssue(msg, 0, 0))
        else:
            issues.append(ValidationIssue(msg, key_node.line, key_node.column))
    return issues


def _check_modules(mta: Any, mta_node: Optional[YamlNode]) -> list[ValidationIssue]:
    modules = mta.get("modules") if isinstance(mta, Mapping) else None
    modules_nodes = get_prop_content(mta_node, "modules")
    issues: list[ValidationIssue] = []
    for index, module in enumerate(modules if isinstance(modules, list) else []):
        params = module.get("build-parameters") if isinstance(module, Mapping) else None
        if not isinstance(params, Mapping):
            continue
        module_node = modules_nodes[index] if index < len(modules_nodes) else None
        params_node = get_prop_value_by_name(module_node, "build-parameters")
        issues.extend(_deprecated_opt_issues(params, params_node))
    return issues


def check_deprecated_opts(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Report deprecated ``*-opts`` build parameters in the descriptor's modules."""
    return _check_modules(mta, mta_node), []


def check_ext_deprecated_opts(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Report deprecated ``*-opts`` build parameters in an extension's modules."""
    return _check_modules(mta, mta_node), []