"""Constraints that the deployer places on modules."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from mtalint.issues import ValidationIssue
from mtalint.yamlnode import YamlNode, get_prop_content

MISSING_CONFIG_DOC_LINK = (
    "https://docs.example.com/mta-build/migration#features-that-are-handled-differently"
)
MISSING_CONFIGS_MSG = (
    'the "{name}" module does not contain the mandatory "supported-platforms" and '
    '"build-result" build configurations; see "{link}"'
)
MISSING_CONFIG_MSG = (
    'the "{name}" module does not contain the mandatory "{field}" build configuration; '
    'see "{link}"'
)

HTML5_REPO_DEPLOY_MODE = "html5-repo"
HTML5_MODULE_TYPE = "html5"

_SUPPORTED_PLATFORMS = "supported-platforms"
_BUILD_RESULT = "build-result"


def _as_map(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _module_params_issue(
    module: Mapping, module_node: Optional[YamlNode]
) -> Optional[ValidationIssue]:
    params = _as_map(module.get("build-parameters"))
    platforms_defined = params.get(_SUPPORTED_PLATFORMS) is not None
    result_defined = params.get(_BUILD_RESULT) is not None
    name = "" if module.get("name") is None else str(module.get("name"))

    if not platforms_defined and not result_defined:
        msg = MISSING_CONFIGS_MSG.format(name=name, link=MISSING_CONFIG_DOC_LINK)
    elif not platforms_defined:
        msg = MISSING_CONFIG_MSG.format(
            name=name, field=_SUPPORTED_PLATFORMS, link=MISSING_CONFIG_DOC_LINK
        )
    elif not result_defined:
        msg = MISSING_CONFIG_MSG.format(
            name=name, field=_BUILD_RESULT, link=MISSING_CONFIG_DOC_LINK
        )
    else:
        return None
    if module_node is None:
        return ValidationIssue(msg, 0, 0)
    return ValidationIssue(msg, module_node.line, module_node.column)


def check_deployer_constraints(
    mta: Any, mta_node: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """In ``html5-repo`` deploy mode, require html5 modules to define
    ``supported-platforms`` and ``build-result`` build parameters."""
    descriptor = _as_map(mta)
    deploy_mode = _as_map(descriptor.get("parameters")).get("deploy_mode")
    # a non-string deploy mode is reported by the schema checks
    if not isinstance(deploy_mode, str) or deploy_mode != HTML5_REPO_DEPLOY_MODE:
        return [], []

    modules = descriptor.get("modules")
    modules_nodes = get_prop_content(mta_node, "modules")
    issues: list[ValidationIssue] = []
    for index, module in enumerate(modules if isinstance(modules, list) else []):
        module = _as_map(module)
        if module.get("type") != HTML5_MODULE_TYPE:
            continue
        module_node = modules_nodes[index] if index < len(modules_nodes) else None
        issue = _module_params_issue(module, module_node)
        if issue is not None:
            issues.append(issue)
    return issues, []