"""Run the semantic checks on descriptors and extensions, and extension-only schema rules."""

from __future__ import annotations

from typing import Any, Callable, Optional

from mtalint.artifacts import if_module_path_empty, if_module_path_exists, if_no_source_param_bool
from mtalint.checks import does_not_exist, for_each, prop, prop_name, run_schema_validations, sequence
from mtalint.custom_builder import check_builders_semantic
from mtalint.deployer import check_deployer_constraints
from mtalint.deprecated import check_deprecated_opts, check_ext_deprecated_opts
from mtalint.ext_names import check_single_extend_names
from mtalint.issues import ValidationIssue
from mtalint.metadata import check_params_and_properties_metadata
from mtalint.resolved import if_required_defined
from mtalint.uniqueness import is_name_unique
from mtalint.yamlnode import YamlNode

SemanticCheck = Callable[
    [Any, Optional[YamlNode], str, bool],
    tuple[list[ValidationIssue], list[ValidationIssue]],
]

PATHS_VALIDATION = "paths"
EMPTY_PATH_VALIDATION = "emptyPath"
NAMES_VALIDATION = "names"
REQUIRED_VALIDATION = "required"
BUILDERS_VALIDATION = "builders"
DEPRECATED_OPTS_VALIDATION = "deprecatedOpts"
DEPLOYER_CONSTRAINTS_VALIDATION = "deployerConstraints"
METADATA_VALIDATION = "metadata"
NO_SOURCE_PARAM_VALIDATION = "checkNoSourceParam"

_SEMANTIC_CHECKS: tuple[tuple[str, SemanticCheck], ...] = (
    (PATHS_VALIDATION, if_module_path_exists),
    (EMPTY_PATH_VALIDATION, if_module_path_empty),
    (NAMES_VALIDATION, is_name_unique),
    (REQUIRED_VALIDATION, if_required_defined),
    (BUILDERS_VALIDATION, check_builders_semantic),
    (DEPRECATED_OPTS_VALIDATION, check_deprecated_opts),
    (DEPLOYER_CONSTRAINTS_VALIDATION, check_deployer_constraints),
    (METADATA_VALIDATION, check_params_and_properties_metadata),
    (NO_SOURCE_PARAM_VALIDATION, if_no_source_param_bool),
)

_EXT_SEMANTIC_CHECKS: tuple[tuple[str, SemanticCheck], ...] = (
    (NAMES_VALIDATION, check_single_extend_names),
    (DEPRECATED_OPTS_VALIDATION, check_ext_deprecated_opts),
)


def _select(checks: tuple[tuple[str, SemanticCheck], ...], exclude: str) -> list[SemanticCheck]:
    # an exclusion matches when its name occurs anywhere in the exclude text
    return [check for name, check in checks if name not in (exclude or "")]


def _run(
    checks: list[SemanticCheck], mta: Any, root: Optional[YamlNode], source: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    for check in checks:
        new_errors, new_warnings = check(mta, root, source, strict)
        errors.extend(new_errors)
        warnings.extend(new_warnings)
    return errors, warnings


def semantic_validations(exclude: str) -> list[SemanticCheck]:
    """Return the descriptor's semantic checks, without those named in ``exclude``."""
    return _select(_SEMANTIC_CHECKS, exclude)


def run_semantic_validations(
    mta: Any, root: Optional[YamlNode], source: str, exclude: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Run the descriptor's semantic checks; return ``(errors, warnings)``."""
    return _run(semantic_validations(exclude), mta, root, source, strict)


def ext_semantic_validations(exclude: str) -> list[SemanticCheck]:
    """Return the extension's semantic checks, without those named in ``exclude``."""
    return _select(_EXT_SEMANTIC_CHECKS, exclude)


def run_ext_semantic_validations(
    mta_ext: Any, root: Optional[YamlNode], source: str, exclude: str, strict: bool
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Run the extension's semantic checks; return ``(errors, warnings)``."""
    return _run(ext_semantic_validations(exclude), mta_ext, root, source, strict)


def run_additional_ext_schema_validations(ext_node: Optional[YamlNode]) -> list[ValidationIssue]:
    """Report fields that an extension may not set: ``public`` in provides and
    ``list``, ``properties-metadata`` or ``parameters-metadata`` in requires."""
    requires_check = prop(
        "requires",
        for_each(
            prop_name("list", does_not_exist()),
            prop_name("properties-metadata", does_not_exist()),
            prop_name("parameters-metadata", does_not_exist()),
        ),
    )
    return list(
        run_schema_validations(
            ext_node,
            sequence(
                prop(
                    "modules",
                    for_each(
                        prop("provides", for_each(prop_name("public", does_not_exist()))),
                        requires_check,
                        prop("hooks", for_each(requires_check)),
                    ),
                ),
                prop("resources", for_each(requires_check)),
            ),
        )
    )