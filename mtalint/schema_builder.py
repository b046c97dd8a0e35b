"""Build YAML checks from a schema that is itself written in YAML."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Callable, Union

import yaml

from mtalint.checks import (
    YamlCheck,
    for_each,
    for_each_property,
    matches_enum_values,
    matches_regexp,
    optional,
    prop,
    required,
    sequence_fail_fast,
    type_is_array,
    type_is_boolean,
    type_is_map,
)
from mtalint.issues import ValidationIssue

SchemaBuild = tuple[list[YamlCheck], list[ValidationIssue]]

_INVALID_SCHEMA = "invalid .yaml file schema: "
_PARSE_FAILED = "validation failed when parsing the MTA schema file: "


class _SchemaLoader(yaml.SafeLoader):
    """Safe loader that reads a bare ``=`` as a plain string."""


_SchemaLoader.add_constructor("tag:yaml.org,2002:value", _SchemaLoader.construct_yaml_str)


def _schema_issue(message: str) -> list[ValidationIssue]:
    return [ValidationIssue(_INVALID_SCHEMA + message, 0, 0)]


def _describe_parse_error(exc: yaml.YAMLError) -> str:
    prefix = "unmarshal []byte to yaml failed: yaml: "
    if isinstance(exc, yaml.MarkedYAMLError):
        mark = exc.problem_mark or exc.context_mark
        problem = exc.problem or exc.context or "invalid YAML"
        if mark is not None:
            return f"{prefix}line {mark.line + 1}: {problem}"
        return prefix + problem
    return prefix + str(exc)


def _get(schema: Any, key: str) -> Any:
    return schema.get(key) if isinstance(schema, dict) else None


def _format_float(value: float) -> str:
    """Format a float with the shortest digits, switching to exponent form like ``%g``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    point = len(digits) + exponent
    prefix = "-" if sign else ""
    exp10 = point - 1
    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp10):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return prefix + digits + "0" * (point - len(digits))
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def literal_string_value(value: Any) -> str:
    """Return a scalar schema value as text; collections and null give ``""``."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return ""


def build_validations_from_schema_text(text: Union[str, bytes]) -> SchemaBuild:
    """Parse schema text and build its checks; return ``(checks, schema_issues)``."""
    try:
        schema = yaml.load(text, Loader=_SchemaLoader)
    except yaml.YAMLError as exc:
        return [], [ValidationIssue(_PARSE_FAILED + _describe_parse_error(exc), 0, 0)]
    return build_validations_from_schema(schema)


def build_validations_from_schema(schema: Any) -> SchemaBuild:
    """Build the checks for a parsed schema node; return ``(checks, schema_issues)``."""
    type_value = _get(schema, "type")
    if type_value == "map":
        mapping = _get(schema, "mapping")
        if not isinstance(mapping, dict):
            return [], _schema_issue("the mapping node must be a map")
        checks, issues = _build_for_mapping(mapping)
        return _optional_or_required(schema, checks, issues)
    if type_value == "seq":
        items = _get(schema, "sequence")
        if not isinstance(items, list):
            return [], _schema_issue("the sequence node must be an array")
        if len(items) != 1:
            return [], _schema_issue("the sequence node must have exactly one item")
        checks, issues = _build_for_sequence_item(items[0])
        return _optional_or_required(schema, checks, issues)
    return _build_leaf(schema)


def _build_for_mapping(mapping: dict) -> SchemaBuild:
    keys = [key for key in mapping if isinstance(key, str)]
    if keys == ["="]:
        inner, issues = build_validations_from_schema(mapping["="])
        return [for_each_property(*inner)], issues

    checks: list[YamlCheck] = [type_is_map()]
    issues: list[ValidationIssue] = []
    for key in keys:
        inner, inner_issues = build_validations_from_schema(mapping[key])
        issues.extend(inner_issues)
        checks.append(prop(key, *inner))
    return checks, issues


def _build_for_sequence_item(item: Any) -> SchemaBuild:
    inner, issues = build_validations_from_schema(item)
    return [sequence_fail_fast(type_is_array(), for_each(*inner))], issues


def _build_leaf(schema: Any) -> SchemaBuild:
    checks: list[YamlCheck] = []
    issues: list[ValidationIssue] = []
    builders: tuple[Callable[[Any], SchemaBuild], ...] = (
        _build_type_validation,
        _build_pattern_validation,
    )
    for builder in builders:
        new_checks, new_issues = builder(schema)
        checks.extend(new_checks)
        issues.extend(new_issues)
    # "required" wraps everything built so far, so it must come last.
    return _optional_or_required(schema, checks, issues)


def _optional_or_required(
    schema: Any, checks: list[YamlCheck], issues: list[ValidationIssue]
) -> SchemaBuild:
    flag = _get(schema, "required")
    if flag is not None:
        text = literal_string_value(flag)
        if text not in ("true", "false"):
            return checks, [*issues, *_schema_issue("the required node must be a boolean ")]
        if text == "true":
            return [sequence_fail_fast(required(), *checks)], issues
    return [optional(*checks)], issues


def _build_type_validation(schema: Any) -> SchemaBuild:
    checks: list[YamlCheck] = []
    issues: list[ValidationIssue] = []

    type_value = _get(schema, "type")
    if type_value is not None:
        if not isinstance(type_value, str):
            return [], _schema_issue("the type node must be a string")
        if type_value == "bool":
            checks.append(type_is_boolean())

    enum = _get(schema, "enum")
    if enum is not None:
        enum_checks, enum_issues = _build_enum_validation(enum)
        checks.extend(enum_checks)
        issues.extend(enum_issues)
    return checks, issues


def _build_enum_validation(enum: Any) -> SchemaBuild:
    if not isinstance(enum, list):
        return [], _schema_issue("enums values must be listed as an array")
    if any(isinstance(item, (list, dict)) for item in enum):
        return [], _schema_issue("enum values must be simple")
    return [matches_enum_values([literal_string_value(item) for item in enum])], []


def _build_pattern_validation(schema: Any) -> SchemaBuild:
    pattern = _get(schema, "pattern")
    if pattern is None:
        return [], []
    if not isinstance(pattern, str):
        return [], _schema_issue("the pattern node must be a string")
    stripped = pattern.removeprefix("/").removesuffix("/")
    try:
        re.compile(stripped)
    except re.error as exc:
        return [], _schema_issue(
            f"the pattern node is invalid because: error parsing regexp: {exc}"
        )
    return [matches_regexp(stripped)], []