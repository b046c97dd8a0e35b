"""Validation modes and conversion of parser messages to issues."""

from __future__ import annotations

import re
from typing import Iterable, Union

from mtalint.issues import ValidationIssue, append_issue

_LINE_PREFIX_RE = re.compile(r"(.)*line [0-9]+: ")
_NUMBER_RE = re.compile(r"[0-9]+")
_MAX_LINE = 2**63 - 1


def get_validation_mode(validation_flag: str) -> tuple[bool, bool]:
    """Map a mode name to ``(validate_schema, validate_semantic)``.

    Raises ValueError for an unknown mode.
    """
    if validation_flag == "schema":
        return True, False
    if validation_flag in ("semantic", ""):
        return True, True
    raise ValueError(
        f'the "{validation_flag}" validation mode is incorrect; '
        "expected one of the following: schema, semantic"
    )


def _line_number(prefix: str) -> int:
    match = _NUMBER_RE.search(prefix)
    if match is None:
        return 1
    number = int(match.group())
    return number if number <= _MAX_LINE else 1


def convert_errors(
    messages: Union[str, BaseException, Iterable[Union[str, BaseException]]],
) -> list[ValidationIssue]:
    """Turn parser messages into issues, taking the line from a ``line N:`` prefix.

    A message without a usable line number is placed on line 1; empty messages
    are dropped.
    """
    if isinstance(messages, (str, BaseException)):
        messages = [messages]
    issues: list[ValidationIssue] = []
    for message in messages:
        text = str(message)
        match = _LINE_PREFIX_RE.search(text)
        prefix = match.group() if match else ""
        if prefix:
            text = text.replace(prefix, "", 1)
        append_issue(issues, text, _line_number(prefix), 0)
    return issues