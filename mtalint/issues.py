"""Validation issues and helpers for collecting, ordering and printing them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found in a YAML document."""

    msg: str
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"line {self.line}: {self.msg}"


def append_issue(
    issues: list[ValidationIssue], msg: str, line: int, column: int
) -> list[ValidationIssue]:
    """Append an issue to ``issues`` unless ``msg`` is empty; return the list."""
    if msg:
        issues.append(ValidationIssue(msg, line, column))
    return issues


def sort_issues(issues: Iterable[ValidationIssue]) -> list[ValidationIssue]:
    """Return the issues ordered by line, then column, keeping equal ones in order."""
    return sorted(issues, key=lambda issue: (issue.line, issue.column))


def format_issues(issues: Iterable[ValidationIssue]) -> str:
    """Render the issues one per line as ``line N: message``."""
    return "\n".join(str(issue) for issue in issues)