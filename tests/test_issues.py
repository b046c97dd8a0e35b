from collections import Counter

import pytest

from mtalint.issues import ValidationIssue, append_issue, format_issues, sort_issues


def _make_issues(lines, columns):
    columns = columns or [0]
    return [
        ValidationIssue(f"line {line} col {column} issue", line, column)
        for line in lines
        for column in columns
    ]


@pytest.mark.parametrize(
    "lines, columns",
    [
        ([], None),
        ([300], None),
        ([1, 2, 3, 4, 12, 65], None),
        ([12, 2, 0], None),
        ([1, 1, 4, 23, 32, 5, 32], None),
        ([1, 1, 4, 23, 32, 5, 32], [2, 1]),
        ([3, 84, 600, 2, 0, 5, 0, 7, 5, 12], None),
        ([3, 84, 600, 2, 0, 5, 0, 7, 5, 12], [5, 6]),
        ([3, 84, 600, 2, 0, 5, 0, 7, 5, 12], [2, 1]),
    ],
)
def test_sort_issues(lines, columns):
    issues = _make_issues(lines, columns)
    result = sort_issues(issues)
    keys = [(issue.line, issue.column) for issue in result]
    assert keys == sorted(keys)
    assert Counter(result) == Counter(issues)
    for issue in result:
        assert issue.msg == f"line {issue.line} col {issue.column} issue"


def test_sort_issues_empty():
    assert sort_issues([]) == []


def test_sort_issues_is_stable():
    issues = [
        ValidationIssue("b", 2, 1),
        ValidationIssue("first", 1, 1),
        ValidationIssue("second", 1, 1),
    ]
    assert [issue.msg for issue in sort_issues(issues)] == ["first", "second", "b"]


def test_format_issues():
    issues = [ValidationIssue("one", 3, 4), ValidationIssue("two", 7, 0)]
    assert format_issues(issues) == "line 3: one\nline 7: two"


def test_format_issues_empty():
    assert format_issues([]) == ""


def test_append_issue_adds_issue():
    issues = []
    result = append_issue(issues, "message", 5, 6)
    assert result is issues
    assert issues == [ValidationIssue("message", 5, 6)]


def test_append_issue_skips_empty_message():
    issues = [ValidationIssue("x", 1, 1)]
    append_issue(issues, "", 2, 2)
    assert issues == [ValidationIssue("x", 1, 1)]