from collections import Counter

import pytest

from mtalint.checks import (
    PROPERTY_EXISTS_ERROR_MSG,
    build_path_string,
    does_not_exist,
    for_each,
    for_each_property,
    matches_enum_values,
    matches_regexp,
    optional,
    prop,
    prop_name,
    required,
    run_schema_validations,
    sequence,
    sequence_fail_fast,
    type_is_array,
    type_is_boolean,
    type_is_map,
    type_is_not_map_array,
)
from mtalint.issues import ValidationIssue
from mtalint.yamlnode import YamlParseError, load_content_node


def _node(data):
    try:
        return load_content_node(data)
    except YamlParseError as exc:
        return exc.node


def _run(data, *validations):
    return run_schema_validations(_node(data), *validations)


NAMES = """
firstName: Donald
lastName: duck
"""


@pytest.mark.parametrize(
    "data, validation",
    [
        (NAMES, prop("lastName", matches_regexp(r"^[A-Za-z0-9_\-\.]+$"))),
        (NAMES, prop("firstName", required())),
        (NAMES, prop("middleName", does_not_exist())),
        (NAMES, prop_name("middleName", does_not_exist())),
        (NAMES, prop("firstName", type_is_not_map_array())),
        ("\nlastName: duck\n", prop("firstName", type_is_not_map_array())),
        ("\nname: bisli\nregistered: false\n", prop("registered", type_is_boolean())),
        (
            "\nfirstName:\n   - 1\n   - 2\n   - 3\nlastName: duck\n",
            prop("firstName", type_is_array()),
        ),
        (
            "\nfirstName: Hello\nlastName: World\n",
            prop("firstName", sequence(required(), matches_regexp("^[A-Za-z0-9]+$"))),
        ),
        (
            "\nfirstName:\n   - 1\n   - 2\n   - 3\nlastName:\n   a : 1\n   b : 2\n",
            prop("lastName", type_is_map()),
        ),
        (
            """
firstName: Hello
lastName: World
classes:
 - name: biology
   room: MR113

 - name: history
   room: MR225

""",
            prop(
                "classes",
                sequence(
                    required(),
                    type_is_array(),
                    for_each(
                        prop("name", required()),
                        prop("room", matches_regexp("^MR[0-9]+$")),
                    ),
                ),
            ),
        ),
        (
            """
firstName: Hello
lastName: World
classes:
  biology:
    grade: 90
    optional: true
    room: MR113

  history:
    grade: 83
    optional: false
    room: MR225

""",
            prop(
                "classes",
                sequence(
                    required(),
                    type_is_map(),
                    for_each_property(
                        prop("grade", required()),
                        prop("optional", type_is_boolean()),
                        prop("room", matches_regexp("^MR[0-9]+$")),
                    ),
                ),
            ),
        ),
        (NAMES, prop("firstName", optional(type_is_not_map_array()))),
        ("\nlastName: duck\n", prop("firstName", optional(type_is_not_map_array()))),
    ],
)
def test_valid(data, validation):
    assert _run(data, validation) == []


@pytest.mark.parametrize(
    "data, message, line, column, validation",
    [
        (
            NAMES,
            r'the "Donald" value of the "root.firstName" property does not match the "^[0-9_\-\.]+$" pattern',
            2,
            12,
            prop("firstName", matches_regexp(r"^[0-9_\-\.]+$")),
        ),
        (
            NAMES,
            'missing the "age" required property in the root .yaml node',
            2,
            1,
            prop("age", required()),
        ),
        (
            "\nfirstName: Donald\nlastName: \n  - duck\n",
            PROPERTY_EXISTS_ERROR_MSG.format("lastName", "root"),
            3,
            1,
            prop_name("lastName", does_not_exist()),
        ),
        (
            "\nfirstName: Donald\nlastName: \n  - duck\n",
            PROPERTY_EXISTS_ERROR_MSG.format("lastName", "root"),
            4,
            3,
            prop("lastName", does_not_exist()),
        ),
        (
            "\nfirstName:\n   - 1\n   - 2\n   - 3\nlastName: duck\n",
            'the "root.firstName" property must be a string',
            3,
            4,
            prop("firstName", type_is_not_map_array()),
        ),
        (
            "\nname: bamba\nregistered: 123\n",
            'the "root.registered" property must be a boolean',
            3,
            13,
            prop("registered", type_is_boolean()),
        ),
        (
            "\nfirstName:\n   - 1\n   - 2\n   - 3\nlastName: duck\n",
            'the "root.lastName" property must be an array',
            6,
            11,
            prop("lastName", type_is_array()),
        ),
        (
            "\nfirstName:\n   - 1\n   - 2\n   - 3\nlastName:\n   a : 1\n   b : 2\n",
            'the "root.firstName" property must be a map',
            3,
            4,
            prop("firstName", type_is_map()),
        ),
        (
            "\nfirstName: Hello\nlastName: World\n",
            'missing the "missing" required property in the root .yaml node',
            2,
            1,
            prop("missing", sequence_fail_fast(required(), matches_regexp("^[0-9]+$"))),
        ),
        (
            "\nfirstName:\n  - 1\n  - 2\nlastName: duck\n",
            'the "root.firstName" property must be a string',
            3,
            3,
            prop("firstName", optional(type_is_not_map_array())),
        ),
    ],
)
def test_invalid(data, message, line, column, validation):
    assert _run(data, validation) == [ValidationIssue(message, line, column)]


def test_invalid_yaml_handling():
    data = "\nfirstName: Donald\n  lastName: duck # invalid indentation\n\t\t"
    issues = _run(data, prop("lastName", required()))
    assert len(issues) == 1


def test_for_each_invalid():
    data = """
firstName: Hello
lastName: World
classes:
 - name: biology
   room: oops

 - room: 225

optionalClasses:
  biology: true
  history: false
  english: unknown
"""
    validations = sequence(
        prop(
            "classes",
            sequence(
                required(),
                type_is_array(),
                for_each(
                    prop("name", required()),
                    prop("room", matches_regexp("^[0-9]+$")),
                ),
            ),
        ),
        prop("optionalClasses", for_each_property(type_is_boolean())),
    )
    issues = _run(data, validations)
    assert Counter(issues) == Counter(
        [
            ValidationIssue(
                'the "oops" value of the "classes[0].room" property does not match the "^[0-9]+$" pattern',
                6,
                10,
            ),
            ValidationIssue('missing the "name" required property in the classes[1] .yaml node', 8, 4),
            ValidationIssue('the "optionalClasses.english" property must be a boolean', 13, 12),
        ]
    )


def test_sequence_runs_all_checks():
    issues = _run(NAMES, prop("missing", sequence(required(), required())))
    assert len(issues) == 2


def test_matches_enum_values_lists_first_four():
    node = load_content_node("bird")
    check = matches_enum_values(["duck", "dog", "cat", "mouse", "elephant"])
    assert run_schema_validations(node, check) == [
        ValidationIssue(
            'the "bird" value of the "root" enum property is invalid; '
            "expected one of the following: duck,dog,cat,mouse",
            1,
            1,
        )
    ]


def test_matches_enum_values_accepts_member():
    node = load_content_node("dog")
    assert run_schema_validations(node, matches_enum_values(["duck", "dog"])) == []


@pytest.mark.parametrize(
    "path, expected",
    [
        ((), "root"),
        (("ID",), "root.ID"),
        (("[1]",), "root[1]"),
        (("modules", "[0]", "name"), "modules[0].name"),
        (("[0]", "firstKey", "[1]"), "[0].firstKey[1]"),
    ],
)
def test_build_path_string(path, expected):
    assert build_path_string(path) == expected