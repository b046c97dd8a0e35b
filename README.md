# mtalint

`mtalint` is a library of checks for multi-target application descriptors (`mta.yaml`) and their extension descriptors (`.mtaext`). The checks cover the schema and the meaning of a descriptor. Every problem is reported as a `ValidationIssue` that holds a message, a line and a column.

## Installation

```
pip install mtalint
```

To install the test dependencies as well:

```
pip install "mtalint[test]"
```

## Inputs

Most checks need the descriptor in two forms:

- **Plain data.** This is the descriptor as dictionaries and lists, for example the result of `yaml.safe_load`. The checks read the values from it.
- **A node tree.** This comes from `mtalint.yamlnode.load_content_node`. The checks use it to find where each value sits in the file.

`load_content_node` accepts `str` or `bytes` and parses the first document. It returns a `YamlNode` whose lines and columns count from 1.

If the text cannot be parsed, it raises `YamlParseError`, a subclass of `ValueError`. The message is `"EOF"` when the text holds no document.

## Issues

`mtalint.issues` provides the issue type and helpers for working with lists of issues:

| Name | What it does |
|---|---|
| `ValidationIssue(msg, line, column)` | A frozen dataclass. `str()` of an issue gives `line N: msg`. |
| `append_issue` | Adds an issue to a list, skipping it when the message is empty. |
| `sort_issues` | Returns the issues in a stable order, by line and then by column. |
| `format_issues` | Joins the issues into text, one issue per line. |

## The checks DSL

`mtalint.checks` provides small checks that can be combined. Each check is called with a node, its parent and a path, and returns a list of issues.

- **Combinators:** `prop`, `prop_name`, `sequence`, `sequence_fail_fast`, `for_each`, `for_each_property`, `optional`.
- **Tests on the node:** `required`, `does_not_exist`, `type_is_not_map_array`, `type_is_array`, `type_is_map`, `type_is_boolean`, `matches_regexp`, `matches_enum_values`.

`run_schema_validations(node, *checks)` runs the checks on a root node:

```python
from mtalint.yamlnode import load_content_node
from mtalint.checks import prop, required, matches_regexp, sequence, run_schema_validations
from mtalint.issues import format_issues

node = load_content_node(b"firstName: Donald\nlastName: duck\n")
issues = run_schema_validations(
    node,
    prop("firstName", sequence(required(), matches_regexp(r"^[0-9]+$"))),
)
print(format_issues(issues))
# line 1: the "Donald" value of the "root.firstName" property does not match the "^[0-9]+$" pattern
```

## Checks built from a schema

`mtalint.schema_builder.build_validations_from_schema_text` reads a schema written in YAML and returns a pair: `(checks, schema_issues)`.

The schema may use these keys:

- `type: map` together with `mapping`. Inside `mapping`, the key `=` applies its rule to every key.
- `type: seq` together with a `sequence` of exactly one item.
- `type: bool`.
- `required`.
- `pattern`, written as `/regex/`.
- `enum`.

Problems in the schema itself come back as issues at line 0 and column 0.

```python
from mtalint.schema_builder import build_validations_from_schema_text
from mtalint.checks import run_schema_validations
from mtalint.yamlnode import load_content_node

checks, schema_issues = build_validations_from_schema_text(b"""
type: map
mapping:
  ID: {required: true, pattern: '/^[A-Za-z0-9_\\-\\.]+$/'}
""")
issues = run_schema_validations(load_content_node(b"ID: my app\n"), *checks)
```

## Other schema checks

These functions take the plain data and the node tree, and return a list of issues:

| Function | What it checks |
|---|---|
| `mtalint.builder_schema.check_builder_schema(mta, mta_node)` | `deploy_mode` and each module's `builder` must be strings, and `commands` must be a sequence of strings. |
| `mtalint.metadata.check_metadata_schema(mta, mta_node)` | `datatype` must not appear inside `parameters-metadata`. |
| `mtalint.semantic.run_additional_ext_schema_validations(ext_node)` | Reports keys that an extension may not set: `public` in `provides`, and `list`, `properties-metadata` or `parameters-metadata` in `requires`. |

## Semantic checks

`mtalint.semantic.run_semantic_validations(mta, root, source, exclude, strict)` runs the checks for a descriptor. `source` is the project folder; module paths are resolved against it. The function returns a pair: `(errors, warnings)`.

The checks, with the name that excludes each one:

| Name | Check |
|---|---|
| `paths` | Module paths exist under `source`. |
| `emptyPath` | Each module has a path, unless `no-source: true` is set. |
| `names` | Names of modules, provided property sets and resources are unique. |
| `required` | Required property sets and `~{...}` placeholders can be resolved. |
| `builders` | `commands` is given only to the `custom` builder, and the `custom` builder always has it. |
| `deprecatedOpts` | Reports `npm-opts`, `grunt-opts` and `maven-opts`. |
| `deployerConstraints` | With `deploy_mode: html5-repo`, html5 modules must declare `supported-platforms` and `build-result`. |
| `metadata` | Parameters and properties metadata agree with the values they describe. |
| `checkNoSourceParam` | `no-source` is a boolean. |

A check is left out when its name occurs anywhere in the `exclude` string, for example `"paths,names"`.

When `strict` is false, the `builders` and `metadata` issues are returned as warnings instead of errors.

`run_ext_semantic_validations(mta_ext, root, source, exclude, strict)` runs the checks for an extension descriptor:

- `names`: each module, resource, hook, provided set and required set is extended only once.
- `deprecatedOpts`: the same check as for a descriptor.

`semantic_validations(exclude)` and `ext_semantic_validations(exclude)` return the list of checks that would run.

## Validation modes and parser messages

`mtalint.modes.get_validation_mode(flag)` maps a mode name to `(validate_schema, validate_semantic)`:

| `flag` | Result |
|---|---|
| `"schema"` | `(True, False)` |
| `"semantic"` | `(True, True)` |
| `""` | `(True, True)` |
| anything else | raises `ValueError` |

`mtalint.modes.convert_errors(messages)` turns parser messages into issues. It takes the line from a `line N:` prefix and removes that prefix from the message. If no usable line number is found, the issue is placed on line 1.

## What the package does not do

`mtalint` is a library of checks only. It does not do the following:

- It has no command-line tool.
- It does not read descriptor files from disk. The only file-system access is the module path check.
- It does not ship a built-in descriptor schema.
- It does not merge extensions into a descriptor.

The caller loads the YAML, builds or supplies the schema, and combines the results.

## Running the tests

```
pytest
```