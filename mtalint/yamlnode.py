"""A positioned YAML node tree and lookups on it."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

import yaml

_CORE_PREFIX = "tag:yaml.org,2002:"

_NULL_VALUES = {"", "~", "null", "Null", "NULL"}
_BOOL_VALUES = {"true", "True", "TRUE", "false", "False", "FALSE"}
_INT_RE = re.compile(
    r"[-+]?(?:0[bB][01_]+|0[oO][0-7_]+|0[xX][0-9a-fA-F_]+|[0-9][0-9_]*)\Z"
)
_FLOAT_RE = re.compile(r"[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?\Z")
_SPECIAL_FLOATS = {
    ".inf", ".Inf", ".INF", "+.inf", "+.Inf", "+.INF",
    "-.inf", "-.Inf", "-.INF", ".nan", ".NaN", ".NAN",
}


class NodeKind(Enum):
    """The kind of a YAML node."""

    NONE = 0
    DOCUMENT = 1
    SEQUENCE = 2
    MAPPING = 3
    SCALAR = 4
    ALIAS = 5


@dataclass(eq=False)
class YamlNode:
    """A YAML node with its resolved tag and 1-based position.

    Mapping content is stored flat as key, value, key, value, ...
    """

    kind: NodeKind = NodeKind.NONE
    tag: str = ""
    value: str = ""
    line: int = 0
    column: int = 0
    content: list["YamlNode"] = field(default_factory=list)
    anchor: str = ""
    alias: Optional["YamlNode"] = field(default=None, repr=False)


class YamlParseError(ValueError):
    """Raised when YAML text cannot be read; ``node`` is an empty node to go on with."""

    def __init__(self, message: str, line: int = 0):
        super().__init__(message)
        self.line = line
        self.node = YamlNode()


def _short_tag(tag: str) -> str:
    if tag.startswith(_CORE_PREFIX):
        return "!!" + tag[len(_CORE_PREFIX):]
    return tag


def _resolve_plain(value: str) -> str:
    if value in _NULL_VALUES:
        return "!!null"
    if value in _BOOL_VALUES:
        return "!!bool"
    if value == "<<":
        return "!!merge"
    if _INT_RE.match(value):
        return "!!int"
    if value in _SPECIAL_FLOATS or _FLOAT_RE.match(value.replace("_", "")):
        return "!!float"
    return "!!str"


def _scalar_tag(event: yaml.ScalarEvent) -> str:
    if event.tag and event.tag != "!":
        return _short_tag(event.tag)
    if event.tag == "!" or event.style is not None:
        return "!!str"
    return _resolve_plain(event.value)


def _position(event: yaml.Event) -> tuple[int, int]:
    mark = event.start_mark
    return mark.line + 1, mark.column + 1


def _compose_first_document(events: Iterable[yaml.Event]) -> Optional[YamlNode]:
    anchors: dict[str, YamlNode] = {}
    stack: list[YamlNode] = []
    root: Optional[YamlNode] = None

    for event in events:
        if isinstance(event, (yaml.DocumentEndEvent, yaml.StreamEndEvent)):
            if root is not None or isinstance(event, yaml.StreamEndEvent):
                return root
            continue

        if isinstance(event, yaml.AliasEvent):
            line, column = _position(event)
            target = anchors.get(event.anchor)
            if target is None:
                raise YamlParseError(
                    f"yaml: line {line}: unknown anchor '{event.anchor}' referenced", line
                )
            node = YamlNode(
                kind=NodeKind.ALIAS, value=event.anchor, line=line, column=column, alias=target
            )
        elif isinstance(event, yaml.ScalarEvent):
            line, column = _position(event)
            node = YamlNode(
                kind=NodeKind.SCALAR,
                tag=_scalar_tag(event),
                value=event.value,
                line=line,
                column=column,
                anchor=event.anchor or "",
            )
            if event.anchor:
                anchors[event.anchor] = node
        elif isinstance(event, (yaml.SequenceStartEvent, yaml.MappingStartEvent)):
            line, column = _position(event)
            is_map = isinstance(event, yaml.MappingStartEvent)
            default_tag = "!!map" if is_map else "!!seq"
            explicit = event.tag if event.tag and event.tag != "!" else None
            node = YamlNode(
                kind=NodeKind.MAPPING if is_map else NodeKind.SEQUENCE,
                tag=_short_tag(explicit) if explicit else default_tag,
                line=line,
                column=column,
                anchor=event.anchor or "",
            )
            if event.anchor:
                anchors[event.anchor] = node
            stack.append(node)
            continue
        elif isinstance(event, (yaml.SequenceEndEvent, yaml.MappingEndEvent)):
            node = stack.pop()
        else:
            continue

        if stack:
            stack[-1].content.append(node)
        else:
            root = node
    return root


def load_content_node(content: Union[str, bytes]) -> YamlNode:
    """Parse the first YAML document in ``content`` and return its root node.

    Raises YamlParseError with the message "EOF" when there is no document.
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8")
    try:
        root = _compose_first_document(yaml.parse(content, Loader=yaml.SafeLoader))
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        line = mark.line + 1 if mark is not None else 0
        problem = exc.problem or exc.context or "invalid YAML"
        raise YamlParseError(f"yaml: line {line}: {problem}", line) from exc
    except yaml.YAMLError as exc:
        raise YamlParseError(f"yaml: {exc}") from exc
    if root is None:
        raise YamlParseError("EOF")
    return root


def get_prop_by_name(node: Optional[YamlNode], name: str) -> Optional[YamlNode]:
    """Return the key node named ``name`` in a mapping, following an alias."""
    if node is None:
        return None
    content = node.content
    if not content and node.alias is not None:
        content = node.alias.content
    if not content:
        return None
    return next((key for key in content[::2] if key.value == name), None)


def get_prop_value_by_name(node: Optional[YamlNode], name: str) -> Optional[YamlNode]:
    """Return the value node of the key ``name`` in a mapping."""
    if node is None or not node.content:
        return None
    for key, value in zip(node.content[::2], node.content[1::2]):
        if key.value == name:
            return value
    return None


def get_prop_content(node: Optional[YamlNode], name: str) -> list[YamlNode]:
    """Return the children of the value of ``name``, or an empty list."""
    value = get_prop_value_by_name(node, name)
    return value.content if value is not None else []