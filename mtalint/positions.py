"""Locate named objects and their properties in a YAML node tree."""

from __future__ import annotations

from typing import Optional

from mtalint.yamlnode import YamlNode, get_prop_value_by_name

_NAME_FIELD = "name"


def _item(node: Optional[YamlNode], index: int) -> Optional[YamlNode]:
    if node is None or not 0 <= index < len(node.content):
        return None
    return node.content[index]


def get_indexed_node_prop_position(
    node: Optional[YamlNode], index: int, prop_name: str
) -> tuple[int, int, bool]:
    """Return ``(line, column, found)`` of ``prop_name`` in the ``index``-th child of ``node``.

    When the property is missing, the position of the child itself is returned
    with ``found`` set to False.
    """
    indexed = _item(node, index)
    if indexed is None:
        return 0, 0, False
    value = get_prop_value_by_name(indexed, prop_name)
    if value is None:
        return indexed.line, indexed.column, False
    return value.line, value.column, True


def get_named_object_node_by_index(
    parent_node: Optional[YamlNode], field_name: str, index: int
) -> Optional[YamlNode]:
    """Return the ``index``-th item of the sequence under ``field_name``."""
    return _item(get_prop_value_by_name(parent_node, field_name), index)


def get_named_object_position_by_index(
    parent_node: Optional[YamlNode], field_name: str, index: int
) -> tuple[int, int]:
    """Return the position of the ``name`` of the ``index``-th item under ``field_name``."""
    objects = get_prop_value_by_name(parent_node, field_name)
    line, column, _ = get_indexed_node_prop_position(objects, index, _NAME_FIELD)
    return line, column