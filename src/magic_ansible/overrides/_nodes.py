"""
Node model for the override engine.

The engine works on PyYAML's representation graph rather than on plain
Python objects so that key order, scalar tags and quoting styles survive
a parse/patch/serialize round trip:

- MappingNode.value is an ordered list of (key_node, value_node) pairs
- SequenceNode.value is an ordered list of child nodes
- ScalarNode.value is the scalar text, ScalarNode.tag its resolved type

PyYAML's composer hands back the root node of a document directly, so
Document is a thin wrapper that gives the tree an explicit top.
"""

from __future__ import annotations

import typing as _typing

import yaml as _yaml

STR_TAG = "tag:yaml.org,2002:str"
MAP_TAG = "tag:yaml.org,2002:map"

Node = _typing.Union[_yaml.MappingNode, _yaml.SequenceNode, _yaml.ScalarNode]


class Document:
    """A parsed YAML document holding exactly one root node (or none if empty)."""

    __slots__ = ("root",)

    def __init__(self, root: _yaml.Node | None = None) -> None:
        self.root = root

    def __repr__(self) -> str:
        return f"Document({self.root!r})"


def compose(content: str | bytes) -> Document:
    """
    Parse YAML text into a Document.

    Only the first document of a multi-document stream is composed; later
    documents are ignored.

    Args:
        content: YAML text.

    Returns:
        Document wrapping the composed root node. An empty stream yields
        a Document whose root is None.

    Raises:
        yaml.YAMLError: If the first document is not valid YAML.
    """
    return Document(next(_yaml.compose_all(content, Loader=_yaml.SafeLoader), None))


def serialize(document: Document) -> str:
    """Serialize a Document back to YAML text, preserving key order."""
    if document.root is None:
        return ""
    return _yaml.serialize(
        document.root,
        Dumper=_yaml.SafeDumper,
        allow_unicode=True,
        width=float("inf"),
    )


def new_scalar(value: str) -> _yaml.ScalarNode:
    """Create a plain string scalar node."""
    return _yaml.ScalarNode(tag=STR_TAG, value=value)


def is_mapping(node: object) -> bool:
    return isinstance(node, _yaml.MappingNode)


def is_sequence(node: object) -> bool:
    return isinstance(node, _yaml.SequenceNode)


def is_scalar(node: object) -> bool:
    return isinstance(node, _yaml.ScalarNode)


def scalar_key(node: _yaml.Node) -> str | None:
    """Return the text of a scalar key node, or None for complex keys."""
    if isinstance(node, _yaml.ScalarNode):
        return str(node.value)
    return None


def get_value(mapping: _yaml.MappingNode, key: str) -> _yaml.Node | None:
    """Return the value paired with the first scalar key equal to ``key``."""
    for key_node, value_node in mapping.value:
        if scalar_key(key_node) == key:
            return value_node
    return None
