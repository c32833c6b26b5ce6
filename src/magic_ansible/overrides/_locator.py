"""Depth-first lookup of a field anywhere in a node tree."""

from __future__ import annotations

import yaml as _yaml

import magic_ansible.overrides._nodes as nodes


def find_node_by_key(
    root: nodes.Document | _yaml.Node | None,
    key: str,
) -> _yaml.Node | None:
    """
    Find the first value stored under ``key`` anywhere in the tree.

    The search is pre-order and follows document order. In a mapping every
    pair is checked in turn: a scalar key equal to ``key`` returns its value
    immediately, otherwise the value is searched before moving on to the
    next pair. Later occurrences of the same key are never returned.

    Args:
        root: Document or node to search.
        key: Field name to look for.

    Returns:
        The value node of the first match, or None if the key is absent.
    """
    if root is None:
        return None

    if isinstance(root, nodes.Document):
        return find_node_by_key(root.root, key)

    if isinstance(root, _yaml.MappingNode):
        for key_node, value_node in root.value:
            if isinstance(key_node, _yaml.ScalarNode) and key_node.value == key:
                return value_node
            found = find_node_by_key(value_node, key)
            if found is not None:
                return found
        return None

    if isinstance(root, _yaml.SequenceNode):
        for child in root.value:
            found = find_node_by_key(child, key)
            if found is not None:
                return found

    return None
