"""
Deep merge of an override node tree into a base node tree.

Merge rules by (base, override) kind:

- Document / Document: merge the two roots
- Mapping / Mapping: key-wise merge, unknown keys are appended
- Sequence / Sequence: wholesale replacement for scalar lists, identity
  matched merge for lists of mappings (with the ``_drop`` marker)
- anything / Scalar: the override scalar wins
- everything else: base is left untouched

The base tree is mutated in place. Nodes from the override tree may be
moved into the base tree, so the override must not be reused afterwards.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

import yaml as _yaml

import magic_ansible.constants as constants
import magic_ansible.overrides._nodes as nodes

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True, slots=True)
class IdentityKey:
    """Field name and scalar value identifying a mapping inside a list."""

    key: str
    value: str


def merge_nodes(base: _typing.Any, override: _typing.Any) -> _typing.Any:
    """
    Merge ``override`` into ``base``.

    Args:
        base: Document or node to update in place.
        override: Document or node providing the changes.

    Returns:
        The node that now holds the merged value. This is ``base`` itself
        except when a non-scalar base is replaced by a scalar override, in
        which case the override node is returned and callers must store it
        in the slot ``base`` occupied.
    """
    if base is None or override is None:
        return base

    if isinstance(base, nodes.Document) and isinstance(override, nodes.Document):
        if base.root is not None and override.root is not None:
            base.root = merge_nodes(base.root, override.root)
        return base

    if isinstance(base, _yaml.MappingNode) and isinstance(override, _yaml.MappingNode):
        merge_mappings(base, override)
        return base

    if isinstance(base, _yaml.SequenceNode) and isinstance(override, _yaml.SequenceNode):
        merge_sequences(base, override)
        return base

    if isinstance(override, _yaml.ScalarNode) and not isinstance(base, nodes.Document):
        if isinstance(base, _yaml.ScalarNode):
            base.value = override.value
            base.tag = override.tag
            base.style = override.style
            return base
        # Shape change (e.g. mapping -> scalar): the override replaces base
        return override

    return base


def merge_mappings(base: _yaml.MappingNode, override: _yaml.MappingNode) -> None:
    """
    Merge override pairs into base, key by key.

    Existing keys are merged recursively in place, new keys are appended
    after the existing ones in override order. No key is ever removed.
    """
    for override_key, override_value in override.value:
        wanted = nodes.scalar_key(override_key)
        for index, (base_key, base_value) in enumerate(base.value):
            if wanted is not None and nodes.scalar_key(base_key) == wanted:
                base.value[index] = (base_key, merge_nodes(base_value, override_value))
                break
        else:
            base.value.append((override_key, override_value))


def merge_sequences(base: _yaml.SequenceNode, override: _yaml.SequenceNode) -> None:
    """
    Merge two sequences.

    Lists of scalars (or an empty override) have no reliable way to match
    items, so the override list replaces the base list. As soon as the
    override holds at least one mapping, items are matched by identity
    key instead (see merge_keyed_items).
    """
    if not override.value or not any(
        isinstance(item, _yaml.MappingNode) for item in override.value
    ):
        base.value = list(override.value)
        return

    merge_keyed_items(base, override)


def merge_keyed_items(base: _yaml.SequenceNode, override: _yaml.SequenceNode) -> None:
    """
    Merge mapping items of ``override`` into ``base`` by identity key.

    For each mapping in the override list:

    - without an identity key it is appended
    - with an identity key matching a base item, it is either merged into
      that item or, when it carries ``_drop: true``, the base item is removed
    - with an identity key matching nothing, it is appended

    Non-mapping override items are skipped.
    """
    for item in override.value:
        if not isinstance(item, _yaml.MappingNode):
            continue

        identity = find_identity(item)
        if identity is None:
            base.value.append(item)
            continue

        match_index = _find_matching_index(base, identity)
        if match_index is None:
            if should_drop(item):
                _logger.warning(
                    "nothing to drop for %s=%s, appending the item as is",
                    identity.key,
                    identity.value,
                )
            base.value.append(item)
        elif should_drop(item):
            del base.value[match_index]
        else:
            merge_mappings(base.value[match_index], item)


def find_identity(
    mapping: _yaml.Node,
    identifying_keys: _typing.Sequence[str] = constants.IDENTIFYING_KEYS,
) -> IdentityKey | None:
    """
    Return the identity key of a mapping item.

    Keys are tried in priority order; the first one present with a scalar
    value wins.
    """
    if not isinstance(mapping, _yaml.MappingNode):
        return None

    for wanted in identifying_keys:
        value = nodes.get_value(mapping, wanted)
        if isinstance(value, _yaml.ScalarNode):
            return IdentityKey(key=wanted, value=str(value.value))
    return None


def should_drop(item: _yaml.Node) -> bool:
    """Check whether an override item carries an active drop marker."""
    if not isinstance(item, _yaml.MappingNode):
        return False

    for key_node, value_node in item.value:
        if nodes.scalar_key(key_node) == constants.DROP_MARKER_KEY and isinstance(
            value_node, _yaml.ScalarNode
        ):
            return bool(value_node.value == constants.DROP_MARKER_VALUE)
    return False


def _find_matching_index(base: _yaml.SequenceNode, identity: IdentityKey) -> int | None:
    """Index of the first base mapping with the same identity, if any."""
    for index, candidate in enumerate(base.value):
        if isinstance(candidate, _yaml.MappingNode) and find_identity(candidate) == identity:
            return index
    return None
