"""
YAML override engine.

Patches magic-modules definitions at the YAML node level before they are
turned into typed objects.

Example:
    >>> import magic_ansible.overrides as overrides
    >>> base = overrides.compose("properties:\\n  - name: a\\n    x: 1\\n")
    >>> patch = overrides.compose("properties:\\n  - name: a\\n    x: 2\\n")
    >>> _ = overrides.merge_nodes(base, patch)
    >>> print(overrides.serialize(base))
    properties:
    - name: a
      x: 2
"""

from magic_ansible.overrides._examples import example_config_path, patch_example_paths
from magic_ansible.overrides._loader import apply_overrides, load_override, override_path_for
from magic_ansible.overrides._locator import find_node_by_key
from magic_ansible.overrides._merge import (
    IdentityKey,
    find_identity,
    merge_keyed_items,
    merge_mappings,
    merge_nodes,
    merge_sequences,
    should_drop,
)
from magic_ansible.overrides._nodes import MAP_TAG, STR_TAG, Document, compose, new_scalar, serialize

__all__ = [
    "MAP_TAG",
    "STR_TAG",
    "Document",
    "IdentityKey",
    "apply_overrides",
    "compose",
    "example_config_path",
    "find_identity",
    "find_node_by_key",
    "load_override",
    "merge_keyed_items",
    "merge_mappings",
    "merge_nodes",
    "merge_sequences",
    "new_scalar",
    "override_path_for",
    "patch_example_paths",
    "serialize",
    "should_drop",
]
