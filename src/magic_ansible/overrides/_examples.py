"""
Redirect example templates to the generator's own template directory.

Upstream example entries carry a ``config_path`` pointing at a Terraform
template. The typed model renders that template while it is being
loaded, so the path has to be rewritten on the node tree before the
document is turned into typed objects.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib

import yaml as _yaml

import magic_ansible.constants as constants
import magic_ansible.overrides._locator as locator
import magic_ansible.overrides._nodes as nodes

_logger = _logging.getLogger(__name__)


def example_config_path(template_directory: _pathlib.Path | str, name: str) -> str:
    """Template path used for the example called ``name``."""
    return str(
        _pathlib.Path(template_directory)
        / constants.EXAMPLES_KEY
        / f"{name}{constants.EXAMPLE_TEMPLATE_SUFFIX}"
    )


def patch_example_paths(
    root: nodes.Document | _yaml.Node | None,
    template_directory: _pathlib.Path | str,
) -> int:
    """
    Point every example's ``config_path`` at ``<template_directory>/examples``.

    The first ``examples`` list in the tree is used. For each mapping in
    it, ``config_path`` is overwritten with the path derived from the
    example's ``name`` (empty if missing), or appended if absent.

    Returns:
        Number of examples patched. Zero if there is no examples list.
    """
    examples = locator.find_node_by_key(root, constants.EXAMPLES_KEY)
    if not isinstance(examples, _yaml.SequenceNode):
        return 0

    patched = 0
    for example in examples.value:
        if not isinstance(example, _yaml.MappingNode):
            continue

        name_node = nodes.get_value(example, "name")
        name = str(name_node.value) if isinstance(name_node, _yaml.ScalarNode) else ""
        config_path = example_config_path(template_directory, name)

        for index, (key_node, value_node) in enumerate(example.value):
            if nodes.scalar_key(key_node) != constants.EXAMPLE_CONFIG_PATH_KEY:
                continue
            if isinstance(value_node, _yaml.ScalarNode):
                value_node.value = config_path
                value_node.tag = nodes.STR_TAG
            else:
                example.value[index] = (key_node, nodes.new_scalar(config_path))
            break
        else:
            example.value.append(
                (nodes.new_scalar(constants.EXAMPLE_CONFIG_PATH_KEY), nodes.new_scalar(config_path))
            )

        _logger.debug("example %r now renders %s", name, config_path)
        patched += 1

    return patched
