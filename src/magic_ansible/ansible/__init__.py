"""
Mapping of magic-modules resources onto Ansible module concepts.

Module is the entry point: it takes a loaded product and resource and
derives options, documentation blocks, the argument spec and operation
settings from them.
"""

from magic_ansible.ansible.argspec import ArgumentOption, ArgumentSpec
from magic_ansible.ansible.documentation import Documentation, to_yaml
from magic_ansible.ansible.examples import ExampleBlock
from magic_ansible.ansible.module import Module, module_name, sort_properties
from magic_ansible.ansible.naming import camelize, plural, singular, underscore
from magic_ansible.ansible.operations import AsyncOps, OperationConfig, build_operations
from magic_ansible.ansible.options import (
    Dependencies,
    Option,
    analyze_dependencies,
    build_options,
)
from magic_ansible.ansible.returns import ReturnAttribute, ReturnBlock, returned_condition
from magic_ansible.ansible.types import (
    AnsibleType,
    ReturnType,
    map_mmv1_to_ansible,
    map_mmv1_to_return,
)

__all__ = [
    "AnsibleType",
    "ArgumentOption",
    "ArgumentSpec",
    "AsyncOps",
    "Dependencies",
    "Documentation",
    "ExampleBlock",
    "Module",
    "OperationConfig",
    "Option",
    "ReturnAttribute",
    "ReturnBlock",
    "ReturnType",
    "analyze_dependencies",
    "build_operations",
    "build_options",
    "camelize",
    "map_mmv1_to_ansible",
    "map_mmv1_to_return",
    "module_name",
    "plural",
    "returned_condition",
    "singular",
    "sort_properties",
    "to_yaml",
    "underscore",
]
