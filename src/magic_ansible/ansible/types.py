"""
Ansible data types and their mapping from magic-modules types.

- AnsibleType: types accepted in DOCUMENTATION options and argument specs
- ReturnType: types allowed in the RETURN block (adds ``complex``)
"""

from __future__ import annotations

import enum as _enum
import logging as _logging

import magic_ansible.schema.types as schema_types

_logger = _logging.getLogger(__name__)


class AnsibleType(_enum.Enum):
    """Option types understood by AnsibleModule."""

    STR = "str"
    INT = "int"
    BOOL = "bool"
    LIST = "list"
    DICT = "dict"
    PATH = "path"
    RAW = "raw"
    JSONARG = "jsonarg"
    BYTES = "bytes"
    BITS = "bits"
    FLOAT = "float"

    def __str__(self) -> str:
        return self.value


class ReturnType(_enum.Enum):
    """Types used in the RETURN block."""

    STR = "str"
    INT = "int"
    BOOL = "bool"
    LIST = "list"
    DICT = "dict"
    FLOAT = "float"
    COMPLEX = "complex"
    """Nested object returned as-is from the API."""

    def __str__(self) -> str:
        return self.value


_OPTION_TYPES: dict[str, AnsibleType] = {
    "String": AnsibleType.STR,
    "Enum": AnsibleType.STR,
    "Fingerprint": AnsibleType.STR,
    "Time": AnsibleType.STR,
    "Integer": AnsibleType.INT,
    "Double": AnsibleType.FLOAT,
    "Boolean": AnsibleType.BOOL,
    "Array": AnsibleType.LIST,
    "NestedObject": AnsibleType.DICT,
    "KeyValueLabels": AnsibleType.DICT,
    "KeyValueAnnotations": AnsibleType.DICT,
    "KeyValueTerraformLabels": AnsibleType.DICT,
    "KeyValueEffectiveLabels": AnsibleType.DICT,
    "KeyValuePairs": AnsibleType.DICT,
    "ResourceRef": AnsibleType.DICT,
}

_RETURN_TYPES: dict[str, ReturnType] = {
    **{name: ReturnType(kind.value) for name, kind in _OPTION_TYPES.items()},
    "NestedObject": ReturnType.COMPLEX,
}


def map_mmv1_to_ansible(prop: schema_types.Property | None) -> AnsibleType | None:
    """
    Ansible option type for a property.

    Unknown magic-modules types fall back to ``str`` with a warning.
    Returns None when there is no property.
    """
    if prop is None:
        return None
    try:
        return _OPTION_TYPES[prop.type]
    except KeyError:
        _logger.warning("unknown API type '%s' defaulting to string", prop.type)
        return AnsibleType.STR


def map_mmv1_to_return(prop: schema_types.Property | None) -> ReturnType | None:
    """RETURN block type for a property; nested objects are ``complex``."""
    if prop is None:
        return None
    try:
        return _RETURN_TYPES[prop.type]
    except KeyError:
        _logger.warning("unknown API type '%s' defaulting to string", prop.type)
        return ReturnType.STR
