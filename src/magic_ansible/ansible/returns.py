"""RETURN block of a generated module."""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

import magic_ansible.ansible.descriptions as descriptions
import magic_ansible.ansible.documentation as documentation
import magic_ansible.ansible.types as types
import magic_ansible.schema.types as schema_types

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass
class ReturnAttribute:
    """One documented return value."""

    description: str
    returned: str
    type: types.ReturnType
    elements: types.ReturnType | None = None
    contains: dict[str, ReturnAttribute] = _dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, _typing.Any]:
        data: dict[str, _typing.Any] = {
            "description": self.description,
            "returned": self.returned,
            "type": str(self.type),
        }
        if self.elements is not None:
            data["elements"] = str(self.elements)
        if self.contains:
            data["contains"] = {name: attr.to_dict() for name, attr in self.contains.items()}
        return data


def returned_condition(prop: schema_types.Property | None) -> str:
    """
    When a value shows up in the module result.

    Output-only values come back on every successful call, required ones
    always, anything else only when set.
    """
    if prop is None or prop.output:
        return "success"
    if prop.required:
        return "always"
    return "when set"


def build_attribute(prop: schema_types.Property) -> ReturnAttribute:
    attribute = ReturnAttribute(
        description=descriptions.parse_return_description(prop),
        returned=returned_condition(prop),
        type=types.map_mmv1_to_return(prop) or types.ReturnType.STR,
    )

    if prop.item_type is not None and attribute.type is types.ReturnType.LIST:
        attribute.elements = types.map_mmv1_to_return(prop.item_type)
        if prop.item_type.is_a("NestedObject"):
            attribute.contains = build_contains(prop.item_type.properties)

    if attribute.type in (types.ReturnType.DICT, types.ReturnType.COMPLEX) and prop.properties:
        attribute.contains = build_contains(prop.properties)

    return attribute


def build_contains(properties: _abc.Iterable[schema_types.Property]) -> dict[str, ReturnAttribute]:
    return {prop.name: build_attribute(prop) for prop in properties}


@_dataclasses.dataclass
class ReturnBlock:
    """Content of the RETURN block, keyed by API field name."""

    attributes: dict[str, ReturnAttribute]

    @classmethod
    def build(cls, resource: schema_types.Resource) -> ReturnBlock:
        attributes = {
            "changed": ReturnAttribute(
                description="Whether the resource was changed.",
                returned="always",
                type=types.ReturnType.BOOL,
            ),
            "state": ReturnAttribute(
                description="The current state of the resource.",
                returned="always",
                type=types.ReturnType.STR,
            ),
        }
        for prop in resource.gettable_properties():
            if prop.name in attributes:
                _logger.warning("property %r shadows a standard return value, skipping", prop.name)
                continue
            attributes[prop.name] = build_attribute(prop)
        return cls(attributes=attributes)

    def to_dict(self) -> dict[str, _typing.Any]:
        return {name: attr.to_dict() for name, attr in self.attributes.items()}

    def to_yaml(self) -> str:
        return documentation.to_yaml(self.to_dict())
