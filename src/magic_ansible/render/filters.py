"""Jinja2 filters and globals available to module and test templates."""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import datetime as _datetime
import enum as _enum
import json as _json
import typing as _typing

import pydantic as _pydantic

import magic_ansible.ansible as ansible
import magic_ansible.ansible.operations as operations
import magic_ansible.schema.types as schema_types


def indent_text(text: str, spaces: int = 4, first: bool = False) -> str:
    """Indent every line of ``text``, the first one only if ``first`` is set."""
    if not text:
        return text
    padding = " " * max(spaces, 0)
    lines = text.split("\n")
    return "\n".join(
        line if (index == 0 and not first) else padding + line
        for index, line in enumerate(lines)
    )


def lines(text: str) -> list[str]:
    """Non-blank lines of ``text``, stripped."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def _json_default(value: _typing.Any) -> _typing.Any:
    if isinstance(value, _pydantic.BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if _dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _dataclasses.asdict(value)
    if isinstance(value, _enum.Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def tojson(value: _typing.Any) -> str:
    """Compact JSON; dataclasses and models are serialized as objects."""
    return _json.dumps(value, default=_json_default, sort_keys=True)


def to_jinja(template: str) -> str:
    """Collapse ``{{x}}`` placeholders to Python format fields ``{x}``."""
    return operations.collapse_braces(template)


def sort_properties(properties: _abc.Iterable[schema_types.Property]) -> list[schema_types.Property]:
    return ansible.sort_properties(list(properties))


def select_properties(
    properties: _abc.Iterable[schema_types.Property],
    predicate: str,
) -> list[schema_types.Property]:
    """
    Filter properties by a named predicate.

    Known predicates: ``output``, ``not output``, ``required``,
    ``not required`` (or ``optional``). Anything else keeps all.
    """
    checks: dict[str, _abc.Callable[[schema_types.Property], bool]] = {
        "output": lambda p: p.output,
        "not output": lambda p: not p.output,
        "!output": lambda p: not p.output,
        "required": lambda p: p.required,
        "not required": lambda p: not p.required,
        "!required": lambda p: not p.required,
        "optional": lambda p: not p.required,
    }
    check = checks.get(predicate.strip().lower())
    if check is None:
        return list(properties)
    return [p for p in properties if check(p)]


def class_or_type(prop: schema_types.Property | None) -> str:
    """Class name for nested objects, Ansible type otherwise, ``None`` without a property."""
    if prop is None:
        return "None"
    if prop.is_a("NestedObject"):
        return ansible.camelize(prop.name, "upper")
    return str(ansible.map_mmv1_to_ansible(prop))


def ansible_type(prop: schema_types.Property | None) -> str:
    kind = ansible.map_mmv1_to_ansible(prop)
    return str(kind) if kind is not None else ""


FILTERS: dict[str, _abc.Callable[..., _typing.Any]] = {
    "ansible_type": ansible_type,
    "camelize": ansible.camelize,
    "class_or_type": class_or_type,
    "indent_text": indent_text,
    "lines": lines,
    "select_properties": select_properties,
    "singular": ansible.singular,
    "sort_properties": sort_properties,
    "to_jinja": to_jinja,
    "to_yaml": ansible.to_yaml,
    "tojson": tojson,
    "underscore": ansible.underscore,
}

GLOBALS: dict[str, _typing.Any] = {
    "now": _datetime.datetime.now,
}
