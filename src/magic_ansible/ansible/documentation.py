"""
DOCUMENTATION block of a generated module, and the YAML formatting shared
by all documentation blocks.
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import typing as _typing

import yaml as _yaml

import magic_ansible.ansible.descriptions as descriptions
import magic_ansible.ansible.options as options_mod
import magic_ansible.constants as constants
import magic_ansible.schema.types as schema_types

# =============================================================================
# YAML formatting
# =============================================================================


class FoldedString(str):
    """String emitted in YAML folded (``>``) style."""


class _DocumentationDumper(_yaml.SafeDumper):
    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        # Indent sequences under their key like ansible-doc output does
        return super().increase_indent(flow, False)


def _represent_folded(dumper: _yaml.SafeDumper, data: FoldedString) -> _yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style=">")


_DocumentationDumper.add_representer(FoldedString, _represent_folded)


def fold_descriptions(data: _typing.Any) -> _typing.Any:
    """
    Copy of ``data`` with long ``description`` strings marked as folded.

    A description value (string, or each string of a list) longer than
    MAX_DESCRIPTION_LENGTH characters becomes a FoldedString.
    """
    if isinstance(data, _abc.Mapping):
        result = {}
        for key, value in data.items():
            if key == "description":
                value = _fold(value)
            result[key] = fold_descriptions(value)
        return result
    if isinstance(data, list):
        return [fold_descriptions(item) for item in data]
    return data


def _fold(value: _typing.Any) -> _typing.Any:
    if isinstance(value, str) and len(value) > constants.MAX_DESCRIPTION_LENGTH:
        return FoldedString(value)
    if isinstance(value, list):
        return [_fold(item) if isinstance(item, str) else item for item in value]
    return value


def to_yaml(data: _typing.Any) -> str:
    """
    Dump documentation data as YAML.

    Keys are sorted, indentation is two spaces and long descriptions use
    folded style, wrapped on word boundaries at MAX_DESCRIPTION_LENGTH.
    Loading the output back gives the original data.
    """
    if data is None:
        return ""
    return _yaml.dump(
        fold_descriptions(data),
        Dumper=_DocumentationDumper,
        sort_keys=True,
        indent=2,
        width=constants.MAX_DESCRIPTION_LENGTH,
        allow_unicode=True,
        default_flow_style=False,
    )


# =============================================================================
# DOCUMENTATION block
# =============================================================================


def option_to_doc(option: options_mod.Option) -> dict[str, _typing.Any]:
    """DOCUMENTATION entry for one option, recursing into suboptions."""
    doc: dict[str, _typing.Any] = {
        "description": list(option.description),
        "type": str(option.type),
    }
    if option.required:
        doc["required"] = True
    if option.default is not None:
        doc["default"] = option.default
    if option.choices:
        doc["choices"] = list(option.choices)
    if option.elements is not None:
        doc["elements"] = str(option.elements)
    if option.no_log:
        doc["no_log"] = True

    suboptions = {
        name: option_to_doc(sub) for name, sub in option.suboptions.items() if not sub.output_only
    }
    if suboptions:
        doc["suboptions"] = suboptions
    return doc


def reference_notes(references: schema_types.References) -> list[str]:
    notes = []
    if references.api:
        notes.append(f"API Reference: U({references.api})")
    notes.extend(f"{title}: U({url})" for title, url in references.guides.items())
    return notes


@_dataclasses.dataclass
class Documentation:
    """Content of the DOCUMENTATION block."""

    module: str
    short_description: str
    description: list[str]
    options: dict[str, options_mod.Option]
    requirements: list[str] = _dataclasses.field(
        default_factory=lambda: list(constants.STANDARD_MODULE_REQUIREMENTS)
    )
    notes: list[str] = _dataclasses.field(default_factory=list)

    @classmethod
    def build(
        cls,
        module_name: str,
        product: schema_types.Product,
        resource: schema_types.Resource,
        options: dict[str, options_mod.Option],
    ) -> Documentation:
        return cls(
            module=module_name,
            short_description=f"Creates a GCP {product.name}.{resource.name} resource",
            description=descriptions.split_sentences(resource.description)
            or [constants.NO_DESCRIPTION],
            options=options,
            notes=reference_notes(resource.references) + list(constants.STANDARD_AUTH_NOTES),
        )

    def to_dict(self) -> dict[str, _typing.Any]:
        data: dict[str, _typing.Any] = {
            "module": self.module,
            "short_description": self.short_description,
            "description": list(self.description),
            "options": {
                name: option_to_doc(option)
                for name, option in self.options.items()
                if not option.output_only
            },
            "requirements": list(self.requirements),
        }
        if self.notes:
            data["notes"] = list(self.notes)
        return data

    def to_yaml(self) -> str:
        return to_yaml(self.to_dict())
