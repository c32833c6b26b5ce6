"""Clean-up of magic-modules descriptions for Ansible documentation."""

from __future__ import annotations

import magic_ansible.constants as constants
import magic_ansible.schema.types as schema_types

# Redundant with the required/immutable flags
_REDUNDANT_PREFIXES = ("Required. ", "Optional. ")
_IMMUTABLE_PREFIX = "Immutable."


def _strip_prefixes(text: str) -> tuple[str, bool]:
    for prefix in _REDUNDANT_PREFIXES:
        text = text.removeprefix(prefix)
    immutable = text.startswith(_IMMUTABLE_PREFIX)
    text = text.removeprefix(_IMMUTABLE_PREFIX + " ")
    return text, immutable


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences, one per list item, each ending with a period.

    Line breaks are treated as spaces. Blank sentences are dropped.
    """
    joined = " ".join(text.split("\n"))
    sentences = []
    for sentence in joined.split(". "):
        sentence = sentence.strip()
        if sentence:
            sentences.append(sentence.rstrip(".") + ".")
    return sentences


def resource_ref_description(prop: schema_types.Property) -> list[str]:
    """Help text appended to ResourceRef options."""
    return [
        f"This field is a reference to a {prop.resource} resource in GCP.",
        "It can be specified in two ways: First, you can place a dictionary with "
        f"key '{prop.imports}' matching your resource.",
        f"Alternatively, you can add `register: name-of-resource` to a {prop.resource} "
        "task and then set this field to `{{ name-of-resource }}`.",
    ]


def parse_property_description(prop: schema_types.Property) -> list[str]:
    """
    Convert a property description into documentation paragraphs.

    >>> import magic_ansible.schema.types as t
    >>> parse_property_description(t.Property(name="x", description="Required. The name. Must be unique"))
    ['The name.', 'Must be unique.']
    """
    text, immutable = _strip_prefixes(prop.description or constants.NO_DESCRIPTION)

    lines = split_sentences(text) or [constants.NO_DESCRIPTION]
    if prop.is_a("ResourceRef"):
        lines.extend(resource_ref_description(prop))
    if immutable or prop.immutable:
        lines.append(constants.IMMUTABLE_NOTE)
    return lines


def parse_return_description(prop: schema_types.Property) -> str:
    """Single paragraph description for the RETURN block."""
    text = prop.description.strip()
    if not text:
        return f"The {prop.name.lower()} field."

    text, _ = _strip_prefixes(text)
    text = text[:1].upper() + text[1:]
    if not text.endswith("."):
        text += "."
    return text
