"""
Ansible module options built from resource properties.

Options form a tree mirroring the property tree: NestedObject
properties and arrays of NestedObject carry suboptions. Output-only
properties are kept in the tree (templates need them to read API
responses) but are flagged by Option.output_only and left out of the
DOCUMENTATION options and the argument spec.
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

import magic_ansible.ansible.descriptions as descriptions
import magic_ansible.ansible.naming as naming
import magic_ansible.ansible.types as types
import magic_ansible.schema.types as schema_types

_logger = _logging.getLogger(__name__)

STATE_OPTION = "state"


@_dataclasses.dataclass
class Dependencies:
    """Constraint groups that apply to the options of one level."""

    mutually_exclusive: list[list[str]] = _dataclasses.field(default_factory=list)
    """Groups where at most one option may be set."""

    required_together: list[list[str]] = _dataclasses.field(default_factory=list)
    """Groups that must be set all together or not at all."""

    required_one_of: list[list[str]] = _dataclasses.field(default_factory=list)
    """Groups where at least one option must be set."""

    def __bool__(self) -> bool:
        return bool(self.mutually_exclusive or self.required_together or self.required_one_of)


@_dataclasses.dataclass
class Option:
    """
    A single module option.

    Attributes:
        name: API name of the property (camelCase).
        parent: Option this one is a suboption of.
        mmv1: Source property, None for synthetic options like state.
        description: Documentation paragraphs.
        type: Ansible type.
        default: Default value, None if unset.
        required: Whether the option must be given.
        choices: Allowed values.
        elements: Element type for list options.
        suboptions: Nested options keyed by Ansible name.
        conflicts: Ansible names of options this one conflicts with.
        no_log: Whether the value is sensitive.
        dependencies: Constraint groups among the suboptions.
    """

    name: str
    description: list[str]
    type: types.AnsibleType
    parent: Option | None = _dataclasses.field(default=None, repr=False)
    mmv1: schema_types.Property | None = _dataclasses.field(default=None, repr=False)
    default: _typing.Any = None
    required: bool = False
    choices: list[str] = _dataclasses.field(default_factory=list)
    elements: types.AnsibleType | None = None
    suboptions: dict[str, Option] = _dataclasses.field(default_factory=dict)
    conflicts: list[str] = _dataclasses.field(default_factory=list)
    no_log: bool = False
    dependencies: Dependencies = _dataclasses.field(default_factory=Dependencies)

    @property
    def ansible_name(self) -> str:
        return naming.underscore(self.name)

    @property
    def output_only(self) -> bool:
        """Output-only properties and everything below them."""
        if self.parent is not None:
            return self.parent.output_only
        return self.mmv1 is not None and self.mmv1.output

    def is_list(self) -> bool:
        return self.type is types.AnsibleType.LIST

    def is_nested_object(self) -> bool:
        return self.mmv1 is not None and self.mmv1.is_a("NestedObject")

    def is_nested_list(self) -> bool:
        return (
            self.is_list()
            and self.mmv1 is not None
            and self.mmv1.elements_are("NestedObject")
        )

    def class_name(self) -> str:
        """Python class name used for this option in generated code."""
        if self.is_nested_list() and self.parent is not None:
            return self.parent.class_name() + naming.camelize(naming.singular(self.name), "upper")
        if self.is_nested_object() and self.parent is not None:
            return self.parent.class_name() + naming.camelize(self.name, "upper")
        return naming.camelize(self.name, "upper")

    def sorted_suboptions(self) -> list[Option]:
        return sorted_options(self.suboptions)

    def input_suboptions(self) -> list[Option]:
        return [o for o in self.sorted_suboptions() if not o.output_only]

    def output_suboptions(self) -> list[Option]:
        return [o for o in self.sorted_suboptions() if o.output_only]


def reference_name(name: str) -> str:
    """
    Ansible name of a sibling referenced by a constraint.

    Constraint lists may hold field paths such as
    ``performance_config.0.iops_per_tb``; only the last segment names the
    sibling option.
    """
    return naming.underscore(name.rsplit(".", 1)[-1])


def sorted_options(options: _abc.Mapping[str, Option]) -> list[Option]:
    return sorted(options.values(), key=lambda option: option.name)


def state_option() -> Option:
    """The ``state`` option every generated module accepts."""
    return Option(
        name=STATE_OPTION,
        description=["Whether the resource should exist in GCP."],
        type=types.AnsibleType.STR,
        default="present",
        choices=["present", "absent"],
    )


def build_options(resource: schema_types.Resource) -> dict[str, Option]:
    """
    Build the top-level options of a resource module.

    Returns:
        Options keyed by Ansible name, including ``state``. Dependency
        groups are computed for every nested level; the top-level groups
        come from analyze_dependencies(options).
    """
    options = convert_properties(resource.all_user_properties(), parent=None)
    options[STATE_OPTION] = state_option()
    return options


def convert_properties(
    properties: _abc.Iterable[schema_types.Property],
    parent: Option | None,
) -> dict[str, Option]:
    """Convert properties (and their nested properties) into options."""
    options: dict[str, Option] = {}

    for prop in properties:
        option = Option(
            name=prop.name,
            parent=parent,
            mmv1=prop,
            description=descriptions.parse_property_description(prop),
            type=types.map_mmv1_to_ansible(prop) or types.AnsibleType.STR,
            required=prop.required,
            default=prop.default_value,
            choices=[str(value) for value in prop.enum_values],
            conflicts=[reference_name(name) for name in prop.conflicts],
            no_log=prop.sensitive,
        )

        if option.is_list() and prop.item_type is not None:
            option.elements = types.map_mmv1_to_ansible(prop.item_type)
            if prop.item_type.is_a("NestedObject") and prop.item_type.properties:
                option.suboptions = convert_properties(prop.item_type.properties, option)

        if option.type is types.AnsibleType.DICT and prop.properties:
            option.suboptions = convert_properties(prop.properties, option)

        if option.suboptions:
            option.dependencies = analyze_dependencies(option.suboptions)

        _logger.debug("converted property %s (class name: %s)", prop.name, option.class_name())
        options[option.ansible_name] = option

    return options


def analyze_dependencies(options: _abc.Mapping[str, Option]) -> Dependencies:
    """
    Compute constraint groups for one level of options.

    - conflicts become mutually_exclusive groups
    - required_with becomes required_together groups
    - at_least_one_of becomes required_one_of groups
    - exactly_one_of becomes both mutually_exclusive and required_one_of

    Each group holds the option itself plus the names it lists, sorted and
    without duplicates. Groups sharing their first name are merged. Groups
    with a single member are dropped. Output-only options take no part.
    """
    conflicts = _collect_groups(options, lambda o: o.conflicts)
    required_with = _collect_groups(options, lambda o: _property_names(o, "required_with"))
    at_least_one = _collect_groups(options, lambda o: _property_names(o, "at_least_one_of"))
    exactly_one = _collect_groups(options, lambda o: _property_names(o, "exactly_one_of"))

    return Dependencies(
        mutually_exclusive=_unique_groups(conflicts + exactly_one),
        required_together=required_with,
        required_one_of=_unique_groups(at_least_one + exactly_one),
    )


def _property_names(option: Option, field: str) -> list[str]:
    if option.mmv1 is None:
        return []
    return [reference_name(name) for name in getattr(option.mmv1, field)]


def _collect_groups(
    options: _abc.Mapping[str, Option],
    related: _abc.Callable[[Option], list[str]],
) -> list[list[str]]:
    groups: dict[str, list[str]] = {}
    for name, option in options.items():
        if option.output_only:
            continue
        names = related(option)
        if not names:
            continue

        group = sorted({name, *names})
        key = group[0]
        if key in groups:
            group = sorted({*groups[key], *group})
        groups[key] = group

    return [group for _, group in sorted(groups.items()) if len(group) > 1]


def _unique_groups(groups: list[list[str]]) -> list[list[str]]:
    unique: list[list[str]] = []
    for group in groups:
        if group not in unique:
            unique.append(group)
    return sorted(unique)
