"""
Argument spec generation.

ArgumentSpec mirrors the ``argument_spec`` dict passed to AnsibleModule
and renders it as Python source using ``dict(...)`` constructor syntax,
ready to paste into the generated module.
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import keyword as _keyword
import typing as _typing

import magic_ansible.ansible.options as options_mod

_INDENT = "    "

# Top-level arguments listed before the alphabetical rest
_PRIORITY = ("name", "state")


@_dataclasses.dataclass
class ArgumentOption:
    """One entry of an argument spec."""

    type: str
    required: bool = False
    default: _typing.Any = None
    choices: list[str] = _dataclasses.field(default_factory=list)
    elements: str = ""
    options: dict[str, ArgumentOption] = _dataclasses.field(default_factory=dict)
    no_log: bool = False
    dependencies: options_mod.Dependencies = _dataclasses.field(
        default_factory=options_mod.Dependencies
    )

    @classmethod
    def from_option(cls, option: options_mod.Option) -> ArgumentOption:
        return cls(
            type=str(option.type),
            required=option.required,
            default=option.default,
            choices=list(option.choices),
            elements=str(option.elements) if option.elements else "",
            options={
                name: cls.from_option(sub)
                for name, sub in option.suboptions.items()
                if not sub.output_only
            },
            no_log=option.no_log,
            dependencies=option.dependencies,
        )


@_dataclasses.dataclass
class ArgumentSpec:
    """Argument spec of a module plus its module-level constraints."""

    arguments: dict[str, ArgumentOption] = _dataclasses.field(default_factory=dict)
    dependencies: options_mod.Dependencies = _dataclasses.field(
        default_factory=options_mod.Dependencies
    )

    @classmethod
    def from_options(cls, options: _abc.Mapping[str, options_mod.Option]) -> ArgumentSpec:
        """Build the spec from top-level options, skipping output-only ones."""
        return cls(
            arguments={
                name: ArgumentOption.from_option(option)
                for name, option in options.items()
                if not option.output_only
            },
            dependencies=options_mod.analyze_dependencies(options),
        )

    def to_python(self) -> str:
        """
        Render as Python source.

        Top-level arguments are ordered ``name``, ``state``, then
        alphabetically; nested options alphabetically. Module-level
        constraints follow the closing parenthesis as further keyword
        arguments.
        """
        if not self.arguments:
            return "argument_spec=dict()"

        lines = ["argument_spec=dict("]
        lines.extend(_render_arguments(self.arguments, _priority_order(self.arguments), 1))
        lines.append(")")
        source = "\n".join(lines)

        constraints = _render_constraints(self.dependencies)
        if constraints:
            source += ",\n" + ",\n".join(constraints)
        return source


def _priority_order(arguments: _abc.Mapping[str, ArgumentOption]) -> list[str]:
    def key(name: str) -> tuple[int, str]:
        if name in _PRIORITY:
            return _PRIORITY.index(name), ""
        return len(_PRIORITY), name

    return sorted(arguments, key=key)


def _render_arguments(
    arguments: _abc.Mapping[str, ArgumentOption],
    order: list[str],
    depth: int,
) -> list[str]:
    indent = _INDENT * depth
    inner = _INDENT * (depth + 1)
    lines: list[str] = []

    for position, name in enumerate(order):
        argument = arguments[name]
        keyword = python_identifier(name)
        bare = keyword == name
        if bare:
            lines.append(f"{indent}{keyword}=dict(")
        else:
            # dict('class'=...) is a syntax error, unpack a literal instead
            lines.append(f"{indent}**{{{keyword}: dict(")

        if argument.type:
            lines.append(f"{inner}type={python_quote(argument.type)},")
        if argument.required and argument.default is None:
            lines.append(f"{inner}required=True,")
        if argument.default is not None:
            lines.append(f"{inner}default={python_value(argument.default)},")
        if argument.choices:
            lines.append(f"{inner}choices={python_value(argument.choices)},")
        if argument.elements:
            lines.append(f"{inner}elements={python_quote(argument.elements)},")
        if argument.no_log:
            lines.append(f"{inner}no_log=True,")
        if argument.options:
            lines.append(f"{inner}options=dict(")
            lines.extend(
                _render_arguments(argument.options, sorted(argument.options), depth + 2)
            )
            lines.append(f"{inner}),")
        lines.extend(
            f"{inner}{constraint},"
            for constraint in _render_constraints(argument.dependencies)
        )

        closing = f"{indent})" if bare else f"{indent})}}"
        if position < len(order) - 1:
            closing += ","
        lines.append(closing)

    return lines


def _render_constraints(dependencies: options_mod.Dependencies) -> list[str]:
    rendered = []
    for field in ("mutually_exclusive", "required_together", "required_one_of"):
        groups = getattr(dependencies, field)
        if groups:
            rendered.append(f"{field}={python_value(groups)}")
    return rendered


# =============================================================================
# Python literal helpers
# =============================================================================


def python_identifier(name: str) -> str:
    """Bare keyword argument name when valid, quoted string otherwise."""
    if name.isidentifier() and not _keyword.iskeyword(name):
        return name
    return python_quote(name)


def python_quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def python_value(value: _typing.Any) -> str:
    """Python literal for a default, choice list or constraint group."""
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return python_quote(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(python_value(item) for item in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(f"{python_quote(str(k))}: {python_value(v)}" for k, v in value.items())
        return "{" + items + "}"
    return python_quote(str(value))
