"""Configuration type definitions for magic-ansible settings.

This module defines the Pydantic models used to represent configuration
sections nested within the main Settings class:

- PathsConfig: where inputs come from and where output goes
- GenerationConfig: what to generate and how to treat existing files
- OverridesConfig: whether and how override files are applied
- LoggingConfig: log level for the CLI

Design decision: All types use `extra="allow"` to preserve unknown fields
so that `config` output can show typos back to the user.
"""

import typing as _typing

import pydantic as _pydantic

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    Unknown fields are preserved rather than silently dropped.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}


# =============================================================================
# Sections
# =============================================================================


class PathsConfig(ConfigBase):
    """
    Input and output locations.

    YAML section: paths.*
    """

    mmv1_dir: str | None = None
    """Root of a magic-modules mmv1 checkout (contains products/)."""

    overrides_dir: str | None = None
    """Root of the override tree (<product>/<resource>.yaml)."""

    template_dir: str | None = None
    """Template root. None = templates bundled with the package."""

    output_dir: str = "."
    """Collection root that receives plugins/ and tests/."""


class GenerationConfig(ConfigBase):
    """
    What gets generated.

    YAML section: generation.*
    """

    products: list[str] = _pydantic.Field(default_factory=list)
    """Only generate these products (empty = all)."""

    resources: list[str] = _pydantic.Field(default_factory=list)
    """Only generate these resources (empty = all)."""

    overwrite: bool = False
    """Replace files that already exist in the output directory."""

    tests: bool = True
    """Generate integration test scaffolding alongside modules."""


class OverridesConfig(ConfigBase):
    """
    Override handling.

    YAML section: overrides.*
    """

    enabled: bool = True
    """Apply override files found under paths.overrides_dir."""

    strict: bool = False
    """Fail the resource when its override file is malformed instead of skipping it."""


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "info"
    """Log level."""
