"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with MAGIC_ANSIBLE_ prefix
3. YAML config file (magic-ansible.yaml or MAGIC_ANSIBLE_CONFIG_FILE)
4. Field defaults (lowest)

Nested config uses double underscore delimiter:
  MAGIC_ANSIBLE_PATHS__MMV1_DIR=/src/magic-modules/mmv1
  MAGIC_ANSIBLE_OVERRIDES__STRICT=true
"""

import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import magic_ansible.config.sources as sources
import magic_ansible.config.types as types

# Templates shipped inside the package
BUILTIN_TEMPLATE_DIR = _pathlib.Path(__file__).resolve().parent.parent / "templates"

_SECTIONS = ("paths", "generation", "overrides", "logging")


class Settings(_pydantic_settings.BaseSettings):
    """
    magic-ansible configuration settings.

    All settings can be overridden via environment variables with the
    MAGIC_ANSIBLE_ prefix. For nested config, use double underscore:
    MAGIC_ANSIBLE_GENERATION__OVERWRITE=true

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (MAGIC_ANSIBLE_*)
    3. YAML config file
    4. Built-in defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="MAGIC_ANSIBLE_",
        env_nested_delimiter="__",
        extra="allow",
    )

    paths: types.PathsConfig = _pydantic.Field(default_factory=types.PathsConfig)
    generation: types.GenerationConfig = _pydantic.Field(default_factory=types.GenerationConfig)
    overrides: types.OverridesConfig = _pydantic.Field(default_factory=types.OverridesConfig)
    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (MAGIC_ANSIBLE_* env vars)
        3. YAML config file
        4. (defaults via Field definitions), lowest
        """
        return (
            init_settings,
            env_settings,
            sources.YamlFileSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Resolved locations
    # =========================================================================

    @property
    def products_dir(self) -> _pathlib.Path | None:
        """<mmv1_dir>/products, or None when mmv1_dir is not configured."""
        if not self.paths.mmv1_dir:
            return None
        return _pathlib.Path(self.paths.mmv1_dir).expanduser() / "products"

    @property
    def overrides_dir(self) -> _pathlib.Path | None:
        """Override tree root, or None when overrides are disabled or unset."""
        if not self.overrides.enabled or not self.paths.overrides_dir:
            return None
        return _pathlib.Path(self.paths.overrides_dir).expanduser()

    @property
    def template_dir(self) -> _pathlib.Path:
        """Absolute template root."""
        if not self.paths.template_dir:
            return BUILTIN_TEMPLATE_DIR
        return _pathlib.Path(self.paths.template_dir).expanduser().resolve()

    @property
    def output_dir(self) -> _pathlib.Path:
        return _pathlib.Path(self.paths.output_dir).expanduser()

    # =========================================================================
    # Introspection
    # =========================================================================

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Get unknown fields at the top level of Settings."""
        return dict(self.model_extra) if self.model_extra else {}

    def collect_all_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Collect unknown fields from Settings and every section.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"generation.overwite": True}
        """
        result = self.get_extra_fields()
        for section in _SECTIONS:
            nested: types.ConfigBase = getattr(self, section)
            for key, value in nested.get_extra_fields().items():
                result[f"{section}.{key}"] = value
        return result

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, _typing.Any]:
        """Effective settings as plain data, with resolved locations."""
        data = {section: getattr(self, section).model_dump(mode="json") for section in _SECTIONS}
        data["resolved"] = {
            "products_dir": str(self.products_dir) if self.products_dir else None,
            "overrides_dir": str(self.overrides_dir) if self.overrides_dir else None,
            "template_dir": str(self.template_dir),
            "output_dir": str(self.output_dir),
        }
        return data
