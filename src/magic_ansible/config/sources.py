"""Custom pydantic-settings source for magic-ansible configuration.

Settings can be kept in a YAML file so a collection repository can pin
its generator inputs:

- MAGIC_ANSIBLE_CONFIG_FILE if set (explicit override)
- magic-ansible.yaml in the current working directory otherwise

The file is optional. When it exists it must be a YAML mapping whose
top-level keys match the Settings sections.
"""

import collections.abc as _abc
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import magic_ansible.errors as errors

# Environment variable for overriding the config file location
ENV_CONFIG_FILE = "MAGIC_ANSIBLE_CONFIG_FILE"

DEFAULT_CONFIG_FILE = "magic-ansible.yaml"


class ConfigFileError(errors.MagicAnsibleError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def get_config_file_path() -> _pathlib.Path:
    """
    Get the path of the settings file.

    Respects MAGIC_ANSIBLE_CONFIG_FILE if set, otherwise looks in the
    current working directory.
    """
    config_file_env = _os.environ.get(ENV_CONFIG_FILE)
    if config_file_env:
        return _pathlib.Path(config_file_env)
    return _pathlib.Path.cwd() / DEFAULT_CONFIG_FILE


class YamlFileSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that reads a single YAML config file.

    Sits below environment variables and constructor arguments in
    precedence, so any value in the file can be overridden from the
    environment or the command line.
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            config_path: Override path for the config file (for testing).
                If not provided, uses get_config_file_path().
        """
        super().__init__(settings_cls)
        self._config_path = config_path or get_config_file_path()
        self._data = self._load_yaml_file(self._config_path)

    @property
    def config_path(self) -> _pathlib.Path:
        return self._config_path

    def _load_yaml_file(self, path: _pathlib.Path) -> dict[str, _typing.Any]:
        """
        Load the YAML file and return its contents as a dict.

        Raises:
            ConfigFileError: If the file cannot be read, is malformed YAML,
                or contains non-dict content at the top level.
        """
        if not path.exists():
            return {}

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(path, f"cannot read file: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigFileError(path, f"not valid UTF-8: {e}") from e

        try:
            parsed = _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise ConfigFileError(path, f"invalid YAML: {e}") from e

        if parsed is None:
            return {}

        if not isinstance(parsed, dict):
            type_name = type(parsed).__name__
            raise ConfigFileError(
                path,
                f"config must be a YAML mapping (dict), got {type_name}",
            )

        return parsed

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """
        Get value for a field from the loaded file.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (_abc.Mapping, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return the file contents as a plain dict for Pydantic validation."""
        return dict(self._data)
