"""Tests for configuration settings."""

import pathlib as _pathlib

import pytest as _pytest

import magic_ansible.config as config
import magic_ansible.config.sources as sources


class TestSettingsDefaults:
    """Test Settings default values when environment is clean."""

    def test_defaults(self, isolated_env: _pathlib.Path) -> None:
        """Nothing configured: bundled templates, current directory output."""
        settings = config.Settings()
        assert settings.paths.mmv1_dir is None
        assert settings.products_dir is None
        assert settings.overrides_dir is None
        assert settings.template_dir == config.BUILTIN_TEMPLATE_DIR
        assert settings.output_dir == _pathlib.Path(".")
        assert settings.generation.overwrite is False
        assert settings.generation.tests is True
        assert settings.overrides.strict is False
        assert settings.logging.level == "info"

    def test_builtin_templates_exist(self) -> None:
        """The package ships the module template."""
        assert (config.BUILTIN_TEMPLATE_DIR / "plugins" / "module.py.j2").is_file()


class TestSettingsEnvironment:
    """Test MAGIC_ANSIBLE_* environment variables."""

    def test_nested_env_var(
        self, isolated_env: _pathlib.Path, monkeypatch: _pytest.MonkeyPatch
    ) -> None:
        """Double underscore reaches nested sections."""
        monkeypatch.setenv("MAGIC_ANSIBLE_PATHS__MMV1_DIR", "/src/mmv1")
        monkeypatch.setenv("MAGIC_ANSIBLE_OVERRIDES__STRICT", "true")
        settings = config.Settings()
        assert settings.products_dir == _pathlib.Path("/src/mmv1/products")
        assert settings.overrides.strict is True

    def test_invalid_log_level(
        self, isolated_env: _pathlib.Path, monkeypatch: _pytest.MonkeyPatch
    ) -> None:
        """Unknown log levels are rejected."""
        monkeypatch.setenv("MAGIC_ANSIBLE_LOGGING__LEVEL", "chatty")
        with _pytest.raises(ValueError):
            config.Settings()


class TestSettingsFile:
    """Test the YAML settings file."""

    def test_reads_file_in_working_directory(self, isolated_env: _pathlib.Path) -> None:
        """magic-ansible.yaml in the working directory is picked up."""
        (isolated_env / "magic-ansible.yaml").write_text(
            "paths:\n  overrides_dir: ov\ngeneration:\n  products: [filestore]\n"
        )
        settings = config.Settings()
        assert settings.overrides_dir == _pathlib.Path("ov")
        assert settings.generation.products == ["filestore"]

    def test_env_beats_file(
        self, isolated_env: _pathlib.Path, monkeypatch: _pytest.MonkeyPatch
    ) -> None:
        """Environment variables take precedence over the file."""
        (isolated_env / "magic-ansible.yaml").write_text("logging:\n  level: debug\n")
        monkeypatch.setenv("MAGIC_ANSIBLE_LOGGING__LEVEL", "error")
        assert config.Settings().logging.level == "error"

    def test_init_beats_file(self, isolated_env: _pathlib.Path) -> None:
        """Constructor arguments take precedence over the file."""
        (isolated_env / "magic-ansible.yaml").write_text("generation:\n  overwrite: false\n")
        settings = config.Settings(generation={"overwrite": True})
        assert settings.generation.overwrite is True

    def test_config_file_env_var(
        self,
        isolated_env: _pathlib.Path,
        tmp_path: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        """MAGIC_ANSIBLE_CONFIG_FILE points at another file."""
        path = tmp_path / "custom.yaml"
        path.write_text("generation:\n  tests: false\n")
        monkeypatch.setenv(sources.ENV_CONFIG_FILE, str(path))
        assert config.Settings().generation.tests is False

    def test_malformed_file(self, isolated_env: _pathlib.Path) -> None:
        """Broken YAML raises ConfigFileError."""
        (isolated_env / "magic-ansible.yaml").write_text("paths: [\n")
        with _pytest.raises(config.ConfigFileError):
            config.Settings()

    def test_non_utf8_file(self, isolated_env: _pathlib.Path) -> None:
        """Undecodable bytes raise ConfigFileError."""
        (isolated_env / "magic-ansible.yaml").write_bytes(b"paths: \xff\n")
        with _pytest.raises(config.ConfigFileError, match="not valid UTF-8"):
            config.Settings()

    def test_non_mapping_file(self, isolated_env: _pathlib.Path) -> None:
        """A list is not a valid settings file."""
        (isolated_env / "magic-ansible.yaml").write_text("- a\n")
        with _pytest.raises(config.ConfigFileError, match="YAML mapping"):
            config.Settings()

    def test_empty_file(self, isolated_env: _pathlib.Path) -> None:
        """An empty file means defaults."""
        (isolated_env / "magic-ansible.yaml").write_text("")
        assert config.Settings().generation.overwrite is False


class TestSettingsIntrospection:
    """Test extra field collection and serialization."""

    def test_collects_unknown_keys(self, isolated_env: _pathlib.Path) -> None:
        """Typos are kept and reported with dotted paths."""
        (isolated_env / "magic-ansible.yaml").write_text(
            "generation:\n  overwite: true\nunknown_section: 1\n"
        )
        extras = config.Settings().collect_all_extra_fields()
        assert extras == {"generation.overwite": True, "unknown_section": 1}

    def test_overrides_disabled(self, isolated_env: _pathlib.Path) -> None:
        """Disabled overrides resolve to no directory."""
        settings = config.Settings(
            paths={"overrides_dir": "ov"}, overrides={"enabled": False}
        )
        assert settings.overrides_dir is None

    def test_to_dict(self, isolated_env: _pathlib.Path) -> None:
        """Sections plus resolved locations."""
        data = config.Settings(paths={"mmv1_dir": "/m"}).to_dict()
        assert set(data) == {"paths", "generation", "overrides", "logging", "resolved"}
        assert data["resolved"]["products_dir"] == str(_pathlib.Path("/m/products"))
        assert data["resolved"]["overrides_dir"] is None
        assert data["resolved"]["template_dir"] == str(config.BUILTIN_TEMPLATE_DIR)
