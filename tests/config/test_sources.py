"""Tests for LayeredYamlSettingsSource.

- Loading built-in defaults
- Layer precedence (project > user > built-in)
- Handling missing and empty optional files
- Handling malformed and non-mapping YAML
"""

import pathlib as _pathlib
import typing as _typing

import pydantic_settings as _pydantic_settings
import pytest as _pytest

import hash_joiner.config as config
import hash_joiner.config.sources as sources

WriteFile = _typing.Callable[[str, str], _pathlib.Path]

BUILTIN = "private_key: private\njoin:\n  key_field: name\noutput:\n  format: yaml\n"


def _source(
    tmp_path: _pathlib.Path,
    *,
    builtin: _pathlib.Path,
    user: _pathlib.Path | None = None,
) -> sources.LayeredYamlSettingsSource:
    return sources.LayeredYamlSettingsSource(
        config.Settings,
        project_dir=tmp_path / "project",
        user_config_path=user or tmp_path / "no-user.yaml",
        builtin_config_path=builtin,
    )


class TestLayeredYamlSettingsSourceClass:
    """Verify the source class API."""

    def test_is_pydantic_settings_source(self) -> None:
        """LayeredYamlSettingsSource should be a pydantic-settings source."""
        assert issubclass(
            sources.LayeredYamlSettingsSource,
            _pydantic_settings.PydanticBaseSettingsSource,
        )


class TestHelperFunctions:
    """Tests for path helper functions."""

    def test_get_builtin_defaults_path(self) -> None:
        """Built-in defaults ship inside the package."""
        path = sources.get_builtin_defaults_path()
        assert path.name == "config.yaml"
        assert path.parent.name == "defaults"
        assert path.exists()

    def test_get_user_config_path_default(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Without env var, should return XDG-compliant user config path."""
        monkeypatch.delenv("HASH_JOINER_CONFIG_DIR", raising=False)
        path = sources.get_user_config_path()
        assert path == _pathlib.Path.home() / ".config" / "hash-joiner" / "config.yaml"

    def test_get_user_config_path_with_env_var(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """With env var set, should use that directory."""
        monkeypatch.setenv("HASH_JOINER_CONFIG_DIR", "/custom/config/dir")
        assert sources.get_user_config_dir() == _pathlib.Path("/custom/config/dir")
        assert sources.get_user_config_path() == _pathlib.Path("/custom/config/dir/config.yaml")


class TestLayering:
    """Merging of config layers."""

    def test_builtin_only(self, tmp_path: _pathlib.Path, write_file: WriteFile) -> None:
        """With no optional layers, the built-in defaults are returned."""
        source = _source(tmp_path, builtin=write_file("builtin.yaml", BUILTIN))
        assert source()["join"] == {"key_field": "name"}
        assert [name for name, _ in source.get_loaded_layers()] == ["built-in"]

    def test_user_overrides_builtin(self, tmp_path: _pathlib.Path, write_file: WriteFile) -> None:
        """User values override defaults while sibling keys survive."""
        source = _source(
            tmp_path,
            builtin=write_file("builtin.yaml", BUILTIN),
            user=write_file("user.yaml", "join:\n  key_field: id\n  extra: 1\n"),
        )
        data = source()
        assert data["join"] == {"key_field": "id", "extra": 1}
        assert data["output"] == {"format": "yaml"}

    def test_project_overrides_user(self, tmp_path: _pathlib.Path, write_file: WriteFile) -> None:
        """The project layer has the highest file precedence."""
        write_file("project/.hash-joiner.yaml", "private_key: secret\n")
        source = _source(
            tmp_path,
            builtin=write_file("builtin.yaml", BUILTIN),
            user=write_file("user.yaml", "private_key: hidden\n"),
        )
        assert source()["private_key"] == "secret"
        assert [name for name, _ in source.get_loaded_layers()] == [
            "built-in",
            "user",
            "project",
        ]

    def test_empty_optional_layer_skipped(
        self, tmp_path: _pathlib.Path, write_file: WriteFile
    ) -> None:
        """Empty user config files are ignored."""
        source = _source(
            tmp_path,
            builtin=write_file("builtin.yaml", BUILTIN),
            user=write_file("user.yaml", ""),
        )
        assert [name for name, _ in source.get_loaded_layers()] == ["built-in"]

    def test_source_files_not_mutated(
        self, tmp_path: _pathlib.Path, write_file: WriteFile
    ) -> None:
        """Repeated calls return independent top-level dicts."""
        source = _source(tmp_path, builtin=write_file("builtin.yaml", BUILTIN))
        first = source()
        first["private_key"] = "changed"
        assert source()["private_key"] == "private"


class TestErrors:
    """ConfigFileError conditions."""

    def test_missing_builtin(self, tmp_path: _pathlib.Path) -> None:
        """Missing built-in defaults are an installation problem."""
        with _pytest.raises(config.ConfigFileError, match="not found"):
            _source(tmp_path, builtin=tmp_path / "missing.yaml")

    def test_empty_builtin(self, tmp_path: _pathlib.Path, write_file: WriteFile) -> None:
        """Empty built-in defaults are an installation problem."""
        with _pytest.raises(config.ConfigFileError, match="empty"):
            _source(tmp_path, builtin=write_file("builtin.yaml", ""))

    def test_invalid_yaml(self, tmp_path: _pathlib.Path, write_file: WriteFile) -> None:
        """Malformed YAML names the offending file."""
        user = write_file("user.yaml", "join: [unclosed\n")
        with _pytest.raises(config.ConfigFileError, match="invalid YAML") as exc_info:
            _source(tmp_path, builtin=write_file("builtin.yaml", BUILTIN), user=user)
        assert exc_info.value.path == user

    def test_non_mapping_top_level(self, tmp_path: _pathlib.Path, write_file: WriteFile) -> None:
        """Config files must hold a mapping."""
        with _pytest.raises(config.ConfigFileError, match="must be a YAML mapping"):
            _source(
                tmp_path,
                builtin=write_file("builtin.yaml", BUILTIN),
                user=write_file("user.yaml", "- a\n- b\n"),
            )

    def test_conflicting_layers(self, tmp_path: _pathlib.Path, write_file: WriteFile) -> None:
        """A section whose kind differs from lower layers is rejected."""
        with _pytest.raises(config.ConfigFileError, match="conflicts"):
            _source(
                tmp_path,
                builtin=write_file("builtin.yaml", BUILTIN),
                user=write_file("user.yaml", "join:\n  - key_field\n"),
            )
