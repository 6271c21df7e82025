"""Custom pydantic-settings source for hash-joiner configuration.

LayeredYamlSettingsSource loads configuration from layered YAML files and
combines them with hash_joiner's own deep_merge, so nested sections merge
naturally while scalars from higher layers override.

Configuration layers (in precedence order, highest first):
1. Environment variables (handled by pydantic-settings)
2. Project config: .hash-joiner.yaml in the working directory
3. User config: ~/.config/hash-joiner/config.yaml (or HASH_JOINER_CONFIG_DIR)
4. Built-in defaults: bundled defaults/config.yaml

Environment variables:
- HASH_JOINER_CONFIG_DIR: Override user config directory
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import hash_joiner.errors as errors
import hash_joiner.merge as merge

_logger = _logging.getLogger(__name__)

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "HASH_JOINER_CONFIG_DIR"

PROJECT_CONFIG_NAME = ".hash-joiner.yaml"


class ConfigFileError(errors.HashJoinerError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


class LayeredYamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that deep-merges layered YAML config files.

    Layers (lowest to highest precedence):
    1. Built-in defaults (src/hash_joiner/config/defaults/config.yaml)
    2. User config (~/.config/hash-joiner/config.yaml)
    3. Project config (./.hash-joiner.yaml)
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_dir: _pathlib.Path | None = None,
        *,
        user_config_path: _pathlib.Path | None = None,
        builtin_config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            project_dir: Directory holding the project config file.
                Defaults to the current working directory.
            user_config_path: Override path for user config file (for testing).
            builtin_config_path: Override path for builtin defaults (for testing).
        """
        super().__init__(settings_cls)
        self._project_dir = project_dir
        self._user_config_path = user_config_path
        self._builtin_config_path = builtin_config_path
        # Layers actually loaded, lowest precedence first
        self._loaded_layers: list[tuple[str, _pathlib.Path]] = []
        self._data = self._load_config_layers()

    def _load_config_layers(self) -> dict[str, _typing.Any]:
        """
        Load and merge config files, lowest precedence first.

        Returns:
            Merged configuration as a fresh dict.
        """
        merged: dict[str, _typing.Any] = {}

        # Built-in defaults are REQUIRED: missing or empty means a broken install
        builtin_path = self._get_builtin_config_path()
        if not builtin_path.exists():
            raise ConfigFileError(
                builtin_path,
                "built-in defaults not found (possible installation problem)",
            )
        builtin_content = self._load_yaml_file(builtin_path)
        if not builtin_content:
            raise ConfigFileError(
                builtin_path,
                "built-in defaults file is empty (possible installation problem)",
            )
        layers = [("built-in", builtin_path, builtin_content)]

        # User and project configs are OPTIONAL
        for name, path in (
            ("user", self._get_user_config_path()),
            ("project", self._get_project_config_path()),
        ):
            if path.exists():
                content = self._load_yaml_file(path)
                if content:
                    layers.append((name, path, content))

        for name, path, content in layers:
            _logger.debug("Loading %s config from %s", name, path)
            try:
                merge.deep_merge(merged, content)
            except errors.MergeError as e:
                raise ConfigFileError(path, f"conflicts with lower layers: {e}") from e
            self._loaded_layers.append((name, path))

        return merged

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """
        Get info about layers that were actually loaded.

        Returns:
            List of (layer_name, path) tuples, lowest precedence first.
        """
        return list(self._loaded_layers)

    def _get_builtin_config_path(self) -> _pathlib.Path:
        """Get path to builtin defaults, respecting override."""
        if self._builtin_config_path is not None:
            return self._builtin_config_path
        return get_builtin_defaults_path()

    def _get_user_config_path(self) -> _pathlib.Path:
        """Get path to user config, respecting override and env var."""
        if self._user_config_path is not None:
            return self._user_config_path
        return get_user_config_path()

    def _get_project_config_path(self) -> _pathlib.Path:
        """Get path to project config in the project directory."""
        project_dir = self._project_dir or _pathlib.Path.cwd()
        return project_dir / PROJECT_CONFIG_NAME

    def _load_yaml_file(
        self,
        path: _pathlib.Path,
    ) -> dict[str, _typing.Any] | None:
        """
        Load a YAML file and return its contents as a dict.

        Returns:
            Parsed YAML contents, or None if file is empty.

        Raises:
            ConfigFileError: If the file cannot be read, is malformed YAML,
                or contains non-dict content at the top level.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise ConfigFileError(path, f"permission denied: {e}") from e
        except OSError as e:
            raise ConfigFileError(path, f"cannot read file: {e}") from e

        try:
            parsed = _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise ConfigFileError(path, f"invalid YAML: {e}") from e

        if parsed is None:
            return None

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
        Get value for a field from the merged config.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._data.get(field_name)
        if value is None:
            return None, field_name, False
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """
        Return merged config as a plain dict for Pydantic validation.

        Unknown keys are included and end up in Settings.model_extra.
        """
        return dict(self._data)


def get_builtin_defaults_path() -> _pathlib.Path:
    """Get the path to the built-in defaults config file."""
    return _pathlib.Path(__file__).parent / "defaults" / "config.yaml"


def get_user_config_dir() -> _pathlib.Path:
    """
    Get the user config directory.

    Respects HASH_JOINER_CONFIG_DIR environment variable if set,
    otherwise uses XDG standard path.
    """
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "hash-joiner"


def get_user_config_path() -> _pathlib.Path:
    """Get the path to the user config file."""
    return get_user_config_dir() / "config.yaml"
