"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with HASH_JOINER_ prefix
3. .env file in the working directory (if present)
4. Layered YAML config files:
   - Project config: .hash-joiner.yaml (highest)
   - User config: ~/.config/hash-joiner/config.yaml
   - Built-in defaults: bundled defaults/config.yaml (lowest)

Nested config uses double underscore delimiter:
  HASH_JOINER_JOIN__KEY_FIELD=id
  HASH_JOINER_LOGGING__LEVEL=debug
"""

import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import hash_joiner.config.sources as sources
import hash_joiner.config.types as types


class Settings(_pydantic_settings.BaseSettings):
    """
    hash-joiner configuration settings.

    All settings can be overridden via environment variables with the
    HASH_JOINER_ prefix. For nested config, use double underscore:
    HASH_JOINER_OUTPUT__FORMAT=json
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="HASH_JOINER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args) (highest)
        2. env_settings (HASH_JOINER_* env vars)
        3. dotenv_settings (.env file)
        4. layered YAML config files
        5. (defaults via Field definitions) (lowest)
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.LayeredYamlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings without loading the .env file (for test isolation)."""
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    version: int = _pydantic.Field(default=1, description="Config schema version")

    private_key: str = "private"
    """Key holding the data that prune strips and promote lifts."""

    join: types.JoinConfig = _pydantic.Field(default_factory=types.JoinConfig)
    """Join settings (primary key field)."""

    output: types.OutputConfig = _pydantic.Field(default_factory=types.OutputConfig)
    """Output settings (serialization format)."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""
