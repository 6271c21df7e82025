"""Configuration section types for hash-joiner settings.

Each section is a Pydantic model nested within the main Settings class
and maps to a top-level key of the YAML config files:

- JoinConfig: key_field
- OutputConfig: format
- LoggingConfig: level

All types use `extra="allow"` so unknown keys are preserved rather than
silently dropped; use `get_extra_fields()` to audit them for typos.
"""

import typing as _typing

import pydantic as _pydantic


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config section types.

    Unknown fields are kept in model_extra so config files can be audited.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Return fields that were provided but not in the schema.

        Returns:
            Dict of field_name → value for all unrecognized fields.
        """
        return dict(self.model_extra) if self.model_extra else {}

    def has_extra_fields(self) -> bool:
        """Check if this config has any unrecognized fields."""
        return bool(self.model_extra)


class JoinConfig(ConfigBase):
    """
    Join settings.

    YAML section: join.*
    """

    key_field: str = "name"
    """Primary key field used to match records in sequence categories."""


class OutputConfig(ConfigBase):
    """
    Output settings.

    YAML section: output.*
    """

    format: _typing.Literal["yaml", "json"] = "yaml"
    """Serialization format for CLI output."""


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Log level for the CLI's root logger."""
