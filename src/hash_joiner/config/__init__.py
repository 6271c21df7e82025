"""
Configuration module for hash-joiner.

Uses pydantic-settings for environment variable and layered YAML loading.
"""

from hash_joiner.config.settings import Settings
from hash_joiner.config.sources import ConfigFileError, LayeredYamlSettingsSource

__all__ = ["ConfigFileError", "LayeredYamlSettingsSource", "Settings"]
