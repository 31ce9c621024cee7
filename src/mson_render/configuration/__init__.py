"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    DRAFT_04_SCHEMA_URI,
    OutputSettings,
    RenderingSettings,
    RenderSettings,
)

__all__ = [
    "OutputSettings",
    "RenderingSettings",
    "RenderSettings",
    "DRAFT_04_SCHEMA_URI",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
