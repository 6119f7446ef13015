"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import Configuration

__all__ = [
    "Configuration",
    "ConfigurationError",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "load_configuration",
    "write_placeholder_configuration",
]
