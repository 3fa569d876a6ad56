"""Configuration loading and validation."""

from rules.config import (
    CONFIG_FILENAME,
    DEFAULT_EXTENSIONS,
    ConfigError,
    SymdefConfig,
    load_config,
    resolve_output_path,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXTENSIONS",
    "ConfigError",
    "SymdefConfig",
    "load_config",
    "resolve_output_path",
]
