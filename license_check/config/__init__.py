"""Configuration handling for license-check."""
from __future__ import annotations

from license_check.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_check.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from license_check.models.config import CheckConfig

__all__ = [
    "CheckConfig",
    "DEFAULT_CONFIG_NAMES",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
