"""Locate, parse and validate ``.license-check.yaml`` policy files."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from license_check.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_check.exceptions import ConfigurationError
from license_check.models.config import CheckConfig


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the first policy file present in ``start_dir`` (default: cwd).

    ``.license-check.yaml`` wins over ``.license-check.yml``.
    """
    directory = start_dir or Path.cwd()
    candidates = (directory / name for name in DEFAULT_CONFIG_NAMES)
    return next((path for path in candidates if path.exists()), None)


def _read_policy_mapping(path: Path) -> dict[str, Any] | None:
    """Parse a policy file into a mapping; None when it holds no settings."""
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    if document is None or isinstance(document, dict):
        return document
    raise ConfigurationError(
        f"Invalid configuration in '{path}': expected a mapping at root level, "
        f"got {type(document).__name__}"
    )


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )


def load_config_file(path: Path) -> CheckConfig:
    """Load one policy file.

    Empty and comment-only files give the default policy.

    Raises:
        ConfigurationError: If the file is unreadable, is not YAML, is not a
            mapping, or has unknown keys or wrongly typed values.
    """
    settings = _read_policy_mapping(path)
    if settings is None:
        return get_default_config()
    try:
        return CheckConfig.model_validate(settings)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in '{path}': {_describe(e)}") from e


def load_config(config_path: str | None = None) -> CheckConfig:
    """Load the explicit policy file, else a discovered one, else defaults."""
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None:
        return get_default_config()
    return load_config_file(path)
