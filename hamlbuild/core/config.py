"""Build file loading."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .models import BuildConfig

logger = logging.getLogger(__name__)


def load_build_config(path: Path) -> BuildConfig:
    """Load and validate a YAML build file.

    Args:
        path: Path to the build file

    Returns:
        Validated build configuration

    Raises:
        ConfigurationError: when the file is missing, is not valid YAML or
            does not match the build file schema
    """
    if not path.exists():
        raise ConfigurationError(f"Build file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Build file {path} must contain a mapping")

    try:
        config = BuildConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid build file {path}: {e}") from e

    logger.debug(f"Loaded {len(config.targets)} target(s) from {path}")
    return config
