"""
Configuration loader — reads gentx.yml into a GentxConfig.

The file is optional: without one, every setting takes its default.
When present it is parsed as YAML and validated against the
pydantic schema.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from gentx.core.errors import ConfigError
from gentx.core.models.config import GentxConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "gentx.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for gentx.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to gentx.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None) -> GentxConfig:
    """Load and validate gentx.yml.

    Args:
        path: Path to the config file. None means "no config file".

    Returns:
        Validated GentxConfig (defaults when ``path`` is None).

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    if path is None:
        logger.debug("No %s — using defaults", CONFIG_FILE)
        return GentxConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return GentxConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = GentxConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config


def project_root(config_path: Path | None) -> Path:
    """Project root for a config file path (cwd when there is none)."""
    if config_path is None:
        return Path.cwd().resolve()
    return config_path.parent.resolve()
