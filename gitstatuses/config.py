"""Optional YAML defaults for the CLI: depth, fetch, remote, summary, legend."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "GIT_STATUSES_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "git-statuses" / "config.yaml"

DEFAULTS: dict[str, Any] = {
    "depth": 1,
    "fetch": False,
    "remote": False,
    "summary": False,
    "legend": False,
}


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """--config wins, then $GIT_STATUSES_CONFIG, then ~/.config/git-statuses/config.yaml."""
    if explicit is not None:
        return explicit
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def _coerce(key: str, value: Any) -> Any:
    if key == "depth":
        depth = int(value)
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        return depth
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def load_config(path: Path | None = None) -> dict[str, Any]:
    """
    Defaults merged with the YAML file at path (if any).
    Bad files and bad values are logged and fall back to defaults.
    """
    config = dict(DEFAULTS)
    if path is None:
        return config
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return config
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return config
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a mapping", path)
        return config
    for key, value in data.items():
        if key not in DEFAULTS:
            logger.debug("Unknown config key %r in %s", key, path)
            continue
        try:
            config[key] = _coerce(key, value)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring %r in %s: %s", key, path, e)
    return config
