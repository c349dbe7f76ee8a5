"""Resolve tracker settings from arguments, environment and `.tasks.yaml`."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from loguru import logger

from .constants import (
    CONFIG_FILE_NAME,
    DATA_FILE_ENV,
    DATA_FILE_NAME,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV,
)

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class TrackerSettings:
    data_file: Path
    log_level: str = DEFAULT_LOG_LEVEL


def load_tracker_config(cwd: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional tracker config file.

    Args:
        cwd: Directory that may contain a `.tasks.yaml` file.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = cwd / CONFIG_FILE_NAME
    if not path.exists():
        return {}, None
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        return {}, f"{path.name}: {exc.__class__.__name__}: {exc}"
    except yaml.YAMLError as exc:
        return {}, f"{path.name}: YAMLError: {exc}"
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return {}, f"{path.name}: expected mapping, got {type(data).__name__}"
    return data, None


def _resolve_path(raw: str, cwd: Path) -> Path:
    path = Path(raw).expanduser()
    return path if path.is_absolute() else cwd / path


def get_log_level_config(config: Mapping[str, Any]) -> str | None:
    raw = config.get("log_level")
    if isinstance(raw, str) and raw.upper() in VALID_LOG_LEVELS:
        return raw.upper()
    return None


def load_settings(
    cwd: Optional[Path] = None,
    *,
    data_file: Optional[str] = None,
    log_level: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TrackerSettings:
    """Resolve settings: explicit arguments, then environment, then config file, then defaults."""
    cwd = (cwd or Path.cwd()).resolve()
    env = os.environ if environ is None else environ

    config, err = load_tracker_config(cwd)
    if err:
        logger.warning("Ignoring unreadable config file: {}", err)

    raw_file = data_file or env.get(DATA_FILE_ENV) or config.get("data_file")
    resolved_file = _resolve_path(str(raw_file), cwd) if raw_file else cwd / DATA_FILE_NAME

    level = (log_level or env.get(LOG_LEVEL_ENV) or "").upper()
    if level not in VALID_LOG_LEVELS:
        level = get_log_level_config(config) or DEFAULT_LOG_LEVEL

    return TrackerSettings(data_file=resolved_file, log_level=level)
