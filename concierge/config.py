"""
concierge.config — YAML Configuration Loader
=============================================

**Why this file exists:**
This module reads ``config.yaml`` for **infrastructure-only** settings (where
the data directory lives, the presence text, the log level).  The token,
channel id, guild id and rosters are not here; they live as flat files in
the data directory and are loaded by :mod:`concierge.data.runtime`.

Environment variables (a ``.env`` file is honoured by the entry point)
override single keys:

- ``CONCIERGE_CONFIG``     path of the YAML file (default ``config.yaml``)
- ``CONCIERGE_DATA_DIR``   overrides ``data_dir``
- ``CONCIERGE_LOG_LEVEL``  overrides ``log_level``

Usage::

    from concierge.config import load_config

    cfg = load_config()          # reads ./config.yaml if present
    print(cfg.data_dir)          # PosixPath('data')
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

from concierge.constants import DEFAULT_DATA_DIR, DEFAULT_LOG_LEVEL, DEFAULT_STATUS_TEXT

logger = logging.getLogger(__name__)

CONFIG_ENV = "CONCIERGE_CONFIG"
DATA_DIR_ENV = "CONCIERGE_DATA_DIR"
LOG_LEVEL_ENV = "CONCIERGE_LOG_LEVEL"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ConciergeConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    status_text: str = DEFAULT_STATUS_TEXT  # shown as "Listening to <status_text>"
    log_level: str = DEFAULT_LOG_LEVEL


def _normalize_level(level: str) -> str:
    level = str(level).upper()
    if level not in VALID_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {VALID_LEVELS}")
    return level


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConciergeConfig:
    """Read *path* and return a :class:`ConciergeConfig` instance.

    Parameters
    ----------
    path:
        YAML file to read.  Defaults to ``$CONCIERGE_CONFIG`` or
        ``config.yaml`` in the working directory.  A missing file means
        "all defaults".
    environ:
        Environment mapping for overrides (defaults to ``os.environ``).

    Raises
    ------
    ValueError
        If the file does not contain a mapping, or the log level is unknown.
    """
    env = os.environ if environ is None else environ
    config_path = Path(path or env.get(CONFIG_ENV) or "config.yaml")

    raw: dict = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"{config_path} must contain a YAML mapping")
        raw = loaded or {}
    else:
        logger.info("No %s found; using default settings", config_path)

    data_dir = env.get(DATA_DIR_ENV) or raw.get("data_dir") or DEFAULT_DATA_DIR
    log_level = env.get(LOG_LEVEL_ENV) or raw.get("log_level") or DEFAULT_LOG_LEVEL

    return ConciergeConfig(
        data_dir=Path(data_dir),
        status_text=str(raw.get("status_text") or DEFAULT_STATUS_TEXT),
        log_level=_normalize_level(log_level),
    )
