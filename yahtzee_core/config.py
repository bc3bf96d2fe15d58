"""Runtime settings and logging setup for the simulator."""

from __future__ import annotations

import logging
import logging.config
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Optional

import yaml

DEFAULT_TRIALS: Final[int] = 100
DEFAULT_CHUNK_SIZE: Final[int] = 500
MAX_TRIALS_DEFAULT: Final[int] = 1_000_000
_MAX_TRIALS: int = MAX_TRIALS_DEFAULT

LOGGING_CONFIG_PATH: Final[Path] = Path(__file__).with_name("logging.yaml")
MAX_TRIALS_ENV: Final[str] = "YAHTZEE_SIM_MAX_TRIALS"
LOG_LEVEL_ENV: Final[str] = "YAHTZEE_SIM_LOG_LEVEL"

logger = logging.getLogger(__name__)


def set_max_trials(limit: int) -> None:
    """Update the global cap on trials accepted from user input.

    Raises
    ------
    ValueError
        If ``limit`` is lower than one.
    """

    if limit < 1:
        raise ValueError("Maximum trial count must be at least 1.")
    global _MAX_TRIALS
    _MAX_TRIALS = int(limit)


def get_max_trials() -> int:
    """Return the currently configured cap on trials."""

    return _MAX_TRIALS


def validate_log_level(name: str) -> str:
    """Return the upper-cased level name if ``logging`` knows it.

    Raises
    ------
    ValueError
        If ``name`` is not a standard logging level name.
    """

    level = name.strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level {name!r}")
    return level


@dataclass(frozen=True)
class Settings:
    max_trials: int = MAX_TRIALS_DEFAULT
    log_level: str = "INFO"
    chunk_size: int = DEFAULT_CHUNK_SIZE


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from environment variables, falling back to defaults."""

    env = os.environ if environ is None else environ
    raw_max = env.get(MAX_TRIALS_ENV)
    max_trials = MAX_TRIALS_DEFAULT
    if raw_max is not None:
        try:
            max_trials = int(raw_max)
        except ValueError as exc:
            raise ValueError(f"{MAX_TRIALS_ENV} must be an integer, got {raw_max!r}") from exc
        if max_trials < 1:
            raise ValueError(f"{MAX_TRIALS_ENV} must be at least 1, got {max_trials}")
    raw_level = env.get(LOG_LEVEL_ENV, "INFO")
    try:
        log_level = validate_log_level(raw_level)
    except ValueError as exc:
        raise ValueError(f"{LOG_LEVEL_ENV} must be a logging level name, got {raw_level!r}") from exc
    return Settings(max_trials=max_trials, log_level=log_level)


def load_yaml_config(path: str | Path) -> Optional[dict[str, Any]]:
    """Return the parsed YAML mapping at ``path``, or None if it cannot be used."""

    try:
        raw_data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return None
    if not isinstance(raw_data, dict):
        return None
    return raw_data


def configure_logging(
    path: str | Path | None = None,
    level: Optional[str] = None,
) -> None:
    """Configure process-wide logging once at start-up.

    Loads a ``dictConfig`` YAML file (the packaged ``logging.yaml`` by
    default) and falls back to ``basicConfig`` when it is missing or invalid.
    ``level`` overrides the package and root levels afterwards.
    """

    if level:
        level = validate_log_level(level)
    config = load_yaml_config(path if path is not None else LOGGING_CONFIG_PATH)
    if config:
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.INFO)
        logger.warning("Logging config not found or invalid, using basicConfig")
    if level:
        for name in ("", "yahtzee_core"):
            logging.getLogger(name).setLevel(level)
