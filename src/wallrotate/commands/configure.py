"""Set command: edit rotation settings from the command line."""

import logging
from typing import List, Optional

from ..config import ConfigStore, RotationConfig
from ..daemon import notify_daemon
from ..exceptions import ConfigValidationError
from ..schedule import validate_schedule

# Values that clear an optional setting
CLEAR_VALUES = {"", "none", "off"}


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None or value.strip().lower() in CLEAR_VALUES:
        return None
    return value.strip()


def _optional_list(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None or any(v.strip().lower() in CLEAR_VALUES for v in values):
        return None
    return [v.strip() for v in values]


def apply_options(
    config: RotationConfig,
    interval: Optional[int] = None,
    random: Optional[bool] = None,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    weekly: Optional[List[str]] = None,
    monthly: Optional[List[str]] = None,
    command: Optional[str] = None,
) -> RotationConfig:
    """
    Return a copy of `config` with the given settings changed.

    None leaves a setting alone. For schedule settings, "none" (or "off",
    or an empty string) removes the constraint.

    Raises:
        ConfigValidationError: If a value is unusable
    """
    config = config.copy()

    if interval is not None:
        if interval < 0:
            raise ConfigValidationError(f"Interval must not be negative, got {interval}")
        config.interval = interval

    if random is not None:
        config.random = random

    if start_time is not None:
        config.schedule.start_time = _optional(start_time)
    if end_time is not None:
        config.schedule.end_time = _optional(end_time)

    if weekly is not None:
        config.schedule.weekly = _optional_list(weekly)

    if monthly is not None:
        days = _optional_list(monthly)
        try:
            config.schedule.monthly = [int(d) for d in days] if days is not None else None
        except ValueError as e:
            raise ConfigValidationError(f"Monthly days must be numbers: {e}") from e

    if command is not None:
        config.wallpaper.command = command

    return config


def set_options(store: ConfigStore, **options) -> None:
    """Apply settings, save, and tell a running daemon."""
    logger = logging.getLogger(__name__)

    config = apply_options(store.read(), **options)
    for problem in validate_schedule(config.schedule):
        logger.warning(problem)

    store.save(config)
    print(f"Saved {store.config_file}")

    notify_daemon(store.pid_file)
