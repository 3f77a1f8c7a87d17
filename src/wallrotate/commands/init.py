"""Initialization and validation commands."""

import logging

from ..config import ConfigStore
from ..exceptions import CommandError, ConfigValidationError
from ..schedule import validate_schedule
from ..wallpaper import get_setter


def init_config(store: ConfigStore) -> None:
    """Create a default config file if none exists."""
    if store.exists():
        print(f"Config already exists at {store.config_file}")
        return

    store.load()
    print(f"Configuration initialized at {store.config_file}")


def validate_config(store: ConfigStore) -> None:
    """
    Validate configuration and report issues.

    Raises:
        ConfigError: If the file cannot be used at all
        ConfigValidationError: If the schedule or backend is unusable
    """
    logger = logging.getLogger(__name__)

    config = store.read()
    print(f"✓ {store.config_file} is valid TOML with known keys")

    problems = validate_schedule(config.schedule)
    for problem in problems:
        print(f"✗ schedule: {problem}")

    try:
        setter = get_setter(config.wallpaper.command)
        print(f"✓ wallpaper backend: {type(setter).__name__}")
    except CommandError as e:
        logger.debug(f"Backend check failed: {e}")
        problems.append(str(e))
        print(f"✗ wallpaper backend: {e}")

    missing = [t for t in config.targets if not t.exists()]
    for target in missing:
        print(f"! missing target: {target}")
    print(f"  {len(config.targets)} target(s), {len(missing)} missing")

    if problems:
        raise ConfigValidationError(f"{len(problems)} problem(s) found in {store.config_file}")
