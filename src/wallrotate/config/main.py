"""
Main configuration class and TOML-backed store for wallrotate.
"""

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomli
    import tomli_w
except ImportError:
    raise ImportError("Required packages 'tomli' and 'tomli-w' not found. Install with: pip install tomli tomli-w")

from ..exceptions import ConfigError, ConfigValidationError
from ..schedule import ScheduleConstraints
from .dataclasses import LoggingConfig, WallpaperConfig, WindowState
from .validation import VALID_LOG_LEVELS, validate_toml_structure

DEFAULT_INTERVAL = 60


@dataclass
class RotationConfig:
    """
    Main configuration for wallrotate.

    The whole record is read and written at once; there are no partial
    updates of the config file.
    """

    interval: int = DEFAULT_INTERVAL  # Seconds between ticks, 0 means default
    random: bool = True
    targets: List[Path] = field(default_factory=list)
    schedule: ScheduleConstraints = field(default_factory=ScheduleConstraints)
    wallpaper: WallpaperConfig = field(default_factory=WallpaperConfig)
    window: WindowState = field(default_factory=WindowState)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        """Validate and post-process configuration."""
        self.targets = [Path(t) for t in self.targets]

        if self.interval < 0:
            raise ConfigValidationError(
                f"Rotation interval ({self.interval}s) must not be negative."
            )

        if self.logging.level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"Invalid log level: {self.logging.level}\n"
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

    @property
    def effective_interval(self) -> int:
        """Interval in seconds with the zero-means-default rule applied."""
        return self.interval if self.interval > 0 else DEFAULT_INTERVAL

    def copy(self) -> 'RotationConfig':
        """Deep copy, safe to hand to another thread."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a TOML-serializable dictionary."""
        config_dict: Dict[str, Any] = {
            'rotation': {
                'interval': self.interval,
                'random': self.random,
                'targets': [str(t) for t in self.targets],
            },
            'wallpaper': self.wallpaper.to_dict(),
            'logging': self.logging.to_dict(),
        }

        schedule = self.schedule.to_dict()
        if schedule:
            config_dict['schedule'] = schedule

        if not self.window.is_empty():
            config_dict['window'] = self.window.to_dict()

        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'RotationConfig':
        """Build from an already-validated TOML dictionary."""
        rotation = config_dict.get('rotation', {})
        return cls(
            interval=rotation.get('interval', DEFAULT_INTERVAL),
            random=rotation.get('random', True),
            targets=[Path(t) for t in rotation.get('targets', [])],
            schedule=ScheduleConstraints.from_dict(config_dict.get('schedule', {})),
            wallpaper=WallpaperConfig(**config_dict.get('wallpaper', {})),
            window=WindowState(**config_dict.get('window', {})),
            logging=LoggingConfig(**config_dict.get('logging', {})),
        )


class ConfigStore:
    """
    Reads and writes the persisted configuration.

    `load()` never fails: a missing file is created with defaults and an
    unreadable or invalid one is replaced by defaults in memory. `read()`
    and `save()` raise ConfigError so that editors can report problems.
    """

    def __init__(self, config_file: Optional[Path] = None) -> None:
        self.config_file = Path(config_file) if config_file else self.get_config_dir() / "config.toml"
        self.logger = logging.getLogger(__name__)

    @classmethod
    def get_config_dir(cls) -> Path:
        """
        Get user configuration directory.

        Uses XDG_CONFIG_HOME if set, otherwise defaults to ~/.config.
        """
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "wallrotate"
        return Path.home() / ".config" / "wallrotate"

    @property
    def pid_file(self) -> Path:
        """Pid file of the daemon using this config file."""
        return self.config_file.parent / "daemon.pid"

    def exists(self) -> bool:
        return self.config_file.exists()

    def read_dict(self) -> Dict[str, Any]:
        """
        Read and validate the raw TOML dictionary.

        Raises:
            ConfigError: If the file cannot be read, parsed or validated
        """
        try:
            with open(self.config_file, 'rb') as f:
                config_dict = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse {self.config_file}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read {self.config_file}: {e}") from e

        validate_toml_structure(config_dict, self.config_file)
        return config_dict

    def read(self) -> RotationConfig:
        """
        Strictly load configuration.

        Returns defaults if the file does not exist.

        Raises:
            ConfigError: If the file exists but is unusable
        """
        if not self.config_file.exists():
            return RotationConfig()

        config = RotationConfig.from_dict(self.read_dict())
        self.logger.debug(f"Loaded config from {self.config_file}")
        return config

    def load(self) -> RotationConfig:
        """
        Load configuration, substituting defaults on any problem.

        A missing config file is created with default values.
        """
        if not self.config_file.exists():
            self.logger.info(f"{self.config_file} not found, creating default config")
            config = RotationConfig()
            try:
                self.save(config)
            except ConfigError as e:
                self.logger.warning(str(e))
            return config

        try:
            return self.read()
        except ConfigError as e:
            self.logger.warning(f"Failed to load config, using defaults: {e}")
            return RotationConfig()

    def save(self, config: RotationConfig) -> None:
        """
        Persist the whole configuration record.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, 'wb') as f:
                tomli_w.dump(config.to_dict(), f)
        except OSError as e:
            raise ConfigError(f"Failed to save config to {self.config_file}: {e}") from e

        self.logger.debug(f"Saved config to {self.config_file}")
