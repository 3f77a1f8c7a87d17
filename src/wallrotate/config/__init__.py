"""
Configuration package for wallrotate.
"""

from .main import DEFAULT_INTERVAL, ConfigStore, RotationConfig
from .dataclasses import LoggingConfig, WallpaperConfig, WindowState
from .validation import validate_toml_structure
from ..exceptions import ConfigError, ConfigValidationError
