"""
Configuration dataclasses for wallrotate.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class WallpaperConfig:
    """Which platform backend reads and sets the background."""
    command: str = "auto"  # "auto", a backend name, or "custom:<template>"

    def to_dict(self) -> Dict[str, Any]:
        return {'command': self.command}


@dataclass
class WindowState:
    """
    Persisted geometry of an attached configuration window.

    The rotation core never reads these values; they are stored so a UI
    can restore its window between sessions.
    """
    width: Optional[int] = None
    height: Optional[int] = None
    minimized: Optional[bool] = None

    def is_empty(self) -> bool:
        return self.width is None and self.height is None and self.minimized is None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in (
            ('width', self.width),
            ('height', self.height),
            ('minimized', self.minimized),
        ) if v is not None}


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        return {'level': self.level}
