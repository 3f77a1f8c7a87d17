"""
wallrotate - Scheduled desktop wallpaper rotation.

Rotate through a list of images, at random or in order, inside
configurable time-of-day, weekday and day-of-month windows, and put
the original wallpaper back when rotation stops.
"""

__version__ = "0.1.0"

from .config import ConfigStore, RotationConfig
from .schedule import ScheduleConstraints, Weekday, should_run
from .rotation import RotationContext, RotationController, RotationPhase, RotationState
from .targets import TargetEditor, collect_images
from .wallpaper import WallpaperTarget
from .app import Application

__all__ = [
    "Application",
    "ConfigStore",
    "RotationConfig",
    "ScheduleConstraints",
    "Weekday",
    "should_run",
    "RotationContext",
    "RotationController",
    "RotationPhase",
    "RotationState",
    "TargetEditor",
    "collect_images",
    "WallpaperTarget",
]
