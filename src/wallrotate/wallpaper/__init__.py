"""Wallpaper backend module."""

from .target import WallpaperTarget
from .setters import WallpaperSetter, get_setter, detect_setter

__all__ = ["WallpaperTarget", "WallpaperSetter", "get_setter", "detect_setter"]
