"""
Best-effort access to the platform background.

Wraps a WallpaperSetter so that callers never see an exception: failures
are logged and reported as None / False, and the next tick tries again.
"""

import logging
from pathlib import Path
from typing import Optional

from ..config import WallpaperConfig
from .setters import WallpaperSetter, get_setter


class WallpaperTarget:
    """
    Platform accessor used by the rotation controller.

    Responsibilities:
    - Lazily choosing a backend from the wallpaper config
    - Reading the current background
    - Applying a background, never propagating errors
    """

    def __init__(self, wallpaper_config: WallpaperConfig, setter: Optional[WallpaperSetter] = None) -> None:
        self.wallpaper_config = wallpaper_config
        self.logger = logging.getLogger(__name__)
        self._setter = setter

    @property
    def setter(self) -> WallpaperSetter:
        """
        Lazy-load wallpaper backend.

        Raises:
            CommandError: If the configured backend cannot be constructed
        """
        if self._setter is None:
            self._setter = get_setter(self.wallpaper_config.command)
        return self._setter

    def get_current_background(self) -> Optional[Path]:
        """
        Read the background currently in effect.

        Returns:
            Image path, or None if it cannot be determined
        """
        try:
            current = self.setter.get()
        except Exception as e:
            self.logger.error(f"Failed to get current wallpaper: {e}")
            return None

        if current is None:
            self.logger.debug("Current wallpaper is unknown")
        return current

    def set_background(self, image_path: Path) -> bool:
        """
        Apply an image as the background.

        Returns:
            True if the backend reported success
        """
        return self._apply(image_path, restore=False)

    def restore_background(self, image_path: Path) -> bool:
        """
        Put back the background read at startup.

        Backends that captured more than a single image (GNOME's light and
        dark keys) restore all of it.

        Returns:
            True if the backend reported success
        """
        return self._apply(image_path, restore=True)

    def _apply(self, image_path: Path, restore: bool) -> bool:
        if not image_path.exists():
            self.logger.error(f"Image file does not exist: {image_path}")
            return False

        try:
            if restore:
                ok = self.setter.restore(image_path)
            else:
                ok = self.setter.set(image_path)
        except Exception as e:
            self.logger.error(f"Failed to set wallpaper {image_path}: {e}")
            return False

        if not ok:
            self.logger.error(f"Failed to set wallpaper: {image_path}")
        return ok
