"""
Process lifetime management for the rotation daemon.

The Application owns the shared rotation context. It captures the original
background before anything changes it, starts the controller, exposes the
handlers a configuration front end calls, and restores the original
background exactly once on exit.
"""

import atexit
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import ConfigStore, RotationConfig, WindowState
from .rotation import RotationContext, RotationController
from .targets import TargetEditor
from .wallpaper import WallpaperTarget

logger = logging.getLogger(__name__)


class Application:
    """
    Owns the rotation daemon's components for the process lifetime.

    Args:
        store: Config store to load from and save to
        wallpaper: Platform accessor; built from the loaded config if omitted
        controller_factory: Hook for tests to customise the controller
    """

    def __init__(
        self,
        store: ConfigStore,
        wallpaper: Optional[WallpaperTarget] = None,
        controller_factory=RotationController,
    ) -> None:
        self.store = store
        config = store.load()

        self.wallpaper = wallpaper or WallpaperTarget(config.wallpaper)
        # Resolve the backend now: without one the daemon cannot do anything
        self.wallpaper.setter

        original = self.wallpaper.get_current_background()
        if original is None:
            logger.warning("Could not determine the current wallpaper; it will not be restored on exit")
        else:
            logger.info(f"Original wallpaper: {original}")

        self.context = RotationContext(config, original_background=original)
        self.controller = controller_factory(self.context, self.wallpaper)
        self.editor = TargetEditor(store, self.context)

        self._shutdown_lock = threading.Lock()
        self._shut_down = False

    # Lifecycle

    def start(self) -> None:
        """Start rotating and register the exit hook."""
        atexit.register(self.shutdown)
        self.controller.start()

    def shutdown(self) -> None:
        """
        Exit hook: stop the loop and restore the original background.

        Runs its body once no matter how often it is called.
        """
        with self._shutdown_lock:
            if self._shut_down:
                return
            self._shut_down = True

        logger.info("Shutting down")
        self.controller.stop()
        if self.controller.restore_original():
            logger.info(f"Restored original wallpaper {self.context.original_background}")

    # Handlers

    def save_config(self, config: RotationConfig) -> RotationConfig:
        """
        Persist a configuration and apply it immediately.

        An empty target list does not erase stored targets; targets are
        edited through add_targets / remove_target.

        Returns:
            The configuration actually saved

        Raises:
            ConfigError: If saving fails
        """
        merged = config.copy()
        if not merged.targets and self.store.exists():
            merged.targets = self.store.read().targets

        self.store.save(merged)
        self.context.replace_config(merged)
        self.context.notify()
        logger.info("Configuration saved")
        return merged

    def reload_config(self) -> None:
        """Re-read the config file after an external edit and apply it."""
        config = self.store.load()
        self.context.replace_config(config)
        self.context.notify()
        logger.info(f"Reloaded configuration from {self.store.config_file}")

    def add_targets(self, paths: Iterable[Union[str, Path]]) -> List[Path]:
        return self.editor.add_targets(paths)

    def remove_target(self, path: Union[str, Path]) -> List[Path]:
        return self.editor.remove_target(path)

    def record_window_geometry(self, width: int, height: int, minimized: bool) -> None:
        """
        Persist the configuration window's geometry.

        Only the window fields change, in the file and in the live
        configuration. Does not wake the controller; nothing it reads has
        changed.

        Raises:
            ConfigError: If the config file cannot be read or written
        """
        config = self.store.read()
        config.window = WindowState(width=width, height=height, minimized=minimized)
        self.store.save(config)
        self.context.set_window(config.window)
