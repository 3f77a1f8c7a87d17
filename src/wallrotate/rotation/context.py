"""
Shared context between the rotation thread and configuration handlers.

Configuration and rotation state each have their own lock. Locks are held
only while copying data in or out; nothing blocking happens under them.
"""

import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from ..config import RotationConfig, WindowState
from .state import RotationState

logger = logging.getLogger(__name__)


class RotationContext:
    """
    Lock-guarded configuration, rotation state and wake signal.

    The wake signal is a single slot: any number of `notify()` calls made
    before the controller waits again result in one early wake.
    """

    def __init__(self, config: RotationConfig, original_background: Optional[Path] = None) -> None:
        self._original_background = original_background
        self._config_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._config = config.copy()
        self._state = RotationState(last_mode_was_random=config.random)
        self._wake = threading.Event()

    @property
    def original_background(self) -> Optional[Path]:
        """Background in effect before rotation started; never changes."""
        return self._original_background

    # Configuration

    def config_snapshot(self) -> RotationConfig:
        with self._config_lock:
            return self._config.copy()

    def replace_config(self, config: RotationConfig) -> None:
        """
        Install a newly saved configuration.

        A switch to random mode is recorded right away. A switch to
        sequential mode is left for the controller to observe, so the
        next sequential pick continues after the last random one.
        """
        with self._config_lock:
            self._config = config.copy()
        if config.random:
            with self._state_lock:
                self._state.last_mode_was_random = True

    def set_targets(self, targets: List[Path]) -> None:
        with self._config_lock:
            self._config.targets = list(targets)

    def set_window(self, window: WindowState) -> None:
        with self._config_lock:
            self._config.window = replace(window)

    # Rotation state

    def state_snapshot(self) -> RotationState:
        with self._state_lock:
            return self._state.copy()

    def commit_state(self, state: RotationState) -> None:
        with self._state_lock:
            self._state = state.copy()

    # Wake signal

    def notify(self) -> None:
        """Wake the controller early. Idempotent until it wakes."""
        self._wake.set()

    def wait(self, timeout: float) -> bool:
        """
        Sleep until `timeout` elapses or `notify()` is called.

        Returns:
            True if woken by notify()
        """
        woken = self._wake.wait(timeout)
        self._wake.clear()
        if woken:
            logger.debug("Woken early by configuration change")
        return woken
