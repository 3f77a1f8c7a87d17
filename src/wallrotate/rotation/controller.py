"""
Rotation controller.

Runs the tick loop on a background thread. Each tick takes a snapshot of
configuration and state, asks the schedule whether rotation should run,
then either applies the next image or restores the original background.
Between ticks the thread sleeps for the configured interval, or less if a
configuration change wakes it.
"""

import logging
import random
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..schedule import should_run
from ..wallpaper import WallpaperTarget
from .context import RotationContext
from .selection import advance, index_after, pick_random, sequential_pick
from .state import RotationPhase, RotationState

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Outcome of one tick."""
    phase: RotationPhase
    applied: Optional[Path] = None
    restored: bool = False
    interval: int = 60


class RotationController:
    """
    Drives wallpaper rotation.

    State machine: INACTIVE, ACTIVE_RANDOM, ACTIVE_SEQUENTIAL. Transitions
    depend only on whether targets exist, what the schedule says and the
    random flag, re-evaluated on every tick.
    """

    def __init__(
        self,
        context: RotationContext,
        wallpaper: WallpaperTarget,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.context = context
        self.wallpaper = wallpaper
        self.rng = rng or random.Random()
        self.clock = clock
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # Loop

    def start(self) -> None:
        """Start the tick loop on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            if self._stop.is_set():
                logger.warning("Rotation thread is still stopping; not starting another")
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="WallpaperRotation", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Ask the loop to exit after the current tick and wait for it."""
        self._stop.set()
        self.context.notify()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                # Keep the reference so start() cannot launch a second loop
                logger.warning(f"Rotation thread did not stop within {timeout}s")
                return
        self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run(self) -> None:
        """Tick until stopped."""
        logger.info("Rotation loop started")
        while not self._stop.is_set():
            interval = self.context.config_snapshot().effective_interval
            try:
                interval = self.tick().interval
            except Exception:
                logger.exception("Rotation tick failed")

            if self._stop.is_set():
                break
            self.context.wait(interval)
        logger.info("Rotation loop stopped")

    # Tick

    def tick(self, now: Optional[datetime] = None) -> TickResult:
        """
        Run one decision cycle.

        Args:
            now: Moment to evaluate the schedule at (default: clock())

        Returns:
            TickResult describing what happened
        """
        if now is None:
            now = self.clock()

        config = self.context.config_snapshot()
        state = self.context.state_snapshot()
        targets = config.targets
        interval = config.effective_interval

        if not targets:
            restored = self._deactivate(state)
            state.cursor = None
            state.last_shown = None
            self.context.commit_state(state)
            return TickResult(state.phase, restored=restored, interval=interval)

        if not should_run(now, config.schedule):
            restored = self._deactivate(state)
            self.context.commit_state(state)
            return TickResult(state.phase, restored=restored, interval=interval)

        if not state.active:
            logger.info("Rotation window open, starting rotation")
        state.active = True

        if config.random:
            applied = self._show_random(state, targets)
        else:
            applied = self._show_sequential(state, targets)

        self.context.commit_state(state)
        return TickResult(state.phase, applied=applied, interval=interval)

    def _show_random(self, state: RotationState, targets: Sequence[Path]) -> Path:
        choice = pick_random(targets, self.rng)
        logger.info(f"Showing random target: {choice}")
        self.wallpaper.set_background(choice)
        state.last_shown = choice
        state.cursor = None
        state.last_mode_was_random = True
        return choice

    def _show_sequential(self, state: RotationState, targets: Sequence[Path]) -> Path:
        if state.last_mode_was_random and state.cursor is None:
            state.cursor = self._resume_index(targets, state.last_shown)
        state.last_mode_was_random = False

        if state.cursor is None:
            state.cursor = 0

        index, path = sequential_pick(targets, state.cursor)
        logger.info(f"Showing target {index + 1}/{len(targets)}: {path}")
        self.wallpaper.set_background(path)
        state.last_shown = path
        state.cursor = advance(index, len(targets))
        return path

    def _resume_index(self, targets: Sequence[Path], last_shown: Optional[Path]) -> int:
        """Where sequential order starts after random mode."""
        if last_shown is not None:
            index = index_after(targets, last_shown)
        else:
            index = index_after(targets, self.wallpaper.get_current_background())

        logger.debug(f"Switching to sequential order at index {index or 0}")
        return index or 0

    def _deactivate(self, state: RotationState) -> bool:
        """Restore the original background if rotation was active."""
        if not state.active:
            return False

        state.active = False
        original = self.context.original_background
        if original is None:
            logger.info("Rotation stopped; original wallpaper unknown, leaving current one")
            return False

        logger.info(f"Rotation stopped, restoring {original}")
        self.wallpaper.restore_background(original)
        return True

    def restore_original(self) -> bool:
        """Put the original background back. Safe to call repeatedly."""
        original = self.context.original_background
        if original is None:
            return False
        return self.wallpaper.restore_background(original)
