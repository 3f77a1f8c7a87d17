"""Tests for the shared rotation context."""

import threading
import time
from pathlib import Path

from wallrotate.config import RotationConfig, WindowState
from wallrotate.rotation import RotationContext, RotationState


class TestWakeSignal:
    """Test the coalescing wake signal."""

    def test_wait_times_out(self):
        context = RotationContext(RotationConfig())

        started = time.monotonic()
        assert context.wait(0.05) is False
        assert time.monotonic() - started >= 0.04

    def test_notify_before_wait_wakes_immediately(self):
        context = RotationContext(RotationConfig())
        context.notify()

        started = time.monotonic()
        assert context.wait(5) is True
        assert time.monotonic() - started < 1

    def test_notifications_coalesce(self):
        context = RotationContext(RotationConfig())
        for _ in range(10):
            context.notify()

        assert context.wait(5) is True
        assert context.wait(0.01) is False

    def test_notify_from_other_thread(self):
        context = RotationContext(RotationConfig())
        timer = threading.Timer(0.05, context.notify)
        timer.start()
        try:
            assert context.wait(5) is True
        finally:
            timer.cancel()


class TestConfiguration:
    """Test configuration snapshots and replacement."""

    def test_snapshot_is_a_copy(self):
        context = RotationContext(RotationConfig(targets=[Path("/a.jpg")]))

        snapshot = context.config_snapshot()
        snapshot.targets.append(Path("/b.jpg"))
        snapshot.schedule.start_time = "09:00"

        fresh = context.config_snapshot()
        assert fresh.targets == [Path("/a.jpg")]
        assert fresh.schedule.start_time is None

    def test_constructor_copies_config(self):
        config = RotationConfig(interval=10)
        context = RotationContext(config)
        config.interval = 99
        assert context.config_snapshot().interval == 10

    def test_initial_mode_flag_follows_config(self):
        assert RotationContext(RotationConfig(random=True)).state_snapshot().last_mode_was_random
        assert not RotationContext(RotationConfig(random=False)).state_snapshot().last_mode_was_random

    def test_switch_to_random_is_recorded(self):
        context = RotationContext(RotationConfig(random=False))

        context.replace_config(RotationConfig(random=True))

        assert context.config_snapshot().random
        assert context.state_snapshot().last_mode_was_random

    def test_switch_to_sequential_left_for_controller(self):
        context = RotationContext(RotationConfig(random=True))

        context.replace_config(RotationConfig(random=False))

        assert not context.config_snapshot().random
        assert context.state_snapshot().last_mode_was_random

    def test_set_window_keeps_other_fields(self):
        context = RotationContext(RotationConfig(interval=5, targets=[Path("/a.jpg")]))
        window = WindowState(width=800, height=600, minimized=True)

        context.set_window(window)
        window.width = 1

        snapshot = context.config_snapshot()
        assert snapshot.window == WindowState(width=800, height=600, minimized=True)
        assert snapshot.interval == 5
        assert snapshot.targets == [Path("/a.jpg")]

    def test_set_targets(self):
        context = RotationContext(RotationConfig(interval=5))
        targets = [Path("/a.jpg"), Path("/b.jpg")]

        context.set_targets(targets)
        targets.clear()

        snapshot = context.config_snapshot()
        assert snapshot.targets == [Path("/a.jpg"), Path("/b.jpg")]
        assert snapshot.interval == 5


class TestState:
    """Test state snapshots and commits."""

    def test_commit_and_snapshot(self):
        context = RotationContext(RotationConfig())
        state = RotationState(active=True, cursor=2, last_shown=Path("/a.jpg"), last_mode_was_random=False)

        context.commit_state(state)
        state.cursor = 99

        assert context.state_snapshot() == RotationState(
            active=True, cursor=2, last_shown=Path("/a.jpg"), last_mode_was_random=False
        )

    def test_to_dict(self):
        state = RotationState(active=True, cursor=0, last_shown=Path("/a.jpg"), last_mode_was_random=False)
        assert state.to_dict() == {
            "phase": "active-sequential",
            "active": True,
            "cursor": 0,
            "last_shown": "/a.jpg",
            "random": False,
        }

    def test_original_background(self):
        context = RotationContext(RotationConfig(), original_background=Path("/orig.png"))
        assert context.original_background == Path("/orig.png")
