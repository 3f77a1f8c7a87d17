"""Tests for pid file handling and the run loop's signal handling."""

import os
import threading
import time
from unittest.mock import patch

import pytest

from wallrotate.commands.run import DaemonSignals, run_daemon
from wallrotate.config import RotationConfig
from wallrotate.daemon import (
    RELOAD_SIGNAL,
    notify_daemon,
    read_pid_file,
    remove_pid_file,
    write_pid_file,
)
from wallrotate.exceptions import DaemonError


class TestPidFile:
    """Test pid file helpers."""

    def test_write_and_read(self, temp_config_dir):
        pid_file = temp_config_dir / "sub" / "daemon.pid"

        write_pid_file(pid_file)

        assert read_pid_file(pid_file) == os.getpid()

    def test_read_missing(self, temp_config_dir):
        assert read_pid_file(temp_config_dir / "daemon.pid") is None

    def test_read_malformed(self, temp_config_dir):
        pid_file = temp_config_dir / "daemon.pid"
        pid_file.write_text("not a pid\n")

        assert read_pid_file(pid_file) is None

    def test_remove_own(self, temp_config_dir):
        pid_file = temp_config_dir / "daemon.pid"
        write_pid_file(pid_file)

        remove_pid_file(pid_file)

        assert not pid_file.exists()

    def test_remove_keeps_foreign(self, temp_config_dir):
        pid_file = temp_config_dir / "daemon.pid"
        pid_file.write_text(f"{os.getpid() + 1}\n")

        remove_pid_file(pid_file)

        assert pid_file.exists()

    def test_write_failure(self, temp_config_dir):
        blocker = temp_config_dir / "blocker"
        blocker.write_text("")

        with pytest.raises(DaemonError):
            write_pid_file(blocker / "daemon.pid")


@pytest.mark.skipif(RELOAD_SIGNAL is None, reason="platform has no reload signal")
class TestNotifyDaemon:
    """Test signalling a running daemon."""

    def test_no_daemon(self, temp_config_dir):
        with patch('os.kill') as mock_kill:
            assert notify_daemon(temp_config_dir / "daemon.pid") is False
        mock_kill.assert_not_called()

    def test_signals_recorded_pid(self, temp_config_dir):
        pid_file = temp_config_dir / "daemon.pid"
        pid_file.write_text("4242\n")

        with patch('os.kill') as mock_kill:
            assert notify_daemon(pid_file) is True
        mock_kill.assert_called_once_with(4242, RELOAD_SIGNAL)

    def test_stale_pid(self, temp_config_dir):
        pid_file = temp_config_dir / "daemon.pid"
        pid_file.write_text("4242\n")

        with patch('os.kill', side_effect=ProcessLookupError()):
            assert notify_daemon(pid_file) is False

    def test_not_permitted(self, temp_config_dir):
        pid_file = temp_config_dir / "daemon.pid"
        pid_file.write_text("1\n")

        with patch('os.kill', side_effect=PermissionError()):
            with pytest.raises(DaemonError):
                notify_daemon(pid_file)


class TestRunDaemon:
    """Test the daemon's main loop with injected signals."""

    def test_runs_until_stopped(self, store, targets, setter, original_wallpaper, wallpaper):
        store.save(RotationConfig(interval=3600, random=False, targets=targets))
        signals = DaemonSignals()
        seen_pid = []

        def drive():
            while not store.pid_file.exists():
                time.sleep(0.01)
            seen_pid.append(read_pid_file(store.pid_file))

            signals.request_stop()

        driver = threading.Thread(target=drive)

        with patch('wallrotate.app.WallpaperTarget', return_value=wallpaper):
            driver.start()
            run_daemon(store, signals)
        driver.join(timeout=5)

        assert seen_pid == [os.getpid()]
        assert not store.pid_file.exists()
        assert setter.applied[-1] == original_wallpaper

    def test_signal_requests(self):
        signals = DaemonSignals()

        signals.request_reload()
        assert signals.reload_requested
        assert signals.wake.is_set()

        signals.wake.clear()
        signals.request_stop()
        assert signals.stop_requested
        assert signals.wake.is_set()
