"""
Pid file handling and reload signalling between CLI and daemon.

A running `wallrotate run` records its pid next to the config file and
reloads configuration on SIGHUP. Editing commands use `notify_daemon` after
saving so the daemon picks the change up without waiting for its next tick.
"""

import logging
import os
import signal
from pathlib import Path
from typing import Optional

from .exceptions import DaemonError

logger = logging.getLogger(__name__)

RELOAD_SIGNAL = getattr(signal, "SIGHUP", None)


def write_pid_file(pid_file: Path) -> None:
    try:
        pid_file.parent.mkdir(parents=True, exist_ok=True)
        pid_file.write_text(f"{os.getpid()}\n", encoding="utf-8")
    except OSError as e:
        raise DaemonError(f"Failed to write pid file {pid_file}: {e}") from e


def remove_pid_file(pid_file: Path) -> None:
    """Remove the pid file if it still names this process."""
    if read_pid_file(pid_file) != os.getpid():
        return
    try:
        pid_file.unlink()
    except OSError as e:
        logger.warning(f"Failed to remove pid file {pid_file}: {e}")


def read_pid_file(pid_file: Path) -> Optional[int]:
    """
    Returns:
        Recorded pid, or None if there is no usable pid file
    """
    try:
        content = pid_file.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning(f"Failed to read pid file {pid_file}: {e}")
        return None

    try:
        return int(content)
    except ValueError:
        logger.warning(f"Ignoring malformed pid file {pid_file}")
        return None


def notify_daemon(pid_file: Path) -> bool:
    """
    Ask a running daemon to reload its configuration.

    Returns:
        True if a daemon was signalled, False if none is running

    Raises:
        DaemonError: If the daemon exists but cannot be signalled
    """
    pid = read_pid_file(pid_file)
    if pid is None:
        logger.debug("No running daemon to notify")
        return False

    if RELOAD_SIGNAL is None:
        logger.info("Live reload is not supported on this platform; restart the daemon to apply changes")
        return False

    try:
        os.kill(pid, RELOAD_SIGNAL)
    except ProcessLookupError:
        logger.warning(f"Stale pid file {pid_file} (process {pid} is gone)")
        return False
    except PermissionError as e:
        raise DaemonError(f"Not allowed to signal daemon {pid}: {e}") from e

    logger.info(f"Asked daemon {pid} to reload")
    return True
