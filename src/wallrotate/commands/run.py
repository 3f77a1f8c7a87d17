"""Run command: the long-lived rotation daemon."""

import logging
import signal
import threading
from typing import Optional

from ..app import Application
from ..config import ConfigStore
from ..daemon import RELOAD_SIGNAL, remove_pid_file, write_pid_file


class DaemonSignals:
    """Translates process signals into requests for the main thread."""

    def __init__(self) -> None:
        self.wake = threading.Event()
        self.stop_requested = False
        self.reload_requested = False

    def request_stop(self, signum=None, frame=None) -> None:
        self.stop_requested = True
        self.wake.set()

    def request_reload(self, signum=None, frame=None) -> None:
        self.reload_requested = True
        self.wake.set()

    def install(self) -> None:
        signal.signal(signal.SIGTERM, self.request_stop)
        signal.signal(signal.SIGINT, self.request_stop)
        if RELOAD_SIGNAL is not None:
            signal.signal(RELOAD_SIGNAL, self.request_reload)


def run_daemon(store: ConfigStore, signals: Optional[DaemonSignals] = None) -> None:
    """
    Rotate wallpapers until SIGTERM/SIGINT.

    SIGHUP reloads the config file. The original wallpaper is restored on
    the way out.
    """
    logger = logging.getLogger(__name__)

    app = Application(store)

    if signals is None:
        signals = DaemonSignals()
        signals.install()

    write_pid_file(store.pid_file)
    app.start()
    logger.info(f"Daemon running (config: {store.config_file})")

    try:
        while True:
            signals.wake.wait()
            signals.wake.clear()

            if signals.stop_requested:
                break
            if signals.reload_requested:
                signals.reload_requested = False
                app.reload_config()
    finally:
        app.shutdown()
        remove_pid_file(store.pid_file)
