"""Status command.

Human-readable or JSON status output (JSON suits waybar/polybar modules).
"""

import json
from typing import Any, Dict

from ..config import ConfigStore
from ..daemon import read_pid_file
from ..exceptions import CommandError
from ..schedule import describe_schedule
from ..wallpaper import WallpaperTarget


def _get_wallpaper_status(store: ConfigStore, command: str) -> Dict[str, Any]:
    """Get backend and current wallpaper."""
    target = WallpaperTarget(store.read().wallpaper)
    try:
        backend = type(target.setter).__name__
    except CommandError as e:
        return {"command": command, "backend": None, "error": str(e), "current": None}

    current = target.get_current_background()
    return {
        "command": command,
        "backend": backend,
        "current": str(current) if current else None,
    }


def get_status_json(store: ConfigStore) -> Dict[str, Any]:
    """Get full status as a JSON-serializable dict."""
    config = store.read()
    missing = [t for t in config.targets if not t.exists()]

    return {
        "config_file": str(store.config_file),
        "daemon_pid": read_pid_file(store.pid_file),
        "interval": config.effective_interval,
        "mode": "random" if config.random else "sequential",
        "targets": len(config.targets),
        "missing_targets": [str(t) for t in missing],
        "schedule": describe_schedule(config.schedule),
        "wallpaper": _get_wallpaper_status(store, config.wallpaper.command),
    }


def show_status(store: ConfigStore, as_json: bool = False) -> None:
    """Print status."""
    status = get_status_json(store)

    if as_json:
        print(json.dumps(status, indent=2))
        return

    schedule = status["schedule"]
    wallpaper = status["wallpaper"]

    print(f"Config:    {status['config_file']}")
    pid = status["daemon_pid"]
    print(f"Daemon:    {'running (pid ' + str(pid) + ')' if pid else 'not running'}")
    print(f"Mode:      {status['mode']} every {status['interval']}s")
    print(f"Targets:   {status['targets']} ({len(status['missing_targets'])} missing)")
    print(f"Schedule:  {'active now' if schedule['active_now'] else 'outside window'}")
    if schedule["start_time"] or schedule["end_time"]:
        print(f"  Hours:   {schedule['start_time'] or '--:--'} to {schedule['end_time'] or '--:--'}")
    if schedule["weekly"] is not None:
        print(f"  Days:    {', '.join(schedule['weekly']) or '(none)'}")
    if schedule["monthly"] is not None:
        print(f"  Dates:   {', '.join(str(d) for d in schedule['monthly']) or '(none)'}")
    if wallpaper.get("error"):
        print(f"Backend:   unavailable: {wallpaper['error']}")
    else:
        print(f"Backend:   {wallpaper['backend']}")
        print(f"Current:   {wallpaper['current'] or 'unknown'}")
