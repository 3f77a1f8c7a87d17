"""CLI commands module."""

from .run import run_daemon
from .targets import add_targets, remove_targets, list_targets
from .configure import set_options
from .status import show_status
from .init import init_config, validate_config

__all__ = [
    "run_daemon",
    "add_targets",
    "remove_targets",
    "list_targets",
    "set_options",
    "show_status",
    "init_config",
    "validate_config",
]
