"""
Command-line interface for wallrotate.

Usage:
    wallrotate [options] <command> [args]

Commands:
    run        Rotate wallpapers until stopped (default)
    add        Add images or directories to the rotation
    remove     Remove images from the rotation
    list       List rotation targets in order
    set        Change interval, mode or schedule
    status     Show configuration and status
    init       Create a default config file
    validate   Validate configuration
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigStore
from .exceptions import (
    WallRotateError,
    ConfigError,
    ConfigValidationError,
    CommandError,
    CommandNotFoundError,
    DaemonError,
    TargetError,
)
from .commands import (
    run_daemon,
    add_targets,
    remove_targets,
    list_targets,
    set_options,
    show_status,
    init_config,
    validate_config,
)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _configured_log_level(store: ConfigStore) -> str:
    try:
        return store.read().logging.level
    except ConfigError:
        return "INFO"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wallrotate",
        description="Rotate desktop wallpapers on a schedule"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to config file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("run", help="Rotate wallpapers until stopped (default)")

    add_parser = subparsers.add_parser("add", help="Add images or directories")
    add_parser.add_argument("paths", nargs="+", help="Image files or directories (searched recursively)")

    remove_parser = subparsers.add_parser("remove", help="Remove images")
    remove_parser.add_argument("paths", nargs="+", help="Target paths to remove")

    subparsers.add_parser("list", help="List rotation targets")

    set_parser = subparsers.add_parser("set", help="Change rotation settings")
    set_parser.add_argument("--interval", type=int, help="Seconds between changes (0 = default of 60)")
    mode = set_parser.add_mutually_exclusive_group()
    mode.add_argument("--random", dest="random", action="store_true", default=None,
                      help="Pick targets at random")
    mode.add_argument("--sequential", dest="random", action="store_false", default=None,
                      help="Show targets in order")
    set_parser.add_argument("--start", dest="start_time", metavar="HH:MM",
                            help="Daily start time ('none' to clear)")
    set_parser.add_argument("--end", dest="end_time", metavar="HH:MM",
                            help="Daily end time ('none' to clear)")
    set_parser.add_argument("--weekly", nargs="+", metavar="DAY",
                            help="Weekdays to rotate on, e.g. mon tue ('none' to clear)")
    set_parser.add_argument("--monthly", nargs="+", metavar="DATE",
                            help="Days of the month to rotate on ('none' to clear)")
    set_parser.add_argument("--backend", dest="wallpaper_command", metavar="COMMAND",
                            help="Wallpaper backend: auto, gnome, feh, nitrogen, swww or custom:<template>")

    status_parser = subparsers.add_parser("status", help="Show status")
    status_parser.add_argument("--json", action="store_true", help="Output JSON")

    subparsers.add_parser("init", help="Create default config")
    subparsers.add_parser("validate", help="Validate configuration")

    return parser


def main() -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    logger = logging.getLogger(__name__)

    try:
        store = ConfigStore(args.config)

        level = "DEBUG" if args.verbose else _configured_log_level(store)
        setup_logging(level)

        command = args.command or "run"

        if command == "run":
            run_daemon(store)
        elif command == "add":
            add_targets(store, args.paths)
        elif command == "remove":
            remove_targets(store, args.paths)
        elif command == "list":
            list_targets(store)
        elif command == "set":
            set_options(
                store,
                interval=args.interval,
                random=args.random,
                start_time=args.start_time,
                end_time=args.end_time,
                weekly=args.weekly,
                monthly=args.monthly,
                command=args.wallpaper_command,
            )
        elif command == "status":
            show_status(store, as_json=args.json)
        elif command == "init":
            init_config(store)
        elif command == "validate":
            validate_config(store)
        else:
            parser.print_help()
            return 1

        return 0

    # Handle specific error types with appropriate exit codes and messages
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        return 130

    except ConfigValidationError as e:
        print(f"\n❌ Configuration Validation Error: {e}", file=sys.stderr)
        print("\nRun 'wallrotate validate' for detailed diagnostics.", file=sys.stderr)
        return 78  # EX_CONFIG

    except ConfigError as e:
        print(f"\n❌ Configuration Error: {e}", file=sys.stderr)
        return 78  # EX_CONFIG

    except CommandNotFoundError as e:
        print(f"\n❌ No Wallpaper Backend\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 69  # EX_UNAVAILABLE

    except CommandError as e:
        print(f"\n❌ Wallpaper Backend Error: {e}", file=sys.stderr)
        return 78  # EX_CONFIG

    except TargetError as e:
        print(f"\n❌ Target Error: {e}", file=sys.stderr)
        return 1

    except DaemonError as e:
        print(f"\n❌ Daemon Error: {e}", file=sys.stderr)
        return 69  # EX_UNAVAILABLE

    except WallRotateError as e:
        # Catch-all for any other wallrotate errors
        print(f"\n❌ Error: {e}", file=sys.stderr)
        logger.error(str(e))
        if args.verbose:
            raise
        return 1

    except Exception as e:
        # Unexpected errors - show full traceback in verbose mode
        print(f"\n❌ Unexpected Error: {type(e).__name__}: {e}", file=sys.stderr)
        logger.error(f"Unexpected error: {type(e).__name__}: {e}")
        if args.verbose:
            raise
        print("\nRun with -v/--verbose for full traceback.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
