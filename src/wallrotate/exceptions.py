"""
Common exception classes for wallrotate.

Provides domain-specific exceptions for consistent error handling across modules.
All exceptions inherit from WallRotateError for unified catching at CLI level.
"""


class WallRotateError(Exception):
    """
    Base exception for all wallrotate errors.

    All domain-specific exceptions inherit from this class, allowing
    callers to catch all wallrotate errors with a single except clause.
    """
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigError(WallRotateError):
    """
    Configuration-related errors.

    Raised when:
    - Config file cannot be read or written
    - Config file is not valid TOML
    - Config validation fails
    """
    pass


class ConfigValidationError(ConfigError):
    """
    Config value validation failed.

    Raised when a section or key is unknown, or a value is present
    but has the wrong type or an unusable format.
    """
    pass


# ============================================================================
# Command Errors
# ============================================================================

class CommandError(WallRotateError):
    """
    Command execution errors (wallpaper backends, external tools).

    Raised when a backend cannot be constructed or configured.
    Failures while actually setting a wallpaper are logged, not raised.
    """
    pass


class CommandNotFoundError(CommandError):
    """
    Required command/tool not found in PATH.

    Raised when no usable wallpaper backend is installed.
    """
    pass


# ============================================================================
# Target Errors
# ============================================================================

class TargetError(WallRotateError):
    """Target list editing errors."""
    pass


# ============================================================================
# Daemon Errors
# ============================================================================

class DaemonError(WallRotateError):
    """
    Errors reaching a running rotation daemon.

    Raised when the pid file is unreadable or the daemon cannot be signalled.
    """
    pass
