"""
Configuration validation for wallrotate.
"""

from pathlib import Path
from typing import Any, Dict

from ..exceptions import ConfigValidationError


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Section -> key -> expected type
VALID_STRUCTURE: Dict[str, Dict[str, type]] = {
    'rotation': {
        'interval': int,
        'random': bool,
        'targets': list,
    },
    'schedule': {
        'start_time': str,  # "HH:MM" format
        'end_time': str,    # "HH:MM" format
        'weekly': list,
        'monthly': list,
    },
    'wallpaper': {
        'command': str,
    },
    'window': {
        'width': int,
        'height': int,
        'minimized': bool,
    },
    'logging': {
        'level': str,
    },
}

# List-valued keys -> expected element type
LIST_ELEMENT_TYPES: Dict[str, type] = {
    'rotation.targets': str,
    'schedule.weekly': str,
    'schedule.monthly': int,
}


def _is_instance(value: Any, expected_type: type) -> bool:
    # bool is a subclass of int; TOML keeps them apart and so do we
    if expected_type is int and isinstance(value, bool):
        return False
    return isinstance(value, expected_type)


def validate_toml_structure(config_dict: Dict[str, Any], config_file: Path) -> None:
    """
    Validate TOML structure before creating dataclasses.

    Checks for unknown sections and keys, value types and list element types,
    providing helpful error messages.

    Args:
        config_dict: Loaded TOML configuration dictionary
        config_file: Path to config file for error messages

    Raises:
        ConfigValidationError: If structure validation fails
    """
    for section in config_dict:
        if section not in VALID_STRUCTURE:
            raise ConfigValidationError(
                f"Unknown config section '{section}' in {config_file}. "
                f"Valid sections: {list(VALID_STRUCTURE.keys())}"
            )

    for section_name, section_config in config_dict.items():
        if not isinstance(section_config, dict):
            raise ConfigValidationError(
                f"Section '{section_name}' must be a table in {config_file}"
            )

        valid_keys = VALID_STRUCTURE[section_name]

        for key, value in section_config.items():
            if key not in valid_keys:
                raise ConfigValidationError(
                    f"Unknown key '{key}' in section '{section_name}' in {config_file}. "
                    f"Valid keys: {list(valid_keys.keys())}"
                )

            expected_type = valid_keys[key]
            if not _is_instance(value, expected_type):
                raise ConfigValidationError(
                    f"Key '{section_name}.{key}' must be of type {expected_type.__name__} "
                    f"in {config_file}, got {type(value).__name__}"
                )

            element_type = LIST_ELEMENT_TYPES.get(f"{section_name}.{key}")
            if element_type is not None:
                for item in value:
                    if not _is_instance(item, element_type):
                        raise ConfigValidationError(
                            f"Entries of '{section_name}.{key}' must be of type "
                            f"{element_type.__name__} in {config_file}, got {item!r}"
                        )

    interval = config_dict.get('rotation', {}).get('interval')
    if interval is not None and interval < 0:
        raise ConfigValidationError(
            f"Rotation interval ({interval}s) must not be negative in {config_file}. "
            "Use 0 for the default of 60 seconds."
        )

    level = config_dict.get('logging', {}).get('level')
    if level is not None and level.upper() not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"Invalid log level: {level}\n"
            f"Must be one of: {VALID_LOG_LEVELS}"
        )
