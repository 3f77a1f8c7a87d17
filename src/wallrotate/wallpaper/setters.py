"""
Wallpaper backend implementations for various desktop environments.

Each backend knows how to set the background for its environment and, where
the environment records it, how to read the background currently in effect.
"""

import logging
import os
import re
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Type
from urllib.parse import unquote, urlparse

from ..exceptions import CommandError, CommandNotFoundError


class WallpaperSetter(ABC):
    """Abstract base class for wallpaper backends."""

    # Executable the backend drives, used for availability checks
    binary: str = ""

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def set(self, image_path: Path) -> bool:
        """
        Set the desktop background.

        Args:
            image_path: Path to wallpaper image

        Returns:
            True if successful
        """
        pass

    def get(self) -> Optional[Path]:
        """
        Read the background currently in effect.

        Returns:
            Image path, or None if the backend cannot tell
        """
        self.logger.debug(f"{self.__class__.__name__} cannot read the current wallpaper")
        return None

    def restore(self, image_path: Path) -> bool:
        """
        Put back the background that get() reported.

        Defaults to set(); backends whose state is more than one image
        override it.
        """
        return self.set(image_path)

    @classmethod
    def is_available(cls) -> bool:
        """Check whether the backend's executable is on PATH."""
        return bool(cls.binary) and shutil.which(cls.binary) is not None

    def _run_command(self, cmd: list[str], timeout: int = 30) -> bool:
        """
        Run a command and return success status.

        Args:
            cmd: Command to run as list of strings
            timeout: Timeout in seconds

        Returns:
            True if command succeeded
        """
        cmd_str = ' '.join(cmd)  # For logging purposes

        try:
            self.logger.debug(f"Running command: {cmd_str}")
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)

            if result.returncode != 0:
                error_msg = f"Command failed with exit code {result.returncode}: {cmd_str}"
                if result.stderr:
                    error_msg += f"\nStderr: {result.stderr.strip()}"
                elif result.stdout:
                    error_msg += f"\nStdout: {result.stdout.strip()}"

                self.logger.error(error_msg)
                return False

            self.logger.debug(f"Command succeeded: {cmd_str}")
            return True

        except subprocess.TimeoutExpired:
            self.logger.error(f"Command timed out after {timeout}s: {cmd_str}")
            return False
        except FileNotFoundError:
            self.logger.error(f"Command not found: {cmd[0]} - ensure {cmd[0]} is installed and in PATH")
            return False
        except PermissionError as e:
            self.logger.error(f"Permission denied executing command: {cmd_str}: {e}")
            return False
        except OSError as e:
            self.logger.error(f"OS error executing command {cmd_str}: {e}")
            return False

    def _capture_output(self, cmd: list[str], timeout: int = 10) -> Optional[str]:
        """
        Run a command and return its stdout, or None on any failure.
        """
        cmd_str = ' '.join(cmd)

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except subprocess.TimeoutExpired:
            self.logger.warning(f"Command timed out after {timeout}s: {cmd_str}")
            return None
        except OSError as e:
            self.logger.warning(f"Failed to run {cmd_str}: {e}")
            return None

        if result.returncode != 0:
            self.logger.warning(
                f"Command failed with exit code {result.returncode}: {cmd_str}: {result.stderr.strip()}"
            )
            return None
        return result.stdout


class GnomeSetter(WallpaperSetter):
    """Wallpaper backend using gsettings (GNOME and derivatives)."""

    binary = "gsettings"
    schema = "org.gnome.desktop.background"
    light_key = "picture-uri"
    # Newer GNOME versions keep a separate key for the dark style
    dark_key = "picture-uri-dark"

    def __init__(self) -> None:
        super().__init__()
        # Raw URIs read by get(), keyed by gsettings key
        self._captured: Dict[str, str] = {}

    def set(self, image_path: Path) -> bool:
        uri = image_path.resolve().as_uri()
        ok = self._run_command(["gsettings", "set", self.schema, self.light_key, uri])
        self._run_command(["gsettings", "set", self.schema, self.dark_key, uri])

        if ok:
            self.logger.info(f"Set wallpaper via gsettings: {image_path}")
        return ok

    def get(self) -> Optional[Path]:
        """Read the light key; the dark key is remembered for restore()."""
        output = self._capture_output(["gsettings", "get", self.schema, self.light_key])
        if output is None:
            return None

        self._captured = {self.light_key: self._strip_quotes(output)}
        dark = self._capture_output(["gsettings", "get", self.schema, self.dark_key])
        if dark is not None and self._strip_quotes(dark):
            self._captured[self.dark_key] = self._strip_quotes(dark)

        return self.parse_picture_uri(output)

    def restore(self, image_path: Path) -> bool:
        """Write back both keys exactly as get() found them."""
        light = self._captured.get(self.light_key)
        if light is None or self.parse_picture_uri(light) != image_path:
            return self.set(image_path)

        ok = True
        for key, uri in self._captured.items():
            ok = self._run_command(["gsettings", "set", self.schema, key, uri]) and ok

        if ok:
            self.logger.info(f"Restored wallpaper via gsettings: {image_path}")
        return ok

    @staticmethod
    def _strip_quotes(value: str) -> str:
        return value.strip().strip("'\"")

    @staticmethod
    def parse_picture_uri(value: str) -> Optional[Path]:
        """
        Convert gsettings output like "'file:///home/me/a%20b.jpg'" to a path.
        """
        value = value.strip().strip("'\"")
        if not value:
            return None
        parsed = urlparse(value)
        if parsed.scheme not in ("", "file"):
            return None
        return Path(unquote(parsed.path))


class FehSetter(WallpaperSetter):
    """Wallpaper backend using feh (X11)."""

    binary = "feh"

    def __init__(self, fehbg_path: Optional[Path] = None) -> None:
        super().__init__()
        self.fehbg_path = fehbg_path or Path("~/.fehbg").expanduser()

    def set(self, image_path: Path) -> bool:
        if self._run_command(["feh", "--bg-fill", str(image_path)]):
            self.logger.info(f"Set wallpaper via feh: {image_path}")
            return True
        self.logger.error("Failed to set wallpaper via feh")
        return False

    def get(self) -> Optional[Path]:
        """Read the last feh invocation recorded in ~/.fehbg."""
        if not self.fehbg_path.exists():
            return None

        try:
            lines = self.fehbg_path.read_text(encoding="utf-8", errors="ignore").splitlines()
        except OSError as e:
            self.logger.warning(f"Failed to read {self.fehbg_path}: {e}")
            return None

        current: Optional[Path] = None
        for line in lines:
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                parts = shlex.split(stripped)
            except ValueError:
                continue
            if parts and Path(parts[0]).name == "feh":
                images = [arg for arg in parts[1:] if not arg.startswith("-")]
                if images:
                    current = Path(images[0]).expanduser()
        return current


class NitrogenSetter(WallpaperSetter):
    """Wallpaper backend using nitrogen (X11)."""

    binary = "nitrogen"

    def __init__(self, saved_config: Optional[Path] = None) -> None:
        super().__init__()
        self.saved_config = saved_config or Path("~/.config/nitrogen/bg-saved.cfg").expanduser()

    def set(self, image_path: Path) -> bool:
        # --save keeps bg-saved.cfg current so get() can read it back
        if self._run_command(["nitrogen", "--set-zoom-fill", "--save", str(image_path)]):
            self.logger.info(f"Set wallpaper via nitrogen: {image_path}")
            return True
        self.logger.error("Failed to set wallpaper via nitrogen")
        return False

    def get(self) -> Optional[Path]:
        if not self.saved_config.exists():
            return None

        try:
            lines = self.saved_config.read_text(encoding="utf-8", errors="ignore").splitlines()
        except OSError as e:
            self.logger.warning(f"Failed to read {self.saved_config}: {e}")
            return None

        for line in lines:
            key, sep, value = line.partition("=")
            if sep and key.strip() == "file" and value.strip():
                return Path(value.strip())
        return None


class SwwwSetter(WallpaperSetter):
    """Wallpaper backend using swww (Wayland)."""

    binary = "swww"
    _IMAGE_PATTERN = re.compile(r"image:\s*(.+)$")

    def set(self, image_path: Path) -> bool:
        if self._run_command(["swww", "img", str(image_path), "--resize", "crop"]):
            self.logger.info(f"Set wallpaper via swww: {image_path}")
            return True
        self.logger.error("Failed to set wallpaper via swww")
        return False

    def get(self) -> Optional[Path]:
        output = self._capture_output(["swww", "query"])
        if output is None:
            return None
        return self.parse_query(output)

    @classmethod
    def parse_query(cls, output: str) -> Optional[Path]:
        """Take the image shown on the first output listed by `swww query`."""
        for line in output.splitlines():
            match = cls._IMAGE_PATTERN.search(line.strip())
            if match:
                return Path(match.group(1).strip())
        return None


class CustomSetter(WallpaperSetter):
    """Wallpaper backend using a custom command template."""

    def __init__(self, command_template: str) -> None:
        super().__init__()
        self.template = command_template

    def set(self, image_path: Path) -> bool:
        """
        Set wallpaper using a custom command template.

        The template is split shell-style and `{path}` is substituted in
        each argument, so paths containing spaces stay a single argument.
        """
        try:
            cmd = [part.format(path=str(image_path)) for part in shlex.split(self.template)]
        except KeyError as e:
            self.logger.error(f"Invalid placeholder in custom command template: {e}")
            self.logger.error("Available placeholders: {path}")
            return False
        except (ValueError, IndexError) as e:
            self.logger.error(f"Error formatting custom command template: {e}")
            return False

        if not cmd:
            self.logger.error("Custom command template is empty")
            return False

        if self._run_command(cmd):
            self.logger.info(f"Set wallpaper via custom command: {' '.join(cmd)}")
            return True
        self.logger.error(f"Failed to set wallpaper via custom command: {' '.join(cmd)}")
        return False


# Registry of available backends
SETTERS: Dict[str, Type[WallpaperSetter]] = {
    "gnome": GnomeSetter,
    "feh": FehSetter,
    "nitrogen": NitrogenSetter,
    "swww": SwwwSetter,
}


def detect_setter() -> WallpaperSetter:
    """
    Pick a backend for the running desktop.

    Raises:
        CommandNotFoundError: If no supported backend is installed
    """
    desktop = os.environ.get("XDG_CURRENT_DESKTOP", "").lower()
    wayland = bool(os.environ.get("WAYLAND_DISPLAY"))

    candidates = []
    if any(name in desktop for name in ("gnome", "unity", "budgie", "pantheon")):
        candidates.append(GnomeSetter)
    if wayland:
        candidates.append(SwwwSetter)
    candidates.extend([FehSetter, NitrogenSetter, GnomeSetter, SwwwSetter])

    for setter_cls in candidates:
        if setter_cls.is_available():
            logging.getLogger(__name__).info(f"Using wallpaper backend: {setter_cls.binary}")
            return setter_cls()

    raise CommandNotFoundError(
        "No supported wallpaper backend found. Install one of: "
        f"{', '.join(cls.binary for cls in SETTERS.values())}, "
        "or set [wallpaper] command = \"custom:<command> {path}\""
    )


def get_setter(command: str) -> WallpaperSetter:
    """
    Get appropriate wallpaper backend for the given command.

    Args:
        command: "auto", a backend name ("gnome", "feh", ...) or "custom:template"

    Returns:
        WallpaperSetter instance

    Raises:
        CommandError: If the command names no known backend
        CommandNotFoundError: If "auto" finds nothing installed
    """
    if command.startswith("custom:"):
        return CustomSetter(command[7:])

    if command == "auto":
        return detect_setter()

    if command in SETTERS:
        return SETTERS[command]()

    raise CommandError(f"Unknown wallpaper command: {command}. Available: {['auto', *SETTERS.keys()]}")
