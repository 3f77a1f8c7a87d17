"""
Target list management.

Collects image files from user-supplied paths (expanding directories
recursively) and edits the persisted target list. Every edit is written
to the config file and pushed into the shared rotation context, which
wakes the controller so the change is applied immediately.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from .config import ConfigStore

if TYPE_CHECKING:
    from .rotation.context import RotationContext

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "bmp", "gif", "webp"})

PathLike = Union[str, Path]


def normalize_path(path: PathLike) -> Path:
    """Expand ~ and make absolute, without resolving symlinks."""
    return Path(path).expanduser().absolute()


def is_image_file(path: Path) -> bool:
    """Check the file extension against IMAGE_EXTENSIONS, case-insensitively."""
    return path.suffix[1:].lower() in IMAGE_EXTENSIONS


def collect_images(path: Path) -> List[Path]:
    """
    Collect image files under `path`.

    A file contributes itself if it is an image. A directory is walked
    recursively in sorted order. A directory that cannot be listed
    contributes nothing; the rest of the walk continues.

    Args:
        path: File or directory

    Returns:
        Image paths in walk order
    """
    if path.is_file():
        return [path] if is_image_file(path) else []

    if not path.is_dir():
        logger.debug(f"Skipping {path}: not a file or directory")
        return []

    try:
        entries = sorted(path.iterdir())
    except OSError as e:
        logger.debug(f"Cannot read directory {path}: {e}")
        return []

    result: List[Path] = []
    for entry in entries:
        if entry.is_dir():
            result.extend(collect_images(entry))
        elif is_image_file(entry):
            result.append(entry)
    return result


def merge_targets(existing: Iterable[Path], new: Iterable[Path]) -> List[Path]:
    """Append `new` to `existing`, keeping order and dropping duplicates."""
    merged: List[Path] = []
    seen = set()
    for path in list(existing) + list(new):
        if path not in seen:
            seen.add(path)
            merged.append(path)
    return merged


class TargetEditor:
    """
    Adds and removes rotation targets.

    The config file is the source of truth: each edit reads it strictly,
    modifies the target list and writes the whole record back. When a
    rotation context is attached, the new list is pushed into it and the
    controller is woken.
    """

    def __init__(self, store: ConfigStore, context: Optional['RotationContext'] = None) -> None:
        self.store = store
        self.context = context
        self.logger = logging.getLogger(__name__)

    def list_targets(self) -> List[Path]:
        return self.store.read().targets

    def add_targets(self, paths: Iterable[PathLike]) -> List[Path]:
        """
        Add image files found under `paths`.

        Args:
            paths: Files and/or directories

        Returns:
            Updated target list

        Raises:
            ConfigError: If the config file cannot be read or written
        """
        config = self.store.read()

        found: List[Path] = []
        for raw in paths:
            path = normalize_path(raw)
            if not path.exists():
                self.logger.warning(f"Path does not exist: {path}")
                continue
            images = collect_images(path)
            self.logger.debug(f"Found {len(images)} image(s) under {path}")
            found.extend(images)

        before = len(config.targets)
        config.targets = merge_targets(config.targets, found)
        self.logger.info(f"Added {len(config.targets) - before} target(s), {len(config.targets)} total")

        return self._commit(config)

    def remove_target(self, path: PathLike) -> List[Path]:
        """
        Remove one target.

        Returns:
            Updated target list

        Raises:
            ConfigError: If the config file cannot be read or written
        """
        config = self.store.read()
        target = normalize_path(path)

        remaining = [t for t in config.targets if t != target]
        if len(remaining) == len(config.targets):
            self.logger.warning(f"Not a rotation target: {target}")
        else:
            self.logger.info(f"Removed target {target}")
        config.targets = remaining

        return self._commit(config)

    def _commit(self, config) -> List[Path]:
        self.store.save(config)
        if self.context is not None:
            self.context.set_targets(config.targets)
            self.context.notify()
        return list(config.targets)
