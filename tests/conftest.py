"""Test configuration and fixtures."""

import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator, List, Optional

import pytest

from wallrotate.config import ConfigStore, RotationConfig, WallpaperConfig
from wallrotate.rotation import RotationContext, RotationController
from wallrotate.wallpaper import WallpaperSetter, WallpaperTarget

# 2024-01-01 was a Monday
MONDAY_NOON = datetime(2024, 1, 1, 12, 0)


class RecordingSetter(WallpaperSetter):
    """Backend that remembers what it was asked to show."""

    def __init__(self, current: Optional[Path] = None, fail: bool = False) -> None:
        super().__init__()
        self.current = current
        self.fail = fail
        self.applied: List[Path] = []

    def set(self, image_path: Path) -> bool:
        if self.fail:
            return False
        self.applied.append(image_path)
        self.current = image_path
        return True

    def get(self) -> Optional[Path]:
        return self.current


@pytest.fixture
def temp_config_dir() -> Generator[Path, None, None]:
    """Create a temporary config directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def store(temp_config_dir: Path) -> ConfigStore:
    return ConfigStore(temp_config_dir / "config.toml")


@pytest.fixture
def image_dir(temp_config_dir: Path) -> Path:
    """
    Directory tree with images and non-images:

        images/a.jpg
        images/b.png
        images/c.JPEG
        images/notes.txt
        images/nested/d.webp
        images/nested/e.tiff
    """
    root = temp_config_dir / "images"
    nested = root / "nested"
    nested.mkdir(parents=True)
    for name in ("a.jpg", "b.png", "c.JPEG", "notes.txt"):
        (root / name).write_bytes(b"data")
    for name in ("d.webp", "e.tiff"):
        (nested / name).write_bytes(b"data")
    return root


@pytest.fixture
def targets(image_dir: Path) -> List[Path]:
    """Three existing image files, in order."""
    return [image_dir / "a.jpg", image_dir / "b.png", image_dir / "c.JPEG"]


@pytest.fixture
def original_wallpaper(temp_config_dir: Path) -> Path:
    path = temp_config_dir / "original.png"
    path.write_bytes(b"original")
    return path


@pytest.fixture
def setter(original_wallpaper: Path) -> RecordingSetter:
    return RecordingSetter(current=original_wallpaper)


@pytest.fixture
def wallpaper(setter: RecordingSetter) -> WallpaperTarget:
    return WallpaperTarget(WallpaperConfig(command="custom:true"), setter=setter)


@pytest.fixture
def make_controller(wallpaper: WallpaperTarget, original_wallpaper: Path):
    """Factory building a controller around a fresh context."""

    def factory(config: RotationConfig, original: Optional[Path] = original_wallpaper, rng=None):
        context = RotationContext(config, original_background=original)
        controller = RotationController(context, wallpaper, rng=rng, clock=lambda: MONDAY_NOON)
        return controller, context

    return factory
