"""Target list commands."""

from pathlib import Path
from typing import List

from ..config import ConfigStore
from ..daemon import notify_daemon
from ..exceptions import TargetError
from ..targets import TargetEditor, collect_images, normalize_path


def add_targets(store: ConfigStore, paths: List[str]) -> None:
    """
    Add images (directories are expanded recursively).

    Raises:
        TargetError: If none of the paths contains an image
    """
    if not any(collect_images(normalize_path(p)) for p in paths):
        raise TargetError(f"No images found in: {', '.join(paths)}")

    editor = TargetEditor(store)
    before = set(editor.list_targets())
    targets = editor.add_targets(paths)

    added = [t for t in targets if t not in before]
    for target in added:
        print(f"  + {target}")
    print(f"Added {len(added)} image(s), {len(targets)} target(s) total")

    notify_daemon(store.pid_file)


def remove_targets(store: ConfigStore, paths: List[str]) -> None:
    """Remove one or more targets."""
    editor = TargetEditor(store)
    targets = editor.list_targets()
    for path in paths:
        targets = editor.remove_target(path)
    print(f"{len(targets)} target(s) remaining")

    notify_daemon(store.pid_file)


def list_targets(store: ConfigStore) -> None:
    """Print targets in rotation order."""
    targets = TargetEditor(store).list_targets()
    if not targets:
        print("No targets configured. Add some with 'wallrotate add <path>'")
        return

    for index, target in enumerate(targets, start=1):
        marker = "" if Path(target).exists() else "  (missing)"
        print(f"{index:4d}  {target}{marker}")
