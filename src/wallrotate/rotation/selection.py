"""
Target selection for random and sequential rotation.
"""

import random
from pathlib import Path
from typing import Optional, Sequence


def pick_random(targets: Sequence[Path], rng: Optional[random.Random] = None) -> Path:
    """
    Draw one target uniformly at random.

    Raises:
        ValueError: If targets is empty
    """
    if not targets:
        raise ValueError("No targets to select from")
    return (rng or random).choice(targets)


def index_after(targets: Sequence[Path], path: Optional[Path]) -> Optional[int]:
    """
    Index of the target following `path`, wrapping at the end.

    Returns:
        Next index, or None if path is None or not a target
    """
    if path is None or not targets:
        return None
    try:
        position = list(targets).index(path)
    except ValueError:
        return None
    return (position + 1) % len(targets)


def sequential_pick(targets: Sequence[Path], cursor: int) -> tuple[int, Path]:
    """
    Pick the target at `cursor`, reduced modulo the current list length.

    The list may have shrunk since the cursor was stored, so the cursor is
    never used unreduced.

    Returns:
        (index actually used, target path)
    """
    index = cursor % len(targets)
    return index, targets[index]


def advance(cursor: int, length: int) -> int:
    """Cursor position after showing `cursor`."""
    return (cursor + 1) % length
