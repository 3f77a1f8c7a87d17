"""
Mutable rotation state.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class RotationPhase(Enum):
    """Where the controller's state machine currently is."""
    INACTIVE = "inactive"
    ACTIVE_RANDOM = "active-random"
    ACTIVE_SEQUENTIAL = "active-sequential"


@dataclass
class RotationState:
    """
    Bookkeeping owned by the rotation controller.

    `cursor` is the index of the next sequential target and is None until
    sequential mode has shown something. `last_shown` is tracked in both
    modes so a switch from random to sequential can continue from it.
    """
    active: bool = False
    cursor: Optional[int] = None
    last_shown: Optional[Path] = None
    last_mode_was_random: bool = True

    @property
    def phase(self) -> RotationPhase:
        if not self.active:
            return RotationPhase.INACTIVE
        if self.last_mode_was_random:
            return RotationPhase.ACTIVE_RANDOM
        return RotationPhase.ACTIVE_SEQUENTIAL

    def copy(self) -> 'RotationState':
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "active": self.active,
            "cursor": self.cursor,
            "last_shown": str(self.last_shown) if self.last_shown else None,
            "random": self.last_mode_was_random,
        }
