"""Rotation engine: shared context, state and the tick loop."""

from .context import RotationContext
from .controller import RotationController, TickResult
from .state import RotationPhase, RotationState

__all__ = [
    "RotationContext",
    "RotationController",
    "RotationPhase",
    "RotationState",
    "TickResult",
]
