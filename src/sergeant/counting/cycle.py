from enum import Enum
from typing import Optional


class CyclePhase(Enum):
    """Repetition cycle phases."""
    UP = "Up"       # Starting position (joint extended)
    DOWN = "Down"   # Committed to the bottom of the rep


class RepCycle:
    """
    Up/Down hysteresis cycle over a single joint angle.

    UP -> DOWN when the angle reaches down_angle or below, DOWN -> UP (one rep)
    when it reaches up_angle or above. Angles strictly between the two
    thresholds never change the phase.
    """

    def __init__(self, down_angle: float, up_angle: float):
        if down_angle >= up_angle:
            raise ValueError(f"down_angle ({down_angle}) must be below up_angle ({up_angle})")
        self.down_angle = down_angle
        self.up_angle = up_angle
        self.count = 0
        self.phase = CyclePhase.UP

    @property
    def is_down(self) -> bool:
        return self.phase is CyclePhase.DOWN

    def advance(self, angle: float) -> Optional[CyclePhase]:
        """Feed one joint angle; returns the new phase on a transition, else None."""
        if self.phase is CyclePhase.UP and angle <= self.down_angle:
            self.phase = CyclePhase.DOWN
            return self.phase
        if self.phase is CyclePhase.DOWN and angle >= self.up_angle:
            self.phase = CyclePhase.UP
            self.count += 1
            return self.phase
        return None

    def lose_rep(self) -> bool:
        """Take one rep away, never going below zero. Returns True if the count changed."""
        if self.count == 0:
            return False
        self.count -= 1
        return True

    def reset(self) -> None:
        self.count = 0
        self.phase = CyclePhase.UP
