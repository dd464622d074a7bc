from .base_counter import RepCounter, register_counter
from .geometry import calculate_angle
from .posture import SideKeypoints


@register_counter("Squat")
class SquatCounter(RepCounter):
    """
    Squat counter.

    Posture is bad when the torso leans too far forward (shoulder-hip vertical
    gap below half the torso length). The knee angle (hip-knee-ankle) drives
    the cycle.
    """

    EXERCISE = "Squat"

    def _compute_joint_angle(self, side: SideKeypoints) -> float:
        return calculate_angle(side.hip, side.knee, side.ankle)
