from .base_counter import RepCounter, register_counter
from .geometry import calculate_angle
from .posture import SideKeypoints


@register_counter("Pushup")
class PushupCounter(RepCounter):
    """
    Push-up counter.

    The body must stay straight (shoulder-hip-ankle) with the torso roughly
    horizontal; straightness is relaxed once the user is committed to the down
    phase. The elbow angle (wrist-elbow-shoulder) drives the cycle.
    """

    EXERCISE = "Pushup"

    def _compute_joint_angle(self, side: SideKeypoints) -> float:
        return calculate_angle(side.wrist, side.elbow, side.shoulder)
