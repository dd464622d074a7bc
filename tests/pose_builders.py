"""Synthetic detection results for counter and posture tests."""
import math
from typing import Dict, List, Tuple

from sergeant.feedback.base_feedback import BaseFeedback
from sergeant.pose_detection.keypoints import KEYPOINT_NAMES, DetectionResult

Point = Tuple[float, float]


def make_result(points: Dict[str, Point], confidence: float = 0.9) -> DetectionResult:
    """Detection result with the given keypoints at `confidence`; all others absent."""
    xyn = []
    conf = []
    for name in KEYPOINT_NAMES:
        if name in points:
            xyn.append(points[name])
            conf.append(confidence)
        else:
            xyn.append((0.0, 0.0))
            conf.append(0.0)
    return DetectionResult.from_arrays(xyn, conf)


def pushup_points(elbow_angle: float = 180.0, hip_drop: float = 0.0, side: str = "left") -> Dict[str, Point]:
    """
    Side-view plank: shoulder, hip and ankle on a nearly horizontal line.

    hip_drop moves the hip (and knee) down to break the straight body line.
    The wrist is placed so the wrist-elbow-shoulder angle equals elbow_angle.
    """
    shoulder = (0.30, 0.50)
    elbow = (0.30, 0.65)
    theta = math.radians(elbow_angle)
    wrist = (elbow[0] + 0.15 * math.sin(theta), elbow[1] - 0.15 * math.cos(theta))
    return {
        f"{side}_shoulder": shoulder,
        f"{side}_elbow": elbow,
        f"{side}_wrist": wrist,
        f"{side}_hip": (0.55, 0.52 + hip_drop),
        f"{side}_knee": (0.675, 0.53 + hip_drop / 2),
        f"{side}_ankle": (0.80, 0.54),
    }


def upright_points(side: str = "left") -> Dict[str, Point]:
    """Standing straight: body line is straight but the torso is vertical."""
    return {
        f"{side}_shoulder": (0.50, 0.20),
        f"{side}_elbow": (0.50, 0.35),
        f"{side}_wrist": (0.50, 0.50),
        f"{side}_hip": (0.50, 0.50),
        f"{side}_knee": (0.50, 0.70),
        f"{side}_ankle": (0.50, 0.90),
    }


def squat_points(knee_angle: float = 180.0, lean: bool = False, side: str = "left") -> Dict[str, Point]:
    """
    Side-view squat with the hip-knee-ankle angle equal to knee_angle.

    lean tips the torso almost horizontal.
    """
    knee = (0.50, 0.70)
    ankle = (0.50, 0.90)
    theta = math.radians(knee_angle)
    hip = (knee[0] + 0.2 * math.sin(theta), knee[1] + 0.2 * math.cos(theta))
    shoulder = (hip[0] - 0.30, hip[1] - 0.05) if lean else (hip[0], hip[1] - 0.30)
    return {
        f"{side}_shoulder": shoulder,
        f"{side}_elbow": (shoulder[0], shoulder[1] + 0.15),
        f"{side}_wrist": (shoulder[0], shoulder[1] + 0.30),
        f"{side}_hip": hip,
        f"{side}_knee": knee,
        f"{side}_ankle": ankle,
    }


def pushup_frame(elbow_angle: float = 180.0, hip_drop: float = 0.0) -> DetectionResult:
    return make_result(pushup_points(elbow_angle, hip_drop))


def sagging_frame(elbow_angle: float = 180.0) -> DetectionResult:
    return make_result(pushup_points(elbow_angle, hip_drop=0.18))


def squat_frame(knee_angle: float = 180.0, lean: bool = False) -> DetectionResult:
    return make_result(squat_points(knee_angle, lean))


class RecordingFeedback(BaseFeedback):
    """Feedback sink that records every signal."""

    def __init__(self):
        self.counted: List[Tuple[str, int, int]] = []
        self.lost: List[Tuple[str, int]] = []
        self.posture: List[str] = []

    def on_rep_counted(self, exercise, count, target_count):
        self.counted.append((exercise, count, target_count))

    def on_rep_lost(self, exercise, count):
        self.lost.append((exercise, count))

    def on_posture_changed(self, exercise, feedback, is_good):
        self.posture.append(feedback)
