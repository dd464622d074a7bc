"""
posture.py - Per-frame posture classification with side selection and bad-frame debounce.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..pose_detection.keypoints import MIN_KEYPOINT_CONFIDENCE, PoseFrame
from .geometry import calculate_angle, calculate_length, vertical_gap

Point = Tuple[float, float]

SIDE_JOINTS = ("shoulder", "elbow", "wrist", "hip", "knee", "ankle")


class PostureStatus(Enum):
    """Posture classification of one frame. Values are the display strings."""
    NO_PERSON = "No Person Detected"
    INCOMPLETE = "Move fully into frame"
    BAD = "Bad Position"
    GOOD = "Good position"


@dataclass
class PostureRules:
    """Thresholds for deciding whether a frame shows acceptable form."""
    min_confidence: float = MIN_KEYPOINT_CONFIDENCE
    bad_frames_to_trigger: int = 3
    straight_body_range: Optional[Tuple[float, float]] = (155.0, 205.0)  # exclusive bounds
    relax_straightness_when_down: bool = True
    max_vertical_ratio: Optional[float] = 0.8  # shoulder/hip vertical gap vs torso length
    min_vertical_ratio: Optional[float] = None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "PostureRules":
        straight = config.get("straight_body_range")
        return cls(
            min_confidence=config.get("min_confidence", MIN_KEYPOINT_CONFIDENCE),
            bad_frames_to_trigger=config.get("bad_frames_to_trigger", 3),
            straight_body_range=tuple(straight) if straight is not None else None,
            relax_straightness_when_down=config.get("relax_straightness_when_down", True),
            max_vertical_ratio=config.get("max_vertical_ratio"),
            min_vertical_ratio=config.get("min_vertical_ratio"),
        )


@dataclass(frozen=True)
class SideKeypoints:
    """The six confident keypoints of one body side."""
    side: str
    shoulder: Point
    elbow: Point
    wrist: Point
    hip: Point
    knee: Point
    ankle: Point


@dataclass
class PostureReading:
    """Result of classifying one frame."""
    status: PostureStatus
    is_bad_frame: bool = False
    side: Optional[SideKeypoints] = None
    body_angle: float = np.nan
    torso_length: float = np.nan
    vertical_gap: float = np.nan

    @property
    def is_good(self) -> bool:
        return self.status is PostureStatus.GOOD and not self.is_bad_frame


class PostureEvaluator:
    """
    Classifies pose frames as good or bad posture.

    Only bad posture is debounced: a run of `bad_frames_to_trigger` bad frames is
    needed before the status becomes BAD, while a single good frame restores GOOD
    and clears the bad-frame counter. No-person and incomplete frames leave the
    counters untouched.
    """

    def __init__(self, rules: Optional[PostureRules] = None):
        self.rules = rules or PostureRules()
        self.bad_frames = 0
        self.good_frames = 0
        self._held_status = PostureStatus.NO_PERSON

    @property
    def status(self) -> PostureStatus:
        """Last honored GOOD/BAD status (NO_PERSON before the first evaluated frame)."""
        return self._held_status

    def reset(self) -> None:
        self.bad_frames = 0
        self.good_frames = 0
        self._held_status = PostureStatus.NO_PERSON

    def resolve_side(self, frame: PoseFrame) -> Optional[SideKeypoints]:
        """Left side if all six joints are confident, else the right side, else None."""
        for side in ("left", "right"):
            points = [frame.point(f"{side}_{joint}", self.rules.min_confidence) for joint in SIDE_JOINTS]
            if all(p is not None for p in points):
                return SideKeypoints(side, *points)
        return None

    def classify(self, frame: Optional[PoseFrame], is_down: bool = False) -> PostureReading:
        """
        Classify one frame.

        Args:
            frame: Keypoints of the first detected subject, or None for a frame with no subject
            is_down: Whether the repetition cycle is currently in its down phase

        Returns:
            PostureReading with the status and the torso geometry used to decide it
        """
        if frame is None:
            return PostureReading(PostureStatus.NO_PERSON)

        side = self.resolve_side(frame)
        if side is None:
            return PostureReading(PostureStatus.INCOMPLETE)

        body_angle = calculate_angle(side.shoulder, side.hip, side.ankle)
        torso_length = calculate_length(side.shoulder, side.hip)
        gap = vertical_gap(side.shoulder, side.hip)
        reading = PostureReading(
            self._held_status, side=side, body_angle=body_angle, torso_length=torso_length, vertical_gap=gap
        )

        if self._is_bad_frame(body_angle, torso_length, gap, is_down):
            reading.is_bad_frame = True
            self.bad_frames += 1
            self.good_frames = 0
            if self.bad_frames >= self.rules.bad_frames_to_trigger:
                self._held_status = PostureStatus.BAD
            reading.status = self._held_status
            return reading

        self.bad_frames = 0
        self.good_frames += 1
        self._held_status = PostureStatus.GOOD
        reading.status = PostureStatus.GOOD
        return reading

    def _is_bad_frame(self, body_angle: float, torso_length: float, gap: float, is_down: bool) -> bool:
        rules = self.rules
        if rules.max_vertical_ratio is not None and gap > rules.max_vertical_ratio * torso_length:
            return True
        if rules.min_vertical_ratio is not None and gap < rules.min_vertical_ratio * torso_length:
            return True
        if rules.straight_body_range is not None:
            low, high = rules.straight_body_range
            is_straight = low < body_angle < high
            if not is_straight and not (is_down and rules.relax_straightness_when_down):
                return True
        return False
