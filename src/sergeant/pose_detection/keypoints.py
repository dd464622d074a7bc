"""
keypoints.py - Keypoint, PoseFrame and DetectionResult types in the canonical 17-point layout.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

# Canonical 17-keypoint ordering of pose-estimation models (COCO layout).
KEYPOINT_NAMES = [
    "nose",
    "left_eye", "right_eye",
    "left_ear", "right_ear",
    "left_shoulder", "right_shoulder",
    "left_elbow", "right_elbow",
    "left_wrist", "right_wrist",
    "left_hip", "right_hip",
    "left_knee", "right_knee",
    "left_ankle", "right_ankle",
]

# MediaPipe's 33-landmark indices for each canonical keypoint
MEDIAPIPE_INDEX = {
    "nose": 0,
    "left_eye": 2, "right_eye": 5,
    "left_ear": 7, "right_ear": 8,
    "left_shoulder": 11, "right_shoulder": 12,
    "left_elbow": 13, "right_elbow": 14,
    "left_wrist": 15, "right_wrist": 16,
    "left_hip": 23, "right_hip": 24,
    "left_knee": 25, "right_knee": 26,
    "left_ankle": 27, "right_ankle": 28,
}

MIN_KEYPOINT_CONFIDENCE = 0.6


@dataclass(frozen=True)
class Keypoint:
    """A named landmark with a normalized 2D position and a confidence in [0, 1]."""
    name: str
    x: float
    y: float
    confidence: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class PoseFrame:
    """Keypoints of a single detected subject, keyed by keypoint name."""
    keypoints: Dict[str, Keypoint] = field(default_factory=dict)

    def point(self, name: str, min_confidence: float = MIN_KEYPOINT_CONFIDENCE) -> Optional[Tuple[float, float]]:
        """Position of the named keypoint, or None when missing or not confident enough."""
        keypoint = self.keypoints.get(name)
        if keypoint is None or keypoint.confidence <= min_confidence:
            return None
        return keypoint.position

    @classmethod
    def from_arrays(cls, xyn: Sequence[Sequence[float]], conf: Sequence[float]) -> "PoseFrame":
        """
        Build a frame from (N, 2) normalized positions and (N,) confidences in canonical order.

        Entries beyond the canonical 17 are ignored; a position without a matching
        confidence is treated as zero confidence.
        """
        positions = np.asarray(xyn, dtype=float).reshape(-1, 2)
        confidences = np.asarray(conf, dtype=float).reshape(-1)
        keypoints = {}
        for idx, name in enumerate(KEYPOINT_NAMES[:len(positions)]):
            confidence = float(confidences[idx]) if idx < len(confidences) else 0.0
            keypoints[name] = Keypoint(name, float(positions[idx][0]), float(positions[idx][1]), confidence)
        return cls(keypoints)

    @classmethod
    def from_mediapipe_landmarks(cls, landmarks: Sequence[Any]) -> "PoseFrame":
        """Build a frame from a MediaPipe landmark list (objects with x, y and visibility)."""
        keypoints = {}
        for name, idx in MEDIAPIPE_INDEX.items():
            if idx >= len(landmarks):
                continue
            landmark = landmarks[idx]
            keypoints[name] = Keypoint(name, float(landmark.x), float(landmark.y), float(landmark.visibility))
        return cls(keypoints)


@dataclass
class DetectionResult:
    """One detection pass: zero or more subjects. Only the first subject is ever evaluated."""
    subjects: List[PoseFrame] = field(default_factory=list)

    @property
    def first_subject(self) -> Optional[PoseFrame]:
        return self.subjects[0] if self.subjects else None

    @classmethod
    def empty(cls) -> "DetectionResult":
        return cls([])

    @classmethod
    def from_arrays(cls, xyn: Sequence[Sequence[float]], conf: Sequence[float]) -> "DetectionResult":
        """Single-subject result from canonical keypoint arrays."""
        return cls([PoseFrame.from_arrays(xyn, conf)])
