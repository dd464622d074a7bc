"""
Pose detection adapters producing canonical 17-keypoint detection results.
"""

from .base_detector import BasePoseDetector
from .keypoints import KEYPOINT_NAMES, MIN_KEYPOINT_CONFIDENCE, DetectionResult, Keypoint, PoseFrame

__all__ = [
    'BasePoseDetector',
    'KEYPOINT_NAMES',
    'MIN_KEYPOINT_CONFIDENCE',
    'DetectionResult',
    'Keypoint',
    'PoseFrame',
]
