from abc import ABC, abstractmethod
from typing import List

import numpy as np

from .keypoints import KEYPOINT_NAMES, DetectionResult


class BasePoseDetector(ABC):
    """Base class for pose detection implementations."""

    @abstractmethod
    def detect(self, frame: np.ndarray) -> DetectionResult:
        """
        Detect pose keypoints in the given frame.

        Args:
            frame: Input frame as numpy array (BGR)

        Returns:
            DetectionResult with one PoseFrame per detected subject (empty if nobody was found)
        """
        pass

    def get_keypoint_names(self) -> List[str]:
        """Names of the keypoints in the returned frames, in canonical order."""
        return list(KEYPOINT_NAMES)

    def close(self) -> None:
        pass
