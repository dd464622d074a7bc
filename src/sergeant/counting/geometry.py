"""
geometry.py - 2D angle and distance helpers for pose keypoints.
"""
from typing import Sequence

import numpy as np

# Returned for zero-length rays so a degenerate joint reads as "straight".
DEGENERATE_ANGLE = 180.0


def calculate_angle(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    """
    Calculate the angle at point b between the rays b->a and b->c.

    Point ordering convention:
    - a: First point (e.g., wrist for elbow angle)
    - b: Vertex (e.g., elbow)
    - c: Last point (e.g., shoulder)

    Args:
        a: First point (x, y)
        b: Vertex point (x, y)
        c: Last point (x, y)

    Returns:
        Angle in degrees in [0, 180]; DEGENERATE_ANGLE if either ray has zero length
    """
    ba = np.array(a[:2], dtype=float) - np.array(b[:2], dtype=float)
    bc = np.array(c[:2], dtype=float) - np.array(b[:2], dtype=float)
    norm_ba = np.linalg.norm(ba)
    norm_bc = np.linalg.norm(bc)
    if norm_ba == 0 or norm_bc == 0:
        return DEGENERATE_ANGLE
    cosine_angle = np.clip(np.dot(ba, bc) / (norm_ba * norm_bc), -1.0, 1.0)
    return float(np.degrees(np.arccos(cosine_angle)))


def calculate_length(a: Sequence[float], b: Sequence[float]) -> float:
    """Calculate Euclidean distance between two points."""
    return float(np.linalg.norm(np.array(a[:2], dtype=float) - np.array(b[:2], dtype=float)))


def vertical_gap(a: Sequence[float], b: Sequence[float]) -> float:
    """Absolute difference of the y coordinates."""
    return abs(float(a[1]) - float(b[1]))
