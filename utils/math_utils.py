"""
Mathematical utilities for hand tracking.
"""

import math
import numpy as np


def sigmoid(values):
    """Logistic sigmoid, element-wise."""
    return 1.0 / (1.0 + np.exp(-values))


def normalize_radians(angle):
    """Wrap an angle into [-pi, pi)."""
    return angle - 2.0 * math.pi * math.floor((angle + math.pi) / (2.0 * math.pi))


def rotate_points(points, angle):
    """Rotate an (N, 2) array of offsets by angle radians about the origin."""
    points = np.asarray(points, dtype=np.float64)
    c, s = math.cos(angle), math.sin(angle)
    x = points[..., 0]
    y = points[..., 1]
    return np.stack([x * c - y * s, x * s + y * c], axis=-1)


def joint_angle(center, first, second):
    """Angle in degrees at center between the segments to first and second.

    Returns None when either segment has zero length.
    """
    a = np.asarray(first, dtype=np.float64) - np.asarray(center, dtype=np.float64)
    b = np.asarray(second, dtype=np.float64) - np.asarray(center, dtype=np.float64)

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a < 1e-9 or norm_b < 1e-9:  # Avoid division by zero
        return None

    cos_angle = np.clip(np.dot(a, b) / (norm_a * norm_b), -1.0, 1.0)
    return math.degrees(math.acos(cos_angle))
