"""
Hand skeleton topology and simple pose analysis on decoded landmarks.
"""

from config.settings import Settings
from utils.math_utils import joint_angle

# Landmark index pairs forming the 21-point hand skeleton (0 = wrist)
HAND_CONNECTIONS = (
    (0, 1), (1, 2), (2, 3), (3, 4),          # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),          # Index
    (5, 9), (9, 10), (10, 11), (11, 12),     # Middle
    (9, 13), (13, 14), (14, 15), (15, 16),   # Ring
    (13, 17),                                # Palm
    (0, 17), (17, 18), (18, 19), (19, 20),   # Pinky
)

# (joint, previous, next) triples checked for straightness
FINGER_JOINTS = (
    (1, 0, 2), (2, 1, 3), (3, 2, 4),
    (6, 5, 7), (7, 6, 8),
    (10, 9, 11), (11, 10, 12),
    (14, 13, 15), (15, 14, 16),
    (18, 17, 19), (19, 18, 20),
)


def finger_joint_angles(landmarks):
    """Interior angle in degrees at every finger joint, None for degenerate joints."""
    return [joint_angle(landmarks[j], landmarks[a], landmarks[b]) for j, a, b in FINGER_JOINTS]


def is_open_hand(landmarks, tolerance_deg=Settings.OPEN_HAND_TOLERANCE_DEG):
    """True when every finger joint is within tolerance_deg of straight (180 degrees)."""
    if len(landmarks) != Settings.HAND_NUM_LANDMARKS:
        return False

    for angle in finger_joint_angles(landmarks):
        if angle is None or abs(angle - 180.0) >= tolerance_deg:
            return False
    return True
