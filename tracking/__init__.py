"""
Tracking module for temporal smoothing and hand pose analysis.
"""

from .coordinate_smoother import CoordinateSmoother
from .hand_pose import HAND_CONNECTIONS, is_open_hand, finger_joint_angles

__all__ = ['CoordinateSmoother', 'HAND_CONNECTIONS', 'is_open_hand', 'finger_joint_angles']
