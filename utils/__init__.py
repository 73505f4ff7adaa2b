"""
Utility modules for the hand tracking pipeline.
"""

from .arg_parser import parse_args
from .timing_utils import FPSCounter, PerformanceTracker
from .math_utils import (
    sigmoid,
    normalize_radians,
    rotate_points,
    joint_angle
)
from .debug_logger import DebugLogger, get_logger

__all__ = [
    'parse_args',
    'FPSCounter',
    'PerformanceTracker',
    'sigmoid',
    'normalize_radians',
    'rotate_points',
    'joint_angle',
    'DebugLogger',
    'get_logger'
]
