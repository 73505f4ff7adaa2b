"""
Rotated hand region derivation from a palm detection.
"""

import math
import numpy as np

from config.settings import Settings
from utils.math_utils import normalize_radians, rotate_points
from .types import HandROI

# Corner order in the crop frame: top-left, top-right, bottom-right, bottom-left
_CORNER_SIGNS = np.array([[-1.0, -1.0], [1.0, -1.0], [1.0, 1.0], [-1.0, 1.0]])


def hand_rotation(palm_keypoints, input_width, input_height,
                  start_keypoint=Settings.ROI_START_KEYPOINT,
                  end_keypoint=Settings.ROI_END_KEYPOINT,
                  rotation_offset=Settings.ROI_ROTATION_OFFSET):
    """Rotation of the wrist -> middle finger MCP axis, wrapped into [-pi, pi).

    Coincident keypoints give atan2(-0.0, 0.0) == 0, so the result falls back
    to rotation_offset instead of NaN.
    """
    start_x = palm_keypoints[start_keypoint][0] * input_width
    start_y = palm_keypoints[start_keypoint][1] * input_height
    end_x = palm_keypoints[end_keypoint][0] * input_width
    end_y = palm_keypoints[end_keypoint][1] * input_height

    angle = rotation_offset - math.atan2(-(end_y - start_y), end_x - start_x)
    return normalize_radians(angle)


def derive_hand_roi(palm_box, palm_keypoints, input_width, input_height,
                    scale=Settings.ROI_SCALE, shift=Settings.ROI_SHIFT):
    """Compute the stage-two crop around the palm.

    Args:
        palm_box: Normalized [x, y, width, height]
        palm_keypoints: Normalized (7, 2) palm keypoints
        input_width: Model input width in pixels
        input_height: Model input height in pixels
        scale: Isotropic expansion of the palm's long side, per axis
        shift: Center shift in palm-box units, applied in the rotated frame

    Returns:
        HandROI: center, size and corners in model-input pixels, angle in radians
    """
    angle = hand_rotation(palm_keypoints, input_width, input_height)
    box_x, box_y, box_w, box_h = (float(v) for v in palm_box)

    w = input_width * box_w
    h = input_height * box_h

    center = np.array([(box_x + box_w * 0.5) * input_width,
                       (box_y + box_h * 0.5) * input_height])
    center += rotate_points([w * shift[0], h * shift[1]], angle)

    long_side = max(w, h)
    width = long_side * scale[0]
    height = long_side * scale[1]

    half_extents = _CORNER_SIGNS * np.array([width * 0.5, height * 0.5])
    corners = center + rotate_points(half_extents, angle)

    return HandROI(
        center=(float(center[0]), float(center[1])),
        size=(width, height),
        angle=angle,
        corners=corners,
    )
