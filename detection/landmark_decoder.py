"""
Hand landmark decoding from the rotated crop back into model-input space.
"""

import numpy as np

from config.settings import Settings
from utils.debug_logger import get_logger
from utils.math_utils import rotate_points

logger = get_logger(__name__)


class LandmarkDecoder:
    """Maps crop-local landmark model output into model-input pixel coordinates."""

    def __init__(self, input_width=Settings.MODEL_INPUT_WIDTH, input_height=Settings.MODEL_INPUT_HEIGHT,
                 num_landmarks=Settings.HAND_NUM_LANDMARKS,
                 presence_threshold=Settings.HAND_PRESENCE_THRESHOLD):
        """Initialize the landmark decoder.

        Args:
            input_width: Landmark model input width in pixels
            input_height: Landmark model input height in pixels
            num_landmarks: Landmarks per hand
            presence_threshold: Minimum hand flag to accept a landmark set
        """
        self.input_width = input_width
        self.input_height = input_height
        self.num_landmarks = num_landmarks
        self.presence_threshold = presence_threshold

        self.landmarks = np.zeros((num_landmarks, 3), dtype=np.float64)

    def decode(self, raw_landmarks, hand_flag, roi):
        """Decode landmarks for one tick.

        Below the presence threshold the previous landmark set is returned
        untouched.

        Args:
            raw_landmarks: num_landmarks * 3 values (x, y in crop pixels, z)
            hand_flag: Hand presence score
            roi: HandROI the crop was sampled from

        Returns:
            tuple: (is_hand_present, landmarks (num_landmarks, 3))
        """
        flag = float(np.asarray(hand_flag, dtype=np.float64).reshape(-1)[0])
        if flag < self.presence_threshold:
            logger.debug("Hand flag %.3f below %.2f, keeping previous landmarks", flag, self.presence_threshold)
            return False, self.landmarks

        raw = np.asarray(raw_landmarks, dtype=np.float64).reshape(self.num_landmarks, 3)

        # Offsets from the crop center, in crop pixels
        local = np.stack([
            roi.width * (raw[:, 0] / self.input_width - 0.5),
            roi.height * (raw[:, 1] / self.input_height - 0.5),
        ], axis=1)
        xy = np.asarray(roi.center) + rotate_points(local, roi.angle)

        self.landmarks = np.column_stack([xy, raw[:, 2]])
        return True, self.landmarks

    def reset(self):
        self.landmarks = np.zeros((self.num_landmarks, 3), dtype=np.float64)
