"""
Configuration settings for the hand tracking pipeline.
"""

import math


class Settings:
    """Pipeline configuration with default settings."""

    # Camera settings
    DEFAULT_FPS = 30
    DEFAULT_RESOLUTION = "640x480"
    DEFAULT_SOURCE = "0"

    # Model settings
    DEFAULT_PALM_MODEL_PATH = "models/palm_detection.tflite"
    DEFAULT_LANDMARK_MODEL_PATH = "models/hand_landmark.tflite"
    MODEL_INPUT_WIDTH = 256
    MODEL_INPUT_HEIGHT = 256
    MODEL_INPUT_CHANNELS = 3

    # Anchor schedule shared by the anchor builder and the palm model.
    # The palm model emits one box per anchor in exactly this order.
    SSD_STRIDES = (8, 16, 32, 32, 32)
    SSD_ANCHORS_PER_CELL = 2
    SSD_ANCHOR_OFFSET = 0.5
    PALM_NUM_BOXES = 2944

    # Palm detection settings
    PALM_NUM_KEYPOINTS = 7
    PALM_BOX_COORDS = 4
    PALM_SCORE_CLIPPING = 100.0
    PALM_SCORE_THRESHOLD = 0.7
    PALM_SUPPRESSION_THRESHOLD = 0.3
    PALM_DECODE_SCALE = 256.0
    PALM_REGRESSORS_OUTPUT = 0
    PALM_SCORES_OUTPUT = 1

    # Hand ROI settings (wrist center -> middle finger MCP)
    ROI_START_KEYPOINT = 0
    ROI_END_KEYPOINT = 2
    ROI_ROTATION_OFFSET = math.pi * 0.5
    ROI_SCALE = (2.6, 2.6)
    ROI_SHIFT = (0.0, -0.5)

    # Hand landmark settings
    HAND_NUM_LANDMARKS = 21
    HAND_PRESENCE_THRESHOLD = 0.1
    HAND_LANDMARKS_OUTPUT = 0
    HAND_FLAG_OUTPUT = 1

    # Smoothing settings (frames in each sliding window)
    DEFAULT_PALM_SMOOTHING_FRAMES = 3
    DEFAULT_LANDMARK_SMOOTHING_FRAMES = 4

    # Pose analysis
    OPEN_HAND_TOLERANCE_DEG = 50.0

    # Runner settings
    STATUS_INTERVAL_FRAMES = 30

    @classmethod
    def get_resolution_as_tuple(cls, resolution_str=None):
        """Convert resolution string to width, height tuple."""
        if resolution_str is None:
            resolution_str = cls.DEFAULT_RESOLUTION

        try:
            width, height = resolution_str.split('x')
            return int(width), int(height)
        except (ValueError, AttributeError):
            # Default to 640x480 if parsing fails
            return 640, 480

    @classmethod
    def get_input_size(cls):
        """Model input size as (width, height)."""
        return cls.MODEL_INPUT_WIDTH, cls.MODEL_INPUT_HEIGHT

    @classmethod
    def get_anchor_config(cls):
        """Get the anchor schedule as keyword arguments for build_anchors()."""
        return {
            'strides': cls.SSD_STRIDES,
            'anchors_per_cell': cls.SSD_ANCHORS_PER_CELL,
            'offset': cls.SSD_ANCHOR_OFFSET,
        }

    @classmethod
    def get_palm_decoder_config(cls):
        """Get configuration dictionary for PalmDetectorDecoder."""
        return {
            'num_keypoints': cls.PALM_NUM_KEYPOINTS,
            'score_threshold': cls.PALM_SCORE_THRESHOLD,
            'suppression_threshold': cls.PALM_SUPPRESSION_THRESHOLD,
            'score_clipping': cls.PALM_SCORE_CLIPPING,
            'decode_scale': cls.PALM_DECODE_SCALE,
        }
