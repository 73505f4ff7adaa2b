"""
Hand detection module: palm detection, hand ROI and landmark decoding.
"""

from .anchors import build_anchors, expected_anchor_count, verify_anchor_layout
from .exceptions import HandTrackingError, InferenceError, ConfigurationError
from .hand_roi import derive_hand_roi
from .landmark_decoder import LandmarkDecoder
from .model_loader import ModelLoader
from .palm_decoder import PalmDetectorDecoder, overlap_similarity
from .resampler import Resampler
from .two_stage_inference import TwoStageInferenceEngine
from .types import ImageFrame, HandROI, HandTrackingResult

__all__ = [
    'build_anchors', 'expected_anchor_count', 'verify_anchor_layout',
    'HandTrackingError', 'InferenceError', 'ConfigurationError',
    'derive_hand_roi', 'LandmarkDecoder', 'ModelLoader',
    'PalmDetectorDecoder', 'overlap_similarity', 'Resampler',
    'TwoStageInferenceEngine', 'ImageFrame', 'HandROI', 'HandTrackingResult',
]
