"""
Two-stage inference engine for hand tracking.
Runs palm detection over the full frame, then the hand landmark model over a
rotated crop around the palm, smoothing both stages across frames.
"""

import copy
import threading

import numpy as np

from config.settings import Settings
from tracking.coordinate_smoother import CoordinateSmoother
from utils.debug_logger import get_logger
from utils.timing_utils import PerformanceTracker
from .anchors import build_anchors, verify_anchor_layout
from .hand_roi import derive_hand_roi
from .landmark_decoder import LandmarkDecoder
from .palm_decoder import PalmDetectorDecoder
from .resampler import Resampler
from .types import HandTrackingResult

logger = get_logger(__name__)


class TwoStageInferenceEngine:
    """Two-stage inference: palm detection + hand landmark detection.

    Models are any objects exposing set_input(tensor), invoke(),
    get_output(index) and get_output_shape(index), such as ModelLoader.
    One engine tracks one hand; all working state lives on the instance.
    """

    def __init__(self, palm_model, landmark_model,
                 input_width=Settings.MODEL_INPUT_WIDTH,
                 input_height=Settings.MODEL_INPUT_HEIGHT,
                 palm_smoothing_frames=Settings.DEFAULT_PALM_SMOOTHING_FRAMES,
                 landmark_smoothing_frames=Settings.DEFAULT_LANDMARK_SMOOTHING_FRAMES):
        self.palm_model = palm_model
        self.landmark_model = landmark_model
        self.input_width = input_width
        self.input_height = input_height

        self.anchors = build_anchors(input_width, input_height, **Settings.get_anchor_config())
        expected_boxes = palm_model.get_output_shape(Settings.PALM_SCORES_OUTPUT)[-2]
        verify_anchor_layout(self.anchors, expected_boxes)
        logger.info("Anchor table ready: %d anchors for %dx%d input",
                    len(self.anchors), input_width, input_height)

        self.resampler = Resampler()
        self.palm_decoder = PalmDetectorDecoder(**Settings.get_palm_decoder_config())
        self.landmark_decoder = LandmarkDecoder(input_width, input_height)
        self.palm_smoother = CoordinateSmoother(palm_smoothing_frames)
        self.landmark_smoother = CoordinateSmoother(landmark_smoothing_frames)
        self.performance = PerformanceTracker()

        self.result = None
        self.initialized = False
        self._tick_lock = threading.Lock()

    def _run_model(self, model, tensor, stage):
        """Feed one input tensor and invoke the model; InferenceError propagates."""
        model.set_input(np.expand_dims(tensor, axis=0))
        with self.performance.measure(stage):
            model.invoke()
        logger.debug("%s: %.2f ms", stage, self.performance.last(stage))

    def _snapshot(self):
        return copy.deepcopy((self.palm_decoder, self.landmark_decoder,
                              self.palm_smoother, self.landmark_smoother))

    def _restore(self, state):
        (self.palm_decoder, self.landmark_decoder,
         self.palm_smoother, self.landmark_smoother) = state

    def process(self, frame):
        """Run one tick on an ImageFrame and return the smoothed HandTrackingResult.

        The frame must already be at the model input size (see
        camera.FrameProcessor): the hand ROI derived from stage one is in
        model-input pixels and stage two crops the frame with it directly.

        If either model fails, every decoder and smoother is rolled back to its
        state before the tick, `result` keeps the last published value and the
        InferenceError propagates.
        """
        if (frame.width, frame.height) != (self.input_width, self.input_height):
            raise ValueError(
                f"frame is {frame.width}x{frame.height} but the pipeline expects "
                f"{self.input_width}x{self.input_height}; letterbox it with FrameProcessor first"
            )

        with self._tick_lock:
            state = self._snapshot()
            try:
                result = self._process(frame)
            except Exception:
                self._restore(state)
                raise

            self.result = result
            self.initialized = True
            return result

    def _process(self, frame):
        # Stage 1: palm detection on the full frame
        palm_input = self.resampler.resample(
            frame, self.input_width, self.input_height,
            crop_size=(frame.width, frame.height),
            crop_center=(frame.width * 0.5, frame.height * 0.5),
            angle=0.0,
        )
        self._run_model(self.palm_model, palm_input, 'palm_inference')
        regressors = self.palm_model.get_output(Settings.PALM_REGRESSORS_OUTPUT)
        classificators = self.palm_model.get_output(Settings.PALM_SCORES_OUTPUT)

        palm_box, palm_keypoints = self.palm_decoder.decode(classificators, regressors, self.anchors)
        palm_score = self.palm_decoder.max_score if self.palm_decoder.max_score >= 0.0 else None

        # Palm box and keypoints are smoothed as one unit
        packed = self.palm_smoother.push(np.concatenate([palm_box, palm_keypoints.reshape(-1)]))
        smoothed_box = packed[:4]
        smoothed_keypoints = packed[4:].reshape(-1, 2)

        hand_roi = derive_hand_roi(smoothed_box, smoothed_keypoints, self.input_width, self.input_height)

        # Stage 2: landmarks on the rotated hand crop
        hand_input = self.resampler.resample(
            frame, self.input_width, self.input_height,
            crop_size=hand_roi.size, crop_center=hand_roi.center, angle=hand_roi.angle,
        )
        self._run_model(self.landmark_model, hand_input, 'landmark_inference')
        raw_landmarks = self.landmark_model.get_output(Settings.HAND_LANDMARKS_OUTPUT)
        hand_flag = self.landmark_model.get_output(Settings.HAND_FLAG_OUTPUT)

        hand_present, landmarks = self.landmark_decoder.decode(raw_landmarks, hand_flag, hand_roi)
        smoothed_landmarks = self.landmark_smoother.push(landmarks)

        return HandTrackingResult(
            palm_box=smoothed_box,
            palm_keypoints=smoothed_keypoints,
            hand_roi=hand_roi,
            landmarks=smoothed_landmarks,
            hand_present=hand_present,
            hand_flag=float(np.asarray(hand_flag).reshape(-1)[0]),
            palm_score=palm_score,
        )

    def reset(self):
        """Forget all tracking history."""
        with self._tick_lock:
            self.palm_decoder.reset()
            self.landmark_decoder.reset()
            self.palm_smoother.reset()
            self.landmark_smoother.reset()
            self.result = None
            self.initialized = False

    def close(self):
        """Release both models."""
        for model in (self.palm_model, self.landmark_model):
            close = getattr(model, 'close', None)
            if close is not None:
                close()
