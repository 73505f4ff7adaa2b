"""
Frame format conversion for the hand tracking pipeline.
"""

import cv2

from detection.types import ImageFrame


class FrameProcessor:
    """Converts OpenCV BGR frames into the RGB ImageFrame the pipeline consumes."""

    def __init__(self, target_size=None):
        """Initialize frame processor.

        Args:
            target_size: Optional (width, height) of the model input. Frames are
                letterboxed to the target aspect ratio with black bars, then
                resized, so the hand keeps its proportions and the engine
                receives frames in model-input pixels.
        """
        self.target_size = tuple(target_size) if target_size is not None else None

    def letterbox(self, frame):
        """Pad a frame with black bars, split evenly, to the target aspect ratio."""
        height, width = frame.shape[:2]
        target_w, target_h = self.target_size
        scale = max(width / target_w, height / target_h)
        pad_x = int(round(target_w * scale)) - width
        pad_y = int(round(target_h * scale)) - height
        if pad_x <= 0 and pad_y <= 0:
            return frame

        pad_x, pad_y = max(pad_x, 0), max(pad_y, 0)
        return cv2.copyMakeBorder(frame, pad_y // 2, pad_y - pad_y // 2, pad_x // 2, pad_x - pad_x // 2,
                                  cv2.BORDER_CONSTANT, value=(0, 0, 0))

    def preprocess(self, frame):
        """Convert a BGR frame to an ImageFrame, letterboxed and resized if configured."""
        if self.target_size is not None and (frame.shape[1], frame.shape[0]) != self.target_size:
            frame = self.letterbox(frame)
            frame = cv2.resize(frame, self.target_size, interpolation=cv2.INTER_LINEAR)

        # MediaPipe models expect RGB
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return ImageFrame.from_array(rgb)
