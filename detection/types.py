"""
Data types passed between the pipeline stages and to consumers.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from tracking.hand_pose import is_open_hand


@dataclass(frozen=True)
class ImageFrame:
    """A single RGB still image, row-major, 3 bytes per pixel."""

    pixels: np.ndarray  # (height, width, 3) uint8
    width: int
    height: int

    def __post_init__(self):
        if self.pixels.shape != (self.height, self.width, 3):
            raise ValueError(
                f"pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGB"
            )

    @classmethod
    def from_array(cls, pixels):
        """Wrap an (H, W, 3) uint8 array."""
        pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        if pixels.ndim != 3:
            raise ValueError(f"expected an (H, W, 3) array, got shape {pixels.shape}")
        height, width = pixels.shape[:2]
        return cls(pixels=pixels, width=width, height=height)

    @classmethod
    def from_buffer(cls, buffer, width, height):
        """Wrap a row-major RGB byte buffer of width * height * 3 bytes."""
        data = np.frombuffer(buffer, dtype=np.uint8)
        if data.size != width * height * 3:
            raise ValueError(f"buffer holds {data.size} bytes, expected {width * height * 3}")
        return cls(pixels=data.reshape(height, width, 3), width=width, height=height)


@dataclass(frozen=True)
class HandROI:
    """Rotated square crop around the hand, in model-input pixel space."""

    center: Tuple[float, float]
    size: Tuple[float, float]
    angle: float  # radians
    corners: np.ndarray  # (4, 2)

    @property
    def width(self):
        return self.size[0]

    @property
    def height(self):
        return self.size[1]


@dataclass
class HandTrackingResult:
    """Smoothed output of one pipeline tick."""

    palm_box: np.ndarray  # (4,) normalized x, y, width, height
    palm_keypoints: np.ndarray  # (7, 2) normalized
    hand_roi: HandROI
    landmarks: np.ndarray  # (21, 3) model-input pixels + relative depth
    hand_present: bool
    hand_flag: float
    palm_score: Optional[float] = None  # best raw palm score this tick, None if below threshold

    @property
    def wrist(self):
        """Wrist landmark position (x, y)."""
        return float(self.landmarks[0, 0]), float(self.landmarks[0, 1])

    @property
    def is_open_hand(self):
        return self.hand_present and is_open_hand(self.landmarks)
