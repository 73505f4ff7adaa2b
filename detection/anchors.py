"""
SSD anchor generation for the palm detection model.

The palm model regresses one box per anchor, so the anchors built here must
follow the model's output order exactly: layers in stride order, cells
row-major within a layer, `anchors_per_cell` consecutive copies per cell.
A mismatch does not fail at decode time, it silently corrupts every box.
`verify_anchor_layout` checks the count once at start-up.
"""

import math
import numpy as np

from config.settings import Settings
from .exceptions import ConfigurationError


def build_anchors(input_width, input_height, strides=Settings.SSD_STRIDES,
                  anchors_per_cell=Settings.SSD_ANCHORS_PER_CELL,
                  offset=Settings.SSD_ANCHOR_OFFSET):
    """Build the anchor table for a model input of the given size.

    Args:
        input_width: Model input width in pixels
        input_height: Model input height in pixels
        strides: Feature map stride for each layer
        anchors_per_cell: Anchors emitted per feature map cell
        offset: Cell-relative anchor center offset

    Returns:
        np.ndarray: (N, 4) float32 rows of [center_x, center_y, scale_w, scale_h],
        normalized to [0, 1]. The array is read-only.
    """
    layers = []
    for stride in strides:
        map_width = int(math.ceil(input_width / stride))
        map_height = int(math.ceil(input_height / stride))

        rows, cols = np.meshgrid(np.arange(map_height), np.arange(map_width), indexing='ij')
        centers = np.stack([
            (cols.ravel() + offset) / map_width,
            (rows.ravel() + offset) / map_height,
        ], axis=1)
        layers.append(np.repeat(centers, anchors_per_cell, axis=0))

    centers = np.concatenate(layers, axis=0)
    anchors = np.ones((len(centers), 4), dtype=np.float32)
    anchors[:, :2] = centers

    anchors.setflags(write=False)
    return anchors


def expected_anchor_count(input_width, input_height, strides=Settings.SSD_STRIDES,
                          anchors_per_cell=Settings.SSD_ANCHORS_PER_CELL):
    """Number of anchors build_anchors() produces for this schedule."""
    return sum(
        anchors_per_cell * int(math.ceil(input_width / s)) * int(math.ceil(input_height / s))
        for s in strides
    )


def verify_anchor_layout(anchors, expected_boxes):
    """Raise ConfigurationError unless there is exactly one anchor per model box."""
    if len(anchors) != expected_boxes:
        raise ConfigurationError(
            f"anchor schedule produced {len(anchors)} anchors but the palm model "
            f"emits {expected_boxes} boxes; check SSD_STRIDES / SSD_ANCHORS_PER_CELL"
        )
