"""Shared fixtures: fake model collaborators standing in for TFLite."""

import numpy as np
import pytest

from detection.exceptions import InferenceError
from detection.types import ImageFrame


class FakeModel:
    """Model collaborator returning fixed outputs."""

    def __init__(self, outputs):
        self.outputs = [np.asarray(o, dtype=np.float32) for o in outputs]
        self.inputs = []
        self.fail = False
        self.closed = False

    def get_output_shape(self, index):
        return self.outputs[index].shape

    def set_input(self, tensor):
        self.inputs.append(np.array(tensor))

    def invoke(self):
        if self.fail:
            raise InferenceError("backend failure")

    def get_output(self, index):
        return self.outputs[index].copy()

    def close(self):
        self.closed = True


# Anchor at row 16, col 16 of the stride-8 layer: center (0.515625, 0.515625)
PALM_ANCHOR_INDEX = (16 * 32 + 16) * 2


def make_palm_outputs(num_boxes=2944, detections=None):
    """Palm model outputs: regressors (1, N, 18) and logits (1, N, 1).

    detections maps anchor index -> (logit, 18 regression values).
    """
    regressors = np.zeros((1, num_boxes, 18), dtype=np.float32)
    scores = np.full((1, num_boxes, 1), -10.0, dtype=np.float32)
    for index, (logit, deltas) in (detections or {}).items():
        scores[0, index, 0] = logit
        regressors[0, index] = deltas
    return [regressors, scores]


def palm_deltas(w=64.0, h=64.0, wrist=(0.0, 20.0), middle_mcp=(0.0, -20.0)):
    deltas = np.zeros(18, dtype=np.float32)
    deltas[2], deltas[3] = w, h
    deltas[4:6] = wrist
    deltas[8:10] = middle_mcp
    return deltas


def make_landmark_outputs(flag=0.9):
    grid = np.linspace(64.0, 192.0, 21)
    raw = np.column_stack([grid, grid[::-1], np.linspace(-10.0, 10.0, 21)])
    return [raw.reshape(1, 63), np.array([[flag]])]


@pytest.fixture
def palm_model():
    detections = {
        PALM_ANCHOR_INDEX: (5.0, palm_deltas()),
        PALM_ANCHOR_INDEX + 1: (4.0, palm_deltas(w=60.0, h=60.0)),
    }
    return FakeModel(make_palm_outputs(detections=detections))


@pytest.fixture
def landmark_model():
    return FakeModel(make_landmark_outputs())


@pytest.fixture
def frame():
    rng = np.random.default_rng(7)
    return ImageFrame.from_array(rng.integers(0, 256, size=(256, 256, 3), dtype=np.uint8))
