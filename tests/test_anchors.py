"""Tests for anchor table generation."""

import math

import numpy as np
import pytest

from config.settings import Settings
from detection.anchors import build_anchors, expected_anchor_count, verify_anchor_layout
from detection.exceptions import ConfigurationError


class TestBuildAnchors:
    """Tests for build_anchors()."""

    def test_count_matches_palm_model(self):
        anchors = build_anchors(256, 256)
        expected = sum(2 * math.ceil(256 / s) ** 2 for s in Settings.SSD_STRIDES)
        assert expected == Settings.PALM_NUM_BOXES
        assert anchors.shape == (expected, 4)
        assert expected_anchor_count(256, 256) == expected

    def test_deterministic(self):
        """Rebuilding with the same inputs yields a byte-identical table."""
        assert build_anchors(256, 256).tobytes() == build_anchors(256, 256).tobytes()

    def test_row_major_order_with_paired_anchors(self):
        anchors = build_anchors(256, 256)
        # Two anchors per cell, then the next column
        np.testing.assert_allclose(anchors[0, :2], [0.5 / 32, 0.5 / 32])
        np.testing.assert_array_equal(anchors[0], anchors[1])
        np.testing.assert_allclose(anchors[2, :2], [1.5 / 32, 0.5 / 32])
        # Next row starts after 32 cells
        np.testing.assert_allclose(anchors[64, :2], [0.5 / 32, 1.5 / 32])

    def test_layers_in_stride_order(self):
        anchors = build_anchors(256, 256)
        # Stride 8 layer holds 32 * 32 * 2 anchors, stride 16 starts after it
        np.testing.assert_allclose(anchors[2048, :2], [0.5 / 16, 0.5 / 16])
        # Three stride-32 layers repeat the same 8x8 grid
        np.testing.assert_array_equal(anchors[2560:2688], anchors[2688:2816])
        np.testing.assert_allclose(anchors[-1, :2], [7.5 / 8, 7.5 / 8])

    def test_unit_scales(self):
        anchors = build_anchors(256, 256)
        assert np.all(anchors[:, 2:] == 1.0)
        assert anchors.min() > 0.0 and anchors[:, :2].max() < 1.0

    def test_read_only(self):
        anchors = build_anchors(256, 256)
        with pytest.raises(ValueError):
            anchors[0, 0] = 0.0

    def test_non_square_input(self):
        anchors = build_anchors(128, 64, strides=(16,), anchors_per_cell=1)
        assert len(anchors) == 8 * 4
        np.testing.assert_allclose(anchors[1, :2], [1.5 / 8, 0.5 / 4])
        assert expected_anchor_count(128, 64, strides=(16,), anchors_per_cell=1) == 32


class TestVerifyAnchorLayout:
    """Tests for the start-up anchor count check."""

    def test_matching_count_passes(self):
        verify_anchor_layout(build_anchors(256, 256), 2944)

    def test_mismatch_raises(self):
        with pytest.raises(ConfigurationError, match="2944 anchors"):
            verify_anchor_layout(build_anchors(256, 256), 896)
