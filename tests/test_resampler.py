"""Tests for the input resampler."""

import numpy as np
import pytest

from detection.resampler import Resampler, build_normalization_table
from detection.types import ImageFrame


def solid_frame(width, height, color):
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return ImageFrame.from_array(pixels)


def full_frame_tensor(resampler, image, size=256):
    return resampler.resample(
        image, size, size,
        crop_size=(image.width, image.height),
        crop_center=(image.width * 0.5, image.height * 0.5),
        angle=0.0,
    )


class TestNormalizationTable:
    """Tests for the byte -> [-1, 1] lookup table."""

    def test_endpoints(self):
        table = build_normalization_table()
        assert table.shape == (256,)
        assert table.dtype == np.float32
        assert table[0] == pytest.approx(-1.0)
        assert table[255] == pytest.approx(1.0, abs=1e-6)

    def test_monotonic(self):
        assert np.all(np.diff(build_normalization_table()) > 0)


class TestResampler:
    """Tests for Resampler.resample()."""

    def test_output_shape_and_dtype(self):
        tensor = full_frame_tensor(Resampler(), solid_frame(64, 64, (1, 2, 3)))
        assert tensor.shape == (256, 256, 3)
        assert tensor.dtype == np.float32

    def test_solid_color_square_fills_everything(self):
        color = (10, 128, 250)
        resampler = Resampler()
        tensor = full_frame_tensor(resampler, solid_frame(256, 256, color))
        expected = resampler.lookup[list(color)]
        assert np.all(tensor == expected)

    def test_letterbox_for_landscape_frame(self):
        """Inner region equals lookup(color); padded rows are exactly zero."""
        color = (10, 128, 250)
        resampler = Resampler()
        assert resampler.letterbox_padding(640, 480, 256, 256) == (0, 32)

        tensor = full_frame_tensor(resampler, solid_frame(640, 480, color))
        expected = resampler.lookup[list(color)]
        assert np.all(tensor[32:224] == expected)
        assert np.all(tensor[:32] == 0.0)
        assert np.all(tensor[224:] == 0.0)

    def test_letterbox_for_portrait_frame(self):
        resampler = Resampler()
        assert resampler.letterbox_padding(480, 640, 256, 256) == (32, 0)

        tensor = full_frame_tensor(resampler, solid_frame(480, 640, (255, 255, 255)))
        assert np.all(tensor[:, :32] == 0.0)
        assert np.all(tensor[:, 224:] == 0.0)
        assert np.all(tensor[:, 32:224] == resampler.lookup[255])

    def test_both_axes_flipped(self):
        pixels = np.arange(2 * 2 * 3, dtype=np.uint8).reshape(2, 2, 3)
        image = ImageFrame.from_array(pixels)
        resampler = Resampler()

        tensor = resampler.resample(image, 2, 2, crop_size=(2, 2), crop_center=(1, 1))
        assert np.array_equal(tensor[0, 0], resampler.lookup[pixels[1, 1]])
        assert np.array_equal(tensor[1, 1], resampler.lookup[pixels[0, 0]])
        assert np.array_equal(tensor[0, 1], resampler.lookup[pixels[1, 0]])

    def test_without_flips_is_identity_crop(self):
        pixels = np.arange(4 * 4 * 3, dtype=np.uint8).reshape(4, 4, 3)
        image = ImageFrame.from_array(pixels)
        resampler = Resampler(flip_x=False, flip_y=False)

        tensor = resampler.resample(image, 4, 4, crop_size=(4, 4), crop_center=(2, 2))
        assert np.array_equal(tensor, resampler.lookup[pixels])

    def test_quarter_turn_crop(self):
        """A quarter turn reads output (row, col) from source row col, column 4 - row."""
        pixels = np.arange(4 * 4 * 3, dtype=np.uint8).reshape(4, 4, 3)
        image = ImageFrame.from_array(pixels)
        resampler = Resampler(flip_x=False, flip_y=False)

        tensor = resampler.resample(image, 4, 4, crop_size=(4, 4), crop_center=(2.5, 2.5), angle=np.pi / 2)

        for row in range(1, 4):
            for col in range(4):
                assert np.array_equal(tensor[row, col], resampler.lookup[pixels[col, 4 - row]])
        # Output row 0 maps to source column 4, which is outside the frame
        assert np.all(tensor[0] == 0.0)

    def test_rotation_direction_matches_landmark_decoding(self):
        """A point offset along +x in the crop is read from +y in the source after a quarter turn."""
        pixels = np.zeros((8, 8, 3), dtype=np.uint8)
        pixels[6, 4] = 255  # Two pixels below the crop center
        resampler = Resampler(flip_x=False, flip_y=False)

        tensor = resampler.resample(ImageFrame.from_array(pixels), 8, 8, crop_size=(8, 8),
                                    crop_center=(4.5, 4.5), angle=np.pi / 2)
        hits = np.argwhere(np.all(tensor == resampler.lookup[255], axis=-1))
        # Crop column 4 + 2 on the center row
        assert hits.tolist() == [[4, 6]]

    def test_out_of_bounds_left_zero(self):
        """Samples outside the source are skipped, not clamped to the border."""
        resampler = Resampler()
        image = solid_frame(64, 64, (200, 200, 200))

        tensor = resampler.resample(image, 32, 32, crop_size=(64, 64), crop_center=(-500.0, -500.0))
        assert np.all(tensor == 0.0)

    def test_partial_crop_past_edge(self):
        resampler = Resampler(flip_x=False, flip_y=False)
        image = solid_frame(64, 64, (255, 0, 0))

        # Crop centered on the right edge: the right half of the output has no source
        tensor = resampler.resample(image, 64, 64, crop_size=(64, 64), crop_center=(64.0, 32.0))
        assert np.all(tensor[:, :32, 0] == resampler.lookup[255])
        assert np.all(tensor[:, 32:] == 0.0)
