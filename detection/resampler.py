"""
Image resampling into model input tensors.
"""

import math
import numpy as np


def build_normalization_table():
    """256-entry lookup table mapping byte values [0, 255] to [-1, 1]."""
    return (np.arange(256, dtype=np.float32) * (1.0 / 255.0) * 2.0 - 1.0).astype(np.float32)


class Resampler:
    """Crops, rotates and letterboxes an RGB frame into a normalized float tensor.

    Sampling is nearest-neighbour with truncation toward zero. Source images
    are treated as mirrored camera frames, so both axes are flipped by default.
    Destination pixels whose source position falls outside the frame are left
    at zero rather than clamped to the border.
    """

    def __init__(self, flip_x=True, flip_y=True):
        self.flip_x = flip_x
        self.flip_y = flip_y
        self.lookup = build_normalization_table()

    def letterbox_padding(self, src_width, src_height, target_width, target_height):
        """Destination padding (pad_w, pad_h) that keeps the source aspect ratio."""
        long_side = float(max(src_width, src_height))
        scale_w = target_width / src_width
        scale_h = target_height / src_height
        pad_w = int((long_side - src_width) * (src_width / long_side) * scale_w * 0.5)
        pad_h = int((long_side - src_height) * (src_height / long_side) * scale_h * 0.5)
        return pad_w, pad_h

    def resample(self, image, target_width, target_height, crop_size, crop_center, angle=0.0):
        """Resample a rotated crop of image into a (target_height, target_width, 3) tensor.

        Args:
            image: ImageFrame to sample from
            target_width: Output tensor width
            target_height: Output tensor height
            crop_size: (width, height) of the crop in source pixels
            crop_center: (x, y) center of the crop in source pixels
            angle: Crop rotation in radians

        Returns:
            np.ndarray: float32 tensor with values in [-1, 1]; padding is zero
        """
        src_w, src_h = image.width, image.height
        crop_w, crop_h = float(crop_size[0]), float(crop_size[1])
        center_x, center_y = float(crop_center[0]), float(crop_center[1])

        output = np.zeros((target_height, target_width, 3), dtype=np.float32)

        pad_w, pad_h = self.letterbox_padding(src_w, src_h, target_width, target_height)
        inner_w = target_width - pad_w * 2
        inner_h = target_height - pad_h * 2
        if inner_w <= 0 or inner_h <= 0:
            return output

        # Position of every inner destination pixel in the crop's local frame
        local_x = crop_w * (np.arange(inner_w) / inner_w) - crop_w * 0.5
        local_y = crop_h * (np.arange(inner_h) / inner_h) - crop_h * 0.5
        local_x = local_x[np.newaxis, :]
        local_y = local_y[:, np.newaxis]

        c, s = math.cos(angle), math.sin(angle)
        # astype truncates toward zero
        global_x = (center_x + (local_x * c - local_y * s)).astype(np.int64)
        global_y = (center_y + (local_x * s + local_y * c)).astype(np.int64)

        src_x = (src_w - 1) - global_x if self.flip_x else global_x
        src_y = (src_h - 1) - global_y if self.flip_y else global_y

        valid = (src_x >= 0) & (src_x < src_w) & (src_y >= 0) & (src_y < src_h)

        region = output[pad_h:pad_h + inner_h, pad_w:pad_w + inner_w]
        region[valid] = self.lookup[image.pixels[src_y[valid], src_x[valid]]]
        return output
