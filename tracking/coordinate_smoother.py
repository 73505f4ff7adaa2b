"""
Position smoothing utilities for reducing jitter in hand tracking.
"""

import numpy as np


class CoordinateSmoother:
    """Sliding-window moving average over fixed-shape numpy samples.

    The buffer always holds window_size samples: the first push seeds every
    slot with that sample, so the average is usable from the first frame
    instead of ramping up from zero.
    """

    def __init__(self, window_size):
        if int(window_size) < 1:
            raise ValueError(f"window_size must be at least 1, got {window_size}")
        self.window_size = int(window_size)
        self.buffer = None
        self.cursor = 0

    @property
    def is_primed(self):
        return self.buffer is not None

    def push(self, sample):
        """Add a sample, evicting the oldest, and return the new average."""
        sample = np.array(sample, dtype=np.float64)

        if self.buffer is None:
            self.buffer = np.repeat(sample[np.newaxis], self.window_size, axis=0)
        else:
            if sample.shape != self.buffer.shape[1:]:
                raise ValueError(
                    f"sample shape {sample.shape} does not match smoother shape {self.buffer.shape[1:]}"
                )
            self.buffer[self.cursor] = sample

        self.cursor = (self.cursor + 1) % self.window_size
        return self.current_average()

    def current_average(self):
        """Mean over all window slots, or None before the first push."""
        if self.buffer is None:
            return None
        return self.buffer.sum(axis=0) / self.window_size

    def reset(self):
        """Reset smoother state."""
        self.buffer = None
        self.cursor = 0
