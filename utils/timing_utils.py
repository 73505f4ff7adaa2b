"""
Timing and performance measurement utilities.
"""

import time
from collections import deque
from contextlib import contextmanager


class FPSCounter:
    """Tick rate measurement over a rolling window of frame intervals."""

    def __init__(self, window_size=30, clock=time.perf_counter):
        self.clock = clock
        self.prev_frame_time = None
        self.frame_times = deque(maxlen=window_size)

    def update(self):
        """Record one processed frame."""
        current_time = self.clock()
        if self.prev_frame_time is not None:
            self.frame_times.append(current_time - self.prev_frame_time)
        self.prev_frame_time = current_time

    def get_fps(self):
        """Get current FPS based on rolling window."""
        if not self.frame_times:
            return 0.0

        avg_frame_time = sum(self.frame_times) / len(self.frame_times)
        return 1.0 / avg_frame_time if avg_frame_time > 0 else 0.0

    def reset(self):
        self.frame_times.clear()
        self.prev_frame_time = None


class PerformanceTracker:
    """Track min/avg/max durations for named pipeline stages."""

    def __init__(self, clock=time.perf_counter):
        self.clock = clock
        self.stats = {}

    @contextmanager
    def measure(self, name):
        """Time the wrapped block and record it under name, in milliseconds."""
        start = self.clock()
        try:
            yield
        finally:
            self.record(name, (self.clock() - start) * 1000.0)

    def record(self, name, elapsed_ms):
        stats = self.stats.get(name)
        if stats is None:
            stats = {'count': 0, 'total': 0.0, 'min': elapsed_ms, 'max': elapsed_ms, 'last': elapsed_ms}
            self.stats[name] = stats

        stats['count'] += 1
        stats['total'] += elapsed_ms
        stats['min'] = min(stats['min'], elapsed_ms)
        stats['max'] = max(stats['max'], elapsed_ms)
        stats['last'] = elapsed_ms
        return elapsed_ms

    def last(self, name):
        """Most recent duration for name in ms, or 0.0 if never measured."""
        stats = self.stats.get(name)
        return stats['last'] if stats else 0.0

    def get_stats(self):
        """Get performance statistics."""
        return {
            name: {
                'count': stats['count'],
                'avg_ms': stats['total'] / stats['count'],
                'min_ms': stats['min'],
                'max_ms': stats['max'],
            }
            for name, stats in self.stats.items()
            if stats['count'] > 0
        }

    def reset(self):
        self.stats.clear()
