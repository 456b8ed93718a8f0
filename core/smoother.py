"""
fingertip smoothing.

mediapipe fingertips wobble a few pixels even when the hand is still.
we keep the last few raw points, take a recency-weighted average of
them and blend that trend with the newest raw sample. more trend =
less jitter but more lag.
"""
from collections import deque

from app.config import SMOOTHING_FACTOR, POINT_MEMORY
from core.landmarks import Point


class PointSmoother:

    def __init__(self, smoothing_factor=SMOOTHING_FACTOR, point_memory=POINT_MEMORY):
        if not 0.0 <= smoothing_factor <= 1.0:
            raise ValueError(f"smoothing factor must be in [0, 1], got {smoothing_factor}")
        if point_memory < 1:
            raise ValueError(f"point memory must be at least 1, got {point_memory}")
        self.smoothing_factor = smoothing_factor
        self.point_memory = point_memory
        # oldest point falls off the left when full
        self._history = deque(maxlen=point_memory)

    @property
    def history(self):
        return list(self._history)

    def smooth(self, raw):
        """add a raw point and return the smoothed one"""
        raw = Point(float(raw[0]), float(raw[1]))
        self._history.append(raw)

        # nothing to smooth against yet
        if len(self._history) < 2:
            return raw

        avg_x, avg_y = self._weighted_average()
        f = self.smoothing_factor
        return Point(
            raw.x * (1 - f) + avg_x * f,
            raw.y * (1 - f) + avg_y * f,
        )

    def _weighted_average(self):
        # weight i / (1 + 2 + ... + n), newest point gets weight n
        n = len(self._history)
        total = n * (n + 1) / 2
        avg_x = 0.0
        avg_y = 0.0
        for i, p in enumerate(self._history, start=1):
            w = i / total
            avg_x += p.x * w
            avg_y += p.y * w
        return avg_x, avg_y

    def reset(self):
        """empty the history so the next stroke starts clean"""
        self._history.clear()

    def __len__(self):
        return len(self._history)
