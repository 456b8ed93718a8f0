"""
landmark value types shared by the whole pipeline.

the hand tracker produces these once per frame, everything downstream
only reads them. coordinates are normalized 0-1 relative to the
unmirrored camera frame until to_canvas_point() maps them to pixels.
"""
from typing import NamedTuple


# landmark indices (mediapipe hand convention)
THUMB_TIP = 4
INDEX_TIP = 8
HAND_LANDMARK_COUNT = 21


class Point(NamedTuple):
    x: float
    y: float


class Hand(tuple):
    """fixed 21-point landmark list for one hand. immutable."""

    __slots__ = ()

    def __new__(cls, points):
        points = tuple(Point(float(p[0]), float(p[1])) for p in points)
        if len(points) != HAND_LANDMARK_COUNT:
            raise ValueError(
                f"a hand needs {HAND_LANDMARK_COUNT} landmarks, got {len(points)}"
            )
        return super().__new__(cls, points)

    @property
    def thumb_tip(self):
        return self[THUMB_TIP]

    @property
    def index_tip(self):
        return self[INDEX_TIP]


class DetectionResult:
    """
    zero or more hands seen in one frame, keyed by hand slot
    (0 = first hand the detector reported).
    """

    def __init__(self, hands=None, handedness=None, timestamp_ms=0):
        self.hands = dict(hands or {})
        self.handedness = dict(handedness or {})
        self.timestamp_ms = timestamp_ms

    @classmethod
    def empty(cls, timestamp_ms=0):
        return cls(timestamp_ms=timestamp_ms)

    @property
    def primary(self):
        """the hand that drives gestures, or None if nothing was seen"""
        if not self.hands:
            return None
        return self.hands[min(self.hands)]

    def __len__(self):
        return len(self.hands)

    def __bool__(self):
        return bool(self.hands)

    def __repr__(self):
        return f"DetectionResult(hands={len(self.hands)}, t={self.timestamp_ms})"


def to_canvas_point(point, width, height, mirror=True):
    """
    map a normalized landmark to canvas pixels. this is the only place
    x gets mirrored, so the stroke moves the same way as the preview.
    """
    x = 1.0 - point.x if mirror else point.x
    return Point(x * width, point.y * height)
