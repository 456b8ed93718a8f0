"""
shared test helpers - fake hands, fake camera, fake tracker.
nothing here opens a real camera or loads the mediapipe model.
"""
from core.landmarks import Hand, DetectionResult, THUMB_TIP, INDEX_TIP


def make_hand(thumb=(0.40, 0.50), index=(0.60, 0.40)):
    """21 landmarks, all parked mid-frame except thumb and index tips"""
    points = [(0.5, 0.6)] * 21
    points[THUMB_TIP] = thumb
    points[INDEX_TIP] = index
    return Hand(points)


def open_hand(index=(0.60, 0.40)):
    """thumb far away from the index tip"""
    return make_hand(thumb=(index[0] - 0.2, index[1] + 0.1), index=index)


def pinched_hand(index=(0.60, 0.40)):
    """thumb basically touching the index tip"""
    return make_hand(thumb=(index[0] + 0.005, index[1]), index=index)


def frame_with(hand, ts=0):
    if hand is None:
        return DetectionResult.empty(ts)
    return DetectionResult({0: hand}, {0: "Right"}, ts)


class FakeCamera:
    def __init__(self, frames=None, fail_release=False):
        self.frames = list(frames) if frames is not None else None
        self.release_calls = 0
        self.fail_release = fail_release

    def read(self):
        if self.frames is None:
            return True, "frame"
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.release_calls += 1
        if self.fail_release:
            raise OSError("device busy")


class FakeTracker:
    def __init__(self, results=None, fail_close=False, fail_detect=False):
        self.results = list(results or [])
        self.close_calls = 0
        self.fail_close = fail_close
        self.fail_detect = fail_detect
        self.seen = []

    def detect(self, frame, timestamp_ms):
        self.seen.append((frame, timestamp_ms))
        if self.fail_detect:
            raise RuntimeError("graph error")
        if self.results:
            return self.results.pop(0)
        return DetectionResult.empty(timestamp_ms)

    def close(self):
        self.close_calls += 1
        if self.fail_close:
            raise RuntimeError("landmarker already closed")
