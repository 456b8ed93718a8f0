import logging
import math
import time

from app.config import PINCH_THRESHOLD, PEN_COOLDOWN_MS

logger = logging.getLogger(__name__)


def _now_ms():
    return time.monotonic() * 1000.0


class PinchDetector:
    """
    turns thumb/index distance into a toggle event.

    fires only on the not-pinched -> pinched edge and only if the
    cooldown has passed since the last toggle, so holding a pinch
    or a shaky detection doesnt flip the pen on and off.
    """

    def __init__(self, threshold=PINCH_THRESHOLD, cooldown_ms=PEN_COOLDOWN_MS, clock=_now_ms):
        if threshold <= 0:
            raise ValueError(f"pinch threshold must be positive, got {threshold}")
        if cooldown_ms < 0:
            raise ValueError(f"cooldown cant be negative, got {cooldown_ms}")
        self.threshold = threshold
        self.cooldown_ms = cooldown_ms
        self._clock = clock

        self.is_pinched = False
        self.last_toggle_ms = None  # None = never toggled this session
        self.last_distance = None

    @staticmethod
    def pinch_distance(hand):
        """euclidean thumb tip -> index tip distance in normalized units"""
        thumb = hand.thumb_tip
        index = hand.index_tip
        return math.hypot(thumb.x - index.x, thumb.y - index.y)

    def update(self, hand, now_ms=None):
        """
        feed one frame. hand is a Hand or None when nothing was detected.
        returns True if a toggle fired this frame.
        """
        if hand is None:
            # hand vanished mid-pinch: drop the flag, never count it as an edge
            self.is_pinched = False
            self.last_distance = None
            return False

        if now_ms is None:
            now_ms = self._clock()

        distance = self.pinch_distance(hand)
        self.last_distance = distance
        pinched_now = distance < self.threshold

        fired = False
        if pinched_now and not self.is_pinched and self._cooled_down(now_ms):
            self.last_toggle_ms = now_ms
            fired = True
            logger.debug("pinch toggle at %.0fms (dist=%.4f)", now_ms, distance)

        self.is_pinched = pinched_now
        return fired

    def _cooled_down(self, now_ms):
        if self.last_toggle_ms is None:
            return True
        return now_ms - self.last_toggle_ms > self.cooldown_ms

    def reset(self):
        """forget everything, used when a detecting session starts"""
        self.is_pinched = False
        self.last_toggle_ms = None
        self.last_distance = None
