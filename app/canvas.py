import logging
from datetime import datetime
from typing import NamedTuple

import cv2
import numpy as np

from app.config import (
    CANVAS_WIDTH, CANVAS_HEIGHT, STROKE_COLOR, STROKE_THICKNESS, CURVE_STEPS,
)
from core.landmarks import Point

logger = logging.getLogger(__name__)


class Segment(NamedTuple):
    """one quadratic piece of a stroke"""
    start: Point
    control: Point
    end: Point
    color: tuple
    thickness: int


def quadratic_curve(start, control, end, steps=CURVE_STEPS):
    """sample a quadratic bezier into steps+1 points, endpoints included"""
    t = np.linspace(0.0, 1.0, steps + 1)[:, None]
    p0 = np.asarray(start, dtype=np.float64)
    p1 = np.asarray(control, dtype=np.float64)
    p2 = np.asarray(end, dtype=np.float64)
    return (1 - t) ** 2 * p0 + 2 * (1 - t) * t * p1 + t ** 2 * p2


class Canvas:
    """
    the drawing surface. we keep a separate black layer and blend it
    onto the camera feed each frame. the stroke path only ever grows,
    clear() is the one way to wipe it.
    """

    def __init__(self, width=CANVAS_WIDTH, height=CANVAS_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.surface = np.zeros((height, width, 3), dtype=np.uint8)
        # finished strokes, each a list of segments
        self.strokes = []
        self._current_stroke = []

    @property
    def segments(self):
        """every segment drawn since the last clear, in order"""
        out = [seg for stroke in self.strokes for seg in stroke]
        out.extend(self._current_stroke)
        return out

    def draw_curve(self, segment, steps=CURVE_STEPS):
        pts = quadratic_curve(segment.start, segment.control, segment.end, steps)
        pts = np.round(pts).astype(np.int32).reshape(-1, 1, 2)
        cv2.polylines(self.surface, [pts], False, segment.color,
                      segment.thickness, cv2.LINE_AA)
        self._current_stroke.append(segment)

    def finish_stroke(self):
        """call this when the user lifts the pen"""
        if self._current_stroke:
            self.strokes.append(self._current_stroke.copy())
            self._current_stroke.clear()

    def clear(self):
        """wipe everything"""
        self.surface = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self.strokes.clear()
        self._current_stroke.clear()

    def save_drawing(self):
        """save just the drawing on a white background"""
        white = np.ones_like(self.surface) * 255
        gray = cv2.cvtColor(self.surface, cv2.COLOR_BGR2GRAY)
        _, mask = cv2.threshold(gray, 1, 255, cv2.THRESH_BINARY)
        mask_inv = cv2.bitwise_not(mask)

        bg = cv2.bitwise_and(white, white, mask=mask_inv)
        fg = cv2.bitwise_and(self.surface, self.surface, mask=mask)
        result = cv2.add(bg, fg)

        filename = f"drawing_{datetime.now().strftime('%Y%m%d_%H%M%S')}.png"
        cv2.imwrite(filename, result)
        logger.info("saved drawing to %s", filename)
        return filename

    def blend_onto(self, frame):
        """overlay our drawing onto a frame of the same size"""
        gray = cv2.cvtColor(self.surface, cv2.COLOR_BGR2GRAY)
        _, mask = cv2.threshold(gray, 1, 255, cv2.THRESH_BINARY)
        mask_inv = cv2.bitwise_not(mask)

        bg = cv2.bitwise_and(frame, frame, mask=mask_inv)
        fg = cv2.bitwise_and(self.surface, self.surface, mask=mask)

        return cv2.add(bg, fg)


class StrokeRenderer:
    """
    connects consecutive smoothed points with quadratic segments.

    the first point after a reset is only remembered, never connected,
    so a stroke cant start from a stale position.
    """

    def __init__(self, canvas, color=STROKE_COLOR, thickness=STROKE_THICKNESS,
                 steps=CURVE_STEPS):
        self.canvas = canvas
        self.color = color
        self.thickness = thickness
        self.steps = steps
        self.prev_point = None

    def render(self, point):
        """
        draw from the previous point to this one. returns the new
        Segment, or None when this point just starts a stroke.
        """
        point = Point(float(point[0]), float(point[1]))
        prev = self.prev_point
        self.prev_point = point
        if prev is None:
            return None

        control = Point((prev.x + point.x) / 2, (prev.y + point.y) / 2)
        segment = Segment(prev, control, point, self.color, self.thickness)
        self.canvas.draw_curve(segment, self.steps)
        return segment

    def lift(self):
        """end the current stroke, keep what was drawn"""
        self.prev_point = None
        self.canvas.finish_stroke()

    def clear(self):
        """wipe the canvas and forget where the pen was"""
        self.prev_point = None
        self.canvas.clear()
