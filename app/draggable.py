import logging

import cv2
import numpy as np

from app.config import DRAG_IMAGE_PATH, DRAG_IMAGE_SIZE, DRAG_IMAGE_START
from core.landmarks import Point

logger = logging.getLogger(__name__)


def _placeholder(size):
    """simple gradient card so drag mode works without an image file"""
    w, h = size
    ramp = np.linspace(60, 220, w, dtype=np.uint8)
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[:, :, 0] = ramp
    img[:, :, 1] = ramp[::-1]
    img[:, :, 2] = 140
    cv2.rectangle(img, (0, 0), (w - 1, h - 1), (255, 255, 255), 2)
    cv2.putText(img, "drag me", (12, h // 2), cv2.FONT_HERSHEY_SIMPLEX,
                0.8, (255, 255, 255), 2, cv2.LINE_AA)
    return img


class DraggableImage:
    """an image on the canvas whose top-left corner follows the fingertip"""

    def __init__(self, canvas_size, path=DRAG_IMAGE_PATH, size=DRAG_IMAGE_SIZE,
                 position=DRAG_IMAGE_START):
        self.canvas_w, self.canvas_h = canvas_size
        self.image = None
        if path:
            self.image = cv2.imread(path)
            if self.image is None:
                logger.warning("couldnt read drag image %s, using placeholder", path)
        if self.image is None:
            self.image = _placeholder(size)
        # never bigger than the canvas
        h, w = self.image.shape[:2]
        if w > self.canvas_w or h > self.canvas_h:
            scale = min(self.canvas_w / w, self.canvas_h / h)
            self.image = cv2.resize(self.image, (max(1, int(w * scale)), max(1, int(h * scale))))
        self.position = self._clamp(position)

    @property
    def size(self):
        h, w = self.image.shape[:2]
        return w, h

    def _clamp(self, point):
        w, h = self.size
        x = min(max(float(point[0]), 0.0), float(self.canvas_w - w))
        y = min(max(float(point[1]), 0.0), float(self.canvas_h - h))
        return Point(x, y)

    def move_to(self, point):
        self.position = self._clamp(point)
        return self.position

    def draw_onto(self, frame):
        w, h = self.size
        x, y = int(self.position.x), int(self.position.y)
        frame[y:y + h, x:x + w] = self.image
        return frame
