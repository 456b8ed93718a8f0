import logging
import time

import cv2

from app.config import CAMERA_WIDTH, CAMERA_HEIGHT, CAMERA_INDEX

logger = logging.getLogger(__name__)


class Camera:
    def __init__(self, src=CAMERA_INDEX, width=CAMERA_WIDTH, height=CAMERA_HEIGHT):
        self.cap = None
        self._src = src
        self.width = width
        self.height = height

        # try a few times in case the camera is slow to init
        for attempt in range(3):
            self.cap = cv2.VideoCapture(src)
            self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
            self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
            if self.cap.isOpened():
                break
            self.cap.release()
            logger.info("camera not ready, retrying (%d/3)...", attempt + 1)
            time.sleep(1)

        if self.cap is None or not self.cap.isOpened():
            self.release()
            raise RuntimeError(
                "couldnt open webcam. check that:\n"
                "  - your camera is plugged in\n"
                "  - no other app is using it\n"
                f"  - camera index {src} is correct (try 0, 1, or 2)"
            )

    def read(self):
        """grab a raw (unmirrored) frame, return success + frame"""
        if self.cap is None or not self.cap.isOpened():
            return False, None

        ret, frame = self.cap.read()
        if not ret or frame is None:
            return False, None
        return True, frame

    def release(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None
