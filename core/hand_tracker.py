import logging
import os

import cv2
import mediapipe as mp

from app.config import (
    MAX_HANDS, DETECTION_CONFIDENCE, TRACKING_CONFIDENCE, DETECTION_WIDTH, MODEL_FILE,
)
from core.landmarks import Hand, DetectionResult, THUMB_TIP, INDEX_TIP, to_canvas_point

logger = logging.getLogger(__name__)

# new tasks API
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
RunningMode = mp.tasks.vision.RunningMode
HandConnections = mp.tasks.vision.HandLandmarksConnections

# figure out where the model file is (same dir as project root)
MODEL_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), MODEL_FILE)


class HandTracker:
    """wraps the mediapipe hand landmarker, returns DetectionResult per frame"""

    def __init__(self, max_hands=MAX_HANDS, det_conf=DETECTION_CONFIDENCE,
                 track_conf=TRACKING_CONFIDENCE, model_path=MODEL_PATH):
        if not os.path.exists(model_path):
            raise FileNotFoundError(
                f"cant find {model_path} - download it from "
                "https://storage.googleapis.com/mediapipe-models/"
                "hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
            )

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=model_path),
            running_mode=RunningMode.VIDEO,
            num_hands=max_hands,
            min_hand_detection_confidence=det_conf,
            min_tracking_confidence=track_conf,
        )
        self.landmarker = HandLandmarker.create_from_options(options)
        self._det_width = DETECTION_WIDTH
        self._last_ts = -1

    def detect(self, frame, timestamp_ms):
        """
        run the landmarker on a raw BGR frame. landmarks stay normalized
        so downscaling for speed doesnt change them.
        """
        h, w = frame.shape[:2]
        if w > self._det_width:
            scale = self._det_width / w
            frame = cv2.resize(frame, (self._det_width, int(h * scale)))
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)

        # VIDEO mode wants strictly increasing timestamps
        ts = max(int(timestamp_ms), self._last_ts + 1)
        self._last_ts = ts
        result = self.landmarker.detect_for_video(mp_image, ts)

        hands = {}
        handedness = {}
        for slot, hand_lms in enumerate(result.hand_landmarks or []):
            hands[slot] = Hand((lm.x, lm.y) for lm in hand_lms)
            if result.handedness and slot < len(result.handedness):
                handedness[slot] = result.handedness[slot][0].category_name
        return DetectionResult(hands, handedness, ts)

    def close(self):
        self.landmarker.close()


def draw_landmarks(frame, result, mirror=True):
    """
    draw the hand skeleton onto the (mirrored) preview frame.
    thumb and index tips in red, the rest in green.
    """
    if not result:
        return frame

    h, w = frame.shape[:2]
    connections = HandConnections.HAND_CONNECTIONS

    for hand in result.hands.values():
        pts = [to_canvas_point(p, w, h, mirror) for p in hand]
        pts = [(int(p.x), int(p.y)) for p in pts]

        for connection in connections:
            cv2.line(frame, pts[connection.start], pts[connection.end], (0, 255, 0), 2)

        for idx, pt in enumerate(pts):
            color = (0, 0, 255) if idx in (THUMB_TIP, INDEX_TIP) else (0, 255, 0)
            cv2.circle(frame, pt, 5, color, -1)

    return frame
