import time

import cv2

from app.config import UI_FONT_SCALE, UI_THICKNESS
from core.state_manager import Mode

GREEN = (0, 180, 0)
RED = (0, 0, 200)
GRAY = (150, 150, 150)
WHITE = (255, 255, 255)
BLUE = (160, 90, 0)

KEY_HINTS = "SPACE start/stop   M mode   C clear   S save   Q quit"


class UI:
    """handles all the overlay stuff - fps, mode, pen/drag status, errors"""

    def __init__(self):
        self.prev_time = time.time()
        self.fps = 0
        self._fps_samples = []

    def reset_fps(self):
        """forget the old timing, e.g. after sitting idle for a while"""
        self.prev_time = time.time()
        self._fps_samples = []
        self.fps = 0

    def update_fps(self):
        now = time.time()
        dt = now - self.prev_time
        self.prev_time = now
        if dt > 0:
            self._fps_samples.append(1.0 / dt)
        # average over last 10 samples so it doesnt jump around
        if len(self._fps_samples) > 10:
            self._fps_samples = self._fps_samples[-10:]
        self.fps = int(sum(self._fps_samples) / len(self._fps_samples)) if self._fps_samples else 0

    def _draw_pill(self, frame, text, x, y, color, bg=(40, 40, 40)):
        """draw text with a pill-shaped background, returns the right edge"""
        font = cv2.FONT_HERSHEY_SIMPLEX
        sz, baseline = cv2.getTextSize(text, font, UI_FONT_SCALE, UI_THICKNESS)
        pad_x, pad_y = 10, 6
        x1, y1 = x, y - sz[1] - pad_y
        x2, y2 = x + sz[0] + pad_x * 2, y + pad_y + baseline

        overlay = frame.copy()
        cv2.rectangle(overlay, (x1, y1), (x2, y2), bg, -1)
        cv2.addWeighted(overlay, 0.65, frame, 0.35, 0, frame)
        cv2.putText(frame, text, (x + pad_x, y), font, UI_FONT_SCALE, color,
                    UI_THICKNESS, cv2.LINE_AA)
        return x2

    def _centered_text(self, frame, text, y, color, scale=0.5):
        w = frame.shape[1]
        sz = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, 1)[0]
        cv2.putText(frame, text, ((w - sz[0]) // 2, y), cv2.FONT_HERSHEY_SIMPLEX,
                    scale, color, 1, cv2.LINE_AA)

    def draw_overlay(self, frame, state, hand_seen=False):
        """draw all the UI elements onto the frame"""
        h, w = frame.shape[:2]

        if state.detecting:
            self.update_fps()
            fps_color = (0, 255, 0) if self.fps >= 20 else (0, 200, 255) if self.fps >= 12 else (0, 0, 255)
            self._draw_pill(frame, f"FPS: {self.fps}", 8, 28, fps_color)

        # mode - top center
        mode_text = "DRAW" if state.mode is Mode.DRAW else "DRAG IMAGE"
        tsz = cv2.getTextSize(mode_text, cv2.FONT_HERSHEY_SIMPLEX, UI_FONT_SCALE, UI_THICKNESS)[0]
        self._draw_pill(frame, mode_text, (w - tsz[0]) // 2 - 10, 28, WHITE)

        # pinch toggle status - top right
        if state.mode is Mode.DRAW:
            enabled, label = state.pen_enabled, "Pen"
        else:
            enabled, label = state.drag_enabled, "Pinch"
        status = f"{label}: {'Enabled' if enabled else 'Disabled'}"
        ssz = cv2.getTextSize(status, cv2.FONT_HERSHEY_SIMPLEX, UI_FONT_SCALE, UI_THICKNESS)[0]
        self._draw_pill(frame, status, w - ssz[0] - 32, 28, WHITE,
                        bg=GREEN if enabled else RED)

        if state.error:
            self._draw_pill(frame, f"Error: {state.error.splitlines()[0]}", 8, 64, WHITE, bg=RED)

        if state.loading:
            self._draw_pill(frame, "Loading hand detection model...", 8, 64, WHITE, bg=BLUE)
        elif not state.detecting:
            self._centered_text(frame, "Press SPACE to start the camera", h // 2, (200, 200, 200))
        elif not hand_seen:
            self._centered_text(frame, "Show your hand - pinch to toggle", h // 2, (200, 200, 200))

        self._centered_text(frame, KEY_HINTS, h - 14, GRAY, scale=0.45)
        return frame
