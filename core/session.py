"""
one detecting session = camera + landmarker, from start to stop.

start() either gets both or neither. stop() always tries to release
everything, even if one of the release steps blows up, and is safe to
call any number of times.
"""
import logging
import time

from app.config import MAX_FRAME_DROPS
from core.landmarks import DetectionResult

logger = logging.getLogger(__name__)


class AcquisitionError(RuntimeError):
    """camera or hand tracker couldnt be set up"""


def _now_ms():
    return time.monotonic() * 1000.0


class DetectionSession:

    def __init__(self, camera_factory, tracker_factory, clock=_now_ms,
                 max_frame_drops=MAX_FRAME_DROPS):
        self._camera_factory = camera_factory
        self._tracker_factory = tracker_factory
        self._clock = clock
        self.max_frame_drops = max_frame_drops
        self.camera = None
        self.tracker = None
        self.active = False
        self.frame_drops = 0
        self.last_error = None

    def start(self):
        if self.active:
            return self
        try:
            camera = self._camera_factory()
        except Exception as e:
            logger.error("camera init failed: %s", e)
            raise AcquisitionError(f"Camera error: {e}") from e

        try:
            tracker = self._tracker_factory()
        except Exception as e:
            logger.error("hand tracker init failed: %s", e)
            self._release_camera(camera)
            raise AcquisitionError(f"Hand tracker error: {e}") from e

        self.camera = camera
        self.tracker = tracker
        self.frame_drops = 0
        self.last_error = None
        self.active = True
        logger.info("detection session started")
        return self

    def stop(self):
        """release camera and tracker. each step is independent."""
        # no more frames from here on, even if one is half processed
        self.active = False
        camera, self.camera = self.camera, None
        tracker, self.tracker = self.tracker, None

        if camera is not None:
            self._release_camera(camera)
        if tracker is not None:
            try:
                tracker.close()
            except Exception:
                logger.exception("failed to close hand tracker")
        if camera is not None or tracker is not None:
            logger.info("detection session stopped")

    @staticmethod
    def _release_camera(camera):
        try:
            camera.release()
        except Exception:
            logger.exception("failed to release camera")

    @property
    def lost(self):
        """no usable frames (camera or detector) for too long"""
        return self.frame_drops >= self.max_frame_drops

    def next_frame(self):
        """
        grab a frame and run detection on it. returns (frame, result),
        or (None, None) if there was no frame this time.
        """
        if not self.active:
            return None, None

        ok, frame = self.camera.read()
        if not ok:
            self.frame_drops += 1
            self.last_error = "camera feed lost"
            return None, None

        ts = self._clock()
        try:
            result = self.tracker.detect(frame, ts)
        except Exception as e:
            # mediapipe can choke on a weird frame. treat it as "no hand"
            # and let the drop counter end the session if it keeps happening
            logger.exception("hand detection failed")
            self.frame_drops += 1
            self.last_error = f"Hand tracker error: {e}"
            return frame, DetectionResult.empty(ts)

        self.frame_drops = 0
        return frame, result

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
