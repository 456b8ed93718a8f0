import logging
import sys

import cv2
import numpy as np

from core.camera import Camera
from core.hand_tracker import HandTracker, draw_landmarks
from core.pipeline import PipelineContext, FrameReport, process_frame
from core.session import DetectionSession, AcquisitionError
from core.state_manager import StateManager, Mode
from app.canvas import Canvas, StrokeRenderer
from app.draggable import DraggableImage
from app.ui import UI
from app.config import (
    CANVAS_WIDTH, CANVAS_HEIGHT, SHOW_LANDMARKS, MIRROR_INPUT,
    WINDOW_NAME, LOG_FILE, LOG_LEVEL,
)

logger = logging.getLogger("air_canvas")


def _setup_logging():
    # everything goes to the log file, only warnings and up hit the console
    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    fmt = logging.Formatter("%(asctime)s  %(name)s  %(message)s", datefmt="%H:%M:%S")

    file_handler = logging.FileHandler(LOG_FILE, mode="a")
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(fmt)
    root.addHandler(console)


def _start(session, ctx, redraw):
    # loading the model blocks for a while, get the indicator on screen first
    ctx.state.set_loading(True)
    redraw()
    cv2.waitKey(1)
    try:
        session.start()
    except AcquisitionError as e:
        # stay idle, user can hit space again to retry
        print(f"\n{e}")
        ctx.state.set_error(str(e))
        return False
    finally:
        ctx.state.set_loading(False)
    ctx.begin_session()
    return True


def _stop(session, ctx):
    session.stop()
    ctx.end_session()


def _log_transition(event, state):
    if event == "toggle":
        logger.debug("pen=%s drag=%s", state.pen_enabled, state.drag_enabled)
    elif event == "error":
        logger.error("pipeline error: %s", state.error)


def main():
    _setup_logging()

    state = StateManager()
    state.add_listener(_log_transition)
    canvas = Canvas(CANVAS_WIDTH, CANVAS_HEIGHT)
    image = DraggableImage((canvas.width, canvas.height))
    ctx = PipelineContext(state, StrokeRenderer(canvas), image)
    session = DetectionSession(Camera, HandTracker)
    ui = UI()
    state.add_listener(lambda event, s: ui.reset_fps() if event == "detecting" else None)

    preview = np.zeros((canvas.height, canvas.width, 3), dtype=np.uint8)
    report = FrameReport()

    def render():
        display = canvas.blend_onto(preview.copy())
        if state.mode is Mode.DRAG:
            display = image.draw_onto(display)
        display = ui.draw_overlay(display, state, report.hand_seen)
        cv2.imshow(WINDOW_NAME, display)

    print("Air Canvas started. SPACE starts/stops the camera, 'm' switches mode, "
          "'c' clears, 's' saves the drawing, 'q' quits.")
    print("Pinch thumb and index finger to toggle the pen (draw) or grabbing (drag).")

    cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW_NAME, canvas.width, canvas.height)

    try:
        while True:
            report = FrameReport()
            frame, result = session.next_frame()

            if session.active and session.lost:
                _stop(session, ctx)
                state.set_error(session.last_error or "camera feed lost")
            elif frame is not None:
                report = process_frame(ctx, result)
                # raw frame -> mirrored preview at canvas size
                preview = cv2.resize(cv2.flip(frame, 1), (canvas.width, canvas.height))
                if SHOW_LANDMARKS:
                    preview = draw_landmarks(preview, result, mirror=MIRROR_INPUT)

            render()

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q') or key == 27:  # q or ESC
                break
            elif key == ord(' '):
                if session.active:
                    _stop(session, ctx)
                else:
                    _start(session, ctx, render)
            elif key == ord('m'):
                ctx.switch_mode()
            elif key == ord('c'):
                ctx.clear()
            elif key == ord('s'):
                canvas.save_drawing()

            # also quit if the window X button is clicked
            if cv2.getWindowProperty(WINDOW_NAME, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        _stop(session, ctx)
        cv2.destroyAllWindows()

    return 0


if __name__ == "__main__":
    sys.exit(main())
