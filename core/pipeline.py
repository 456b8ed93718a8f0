"""
per-frame gesture -> drawing pipeline.

    detection result -> pinch detector (may toggle pen/drag)
                     -> fingertip to canvas pixels (mirrored once here)
                     -> point smoother
                     -> stroke renderer, or image position in drag mode

all the per-frame state lives in one PipelineContext that the main loop
passes into process_frame() every frame. nothing in here touches the
UI; only toggle/mode changes are announced, through the StateManager
listeners.
"""
import logging
import math
from typing import NamedTuple, Optional

from app.canvas import Segment
from app.config import MIRROR_INPUT, MAX_SEGMENT_JUMP, PEN_COOLDOWN_MS, DRAG_COOLDOWN_MS
from core.landmarks import Point, to_canvas_point
from core.pinch import PinchDetector
from core.smoother import PointSmoother
from core.state_manager import Mode

logger = logging.getLogger(__name__)


class FrameReport(NamedTuple):
    """what happened during one frame, mostly for the UI and tests"""
    hand_seen: bool = False
    toggled: Optional[str] = None     # "pen" / "drag" if a pinch flipped one
    fingertip: Optional[Point] = None  # raw fingertip in canvas pixels
    segment: Optional[Segment] = None  # drawn this frame
    drag_position: Optional[Point] = None


class PipelineContext:
    """
    everything the frame loop mutates: pinch state, smoothing history,
    the renderer's previous point and the drag target.
    """

    def __init__(self, state, renderer, image=None, pinch=None, smoother=None,
                 mirror=MIRROR_INPUT, max_jump=MAX_SEGMENT_JUMP,
                 cooldowns=None):
        self.state = state
        self.renderer = renderer
        self.image = image
        self.pinch = pinch or PinchDetector()
        self.smoother = smoother or PointSmoother()
        self.mirror = mirror
        self.max_jump = max_jump
        self.cooldowns = cooldowns or {Mode.DRAW: PEN_COOLDOWN_MS, Mode.DRAG: DRAG_COOLDOWN_MS}
        self._sync_cooldown()

    @property
    def canvas(self):
        return self.renderer.canvas

    def _sync_cooldown(self):
        self.pinch.cooldown_ms = self.cooldowns.get(self.state.mode, self.pinch.cooldown_ms)

    def reset_stroke(self):
        """drop the previous point and smoothing history together"""
        self.renderer.lift()
        self.smoother.reset()

    def clear(self):
        """wipe the drawing and every bit of stroke state with it"""
        self.renderer.clear()
        self.smoother.reset()
        logger.info("canvas cleared")

    def switch_mode(self, mode=None):
        """change app mode; flags go off and the canvas is cleared"""
        if mode is None:
            mode = self.state.next_mode()
        self.state.set_mode(mode)
        self._sync_cooldown()
        self.clear()

    def begin_session(self):
        self.pinch.reset()
        self.reset_stroke()
        self.state.start_detecting()

    def end_session(self):
        self.state.stop_detecting()
        self.pinch.reset()
        self.reset_stroke()


def process_frame(ctx, result, now_ms=None):
    """run one frame of detections through the pipeline"""
    state = ctx.state
    if not state.detecting:
        return FrameReport()

    hand = result.primary if result is not None else None

    toggled = None
    if ctx.pinch.update(hand, now_ms):
        toggled = state.toggle()
        if toggled:
            # fresh stroke both when turning on and off
            ctx.reset_stroke()

    if hand is None:
        # nothing to draw this frame, keep the stroke where it was
        return FrameReport(toggled=toggled)

    canvas = ctx.canvas
    tip = to_canvas_point(hand.index_tip, canvas.width, canvas.height, ctx.mirror)

    segment = None
    drag_pos = None
    if state.pen_enabled:
        segment = _draw(ctx, tip)
    elif state.drag_enabled and ctx.image is not None:
        drag_pos = _drag(ctx, tip)
    elif ctx.renderer.prev_point is not None:
        ctx.reset_stroke()

    return FrameReport(True, toggled, tip, segment, drag_pos)


def _draw(ctx, tip):
    smoothed = ctx.smoother.smooth(tip)
    prev = ctx.renderer.prev_point
    if prev is not None and ctx.max_jump:
        jump = math.hypot(smoothed.x - prev.x, smoothed.y - prev.y)
        if jump > ctx.max_jump:
            # hand re-entered somewhere else, start over instead of a long line
            logger.debug("jump of %.0fpx, starting a new stroke", jump)
            ctx.reset_stroke()
            smoothed = ctx.smoother.smooth(tip)
    return ctx.renderer.render(smoothed)


def _drag(ctx, tip):
    # the image only follows while the fingers are actually pinched
    if not ctx.pinch.is_pinched:
        ctx.smoother.reset()
        return None
    return ctx.image.move_to(ctx.smoother.smooth(tip))
