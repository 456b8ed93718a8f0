import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    DRAW = "draw"
    DRAG = "drag"


class StateManager:
    """
    keeps track of which mode we're in and what the pinch has toggled.

    pen_enabled and drag_enabled are separate flags, a pinch only flips
    the one that belongs to the current mode. toggles are ignored while
    idle (no camera session running).

    listeners get called as listener(event, state) on transitions only,
    never once per frame.
    """

    def __init__(self, mode=Mode.DRAW):
        self.mode = Mode(mode)
        self.detecting = False
        self.pen_enabled = False
        self.drag_enabled = False
        self.error = None
        self.loading = False
        self._listeners = []

    def add_listener(self, callback):
        self._listeners.append(callback)

    def _notify(self, event):
        for cb in self._listeners:
            cb(event, self)

    # --- session ---

    def start_detecting(self):
        if self.detecting:
            return
        self.detecting = True
        self.error = None
        self._notify("detecting")

    def stop_detecting(self):
        if not self.detecting:
            return
        self.detecting = False
        self.disable_all()
        self._notify("idle")

    def set_loading(self, loading):
        """true while the camera and model are being set up"""
        if self.loading == loading:
            return
        self.loading = loading
        if loading:
            self.error = None
        self._notify("loading")

    def set_error(self, message):
        self.error = message
        self._notify("error")

    # --- toggles ---

    def toggle(self):
        """
        apply one pinch event. returns the flag name that flipped,
        or None if nothing changed.
        """
        if not self.detecting:
            return None
        if self.mode is Mode.DRAW:
            self.pen_enabled = not self.pen_enabled
            flag = "pen"
        else:
            self.drag_enabled = not self.drag_enabled
            flag = "drag"
        logger.info("%s %s", flag, "enabled" if self.is_enabled(flag) else "disabled")
        self._notify("toggle")
        return flag

    def is_enabled(self, flag):
        return self.pen_enabled if flag == "pen" else self.drag_enabled

    def disable_all(self):
        self.pen_enabled = False
        self.drag_enabled = False

    def set_mode(self, mode):
        """switch modes. both flags always come back disabled."""
        self.mode = Mode(mode)
        self.disable_all()
        logger.info("mode switched to %s", self.mode.value)
        self._notify("mode")

    def next_mode(self):
        return Mode.DRAG if self.mode is Mode.DRAW else Mode.DRAW
