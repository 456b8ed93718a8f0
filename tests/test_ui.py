"""
tests for the overlay: fps counter and the status pills.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from unittest import mock
import numpy as np
from app.ui import UI
from core.state_manager import StateManager


class TestFps(unittest.TestCase):

    def test_idle_time_doesnt_count(self):
        with mock.patch("app.ui.time") as fake_time:
            fake_time.time.return_value = 0.0
            ui = UI()
            # sat idle for a minute, then detection starts
            fake_time.time.return_value = 60.0
            ui.reset_fps()
            fake_time.time.return_value = 60.5
            ui.update_fps()
        self.assertEqual(ui.fps, 2)

    def test_without_reset_idle_gap_drags_fps_down(self):
        with mock.patch("app.ui.time") as fake_time:
            fake_time.time.return_value = 0.0
            ui = UI()
            fake_time.time.return_value = 60.0
            ui.update_fps()
        self.assertEqual(ui.fps, 0)

    def test_reset_drops_old_samples(self):
        ui = UI()
        ui._fps_samples = [30.0] * 10
        ui.fps = 30
        ui.reset_fps()
        self.assertEqual(ui._fps_samples, [])
        self.assertEqual(ui.fps, 0)


class TestOverlay(unittest.TestCase):

    def draw(self, state):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        return UI().draw_overlay(frame, state)

    def test_loading_pill_drawn(self):
        idle = self.draw(StateManager())
        state = StateManager()
        state.set_loading(True)
        loading = self.draw(state)
        # pill sits under the fps slot on the left
        self.assertFalse(np.array_equal(idle[40:80, :320], loading[40:80, :320]))

    def test_loading_replaces_idle_hint(self):
        idle = self.draw(StateManager())
        state = StateManager()
        state.set_loading(True)
        loading = self.draw(state)
        mid = slice(225, 250)
        self.assertTrue(idle[mid].any())
        self.assertFalse(loading[mid].any())

    def test_returns_same_frame(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        self.assertIs(UI().draw_overlay(frame, StateManager()), frame)


if __name__ == "__main__":
    unittest.main()
