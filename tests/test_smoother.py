"""
tests for the fingertip smoother.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from core.landmarks import Point
from core.smoother import PointSmoother


class TestSmoothing(unittest.TestCase):

    def setUp(self):
        self.sm = PointSmoother(smoothing_factor=0.4, point_memory=2)

    def test_first_point_passes_through(self):
        out = self.sm.smooth((0, 0))
        self.assertEqual(out, Point(0.0, 0.0))

    def test_known_values(self):
        """(0,0) then (10,0): trend 6.67, output 10*0.6 + 6.67*0.4"""
        self.sm.smooth((0, 0))
        out = self.sm.smooth((10, 0))
        self.assertAlmostEqual(out.x, 10 * 0.6 + (20 / 3) * 0.4)
        self.assertAlmostEqual(out.x, 8.667, places=3)
        self.assertAlmostEqual(out.y, 0.0)

    def test_history_is_bounded(self):
        for i in range(10):
            self.sm.smooth((i, i))
            self.assertLessEqual(len(self.sm), 2)
        # oldest points got evicted first
        self.assertEqual(self.sm.history, [Point(8.0, 8.0), Point(9.0, 9.0)])

    def test_steady_input_converges(self):
        out = None
        for _ in range(5):
            out = self.sm.smooth((123.5, 42.0))
        self.assertAlmostEqual(out.x, 123.5)
        self.assertAlmostEqual(out.y, 42.0)

    def test_steady_after_motion_has_no_drift(self):
        self.sm.smooth((0, 0))
        self.sm.smooth((50, 80))
        out = None
        for _ in range(3):
            out = self.sm.smooth((100, 100))
        self.assertAlmostEqual(out.x, 100.0)
        self.assertAlmostEqual(out.y, 100.0)

    def test_output_between_trend_and_raw(self):
        self.sm.smooth((0, 0))
        out = self.sm.smooth((30, 0))
        self.assertGreater(out.x, 0)
        self.assertLess(out.x, 30)

    def test_reset_empties_history(self):
        self.sm.smooth((0, 0))
        self.sm.smooth((10, 0))
        self.sm.reset()
        self.assertEqual(len(self.sm), 0)
        # first point after reset is a pass-through again
        self.assertEqual(self.sm.smooth((500, 500)), Point(500.0, 500.0))


class TestLongerMemory(unittest.TestCase):

    def test_three_point_weights(self):
        sm = PointSmoother(smoothing_factor=0.5, point_memory=3)
        sm.smooth((0, 0))
        sm.smooth((6, 0))
        out = sm.smooth((12, 0))
        # weights 1/6, 2/6, 3/6 -> trend = (0 + 12 + 36) / 6 = 8
        self.assertAlmostEqual(out.x, 12 * 0.5 + 8 * 0.5)

    def test_factor_zero_is_raw(self):
        sm = PointSmoother(smoothing_factor=0.0)
        sm.smooth((0, 0))
        self.assertEqual(sm.smooth((10, 4)), Point(10.0, 4.0))

    def test_memory_of_one_never_smooths(self):
        sm = PointSmoother(point_memory=1)
        sm.smooth((0, 0))
        self.assertEqual(sm.smooth((10, 4)), Point(10.0, 4.0))


class TestConfig(unittest.TestCase):

    def test_factor_out_of_range(self):
        with self.assertRaises(ValueError):
            PointSmoother(smoothing_factor=1.5)
        with self.assertRaises(ValueError):
            PointSmoother(smoothing_factor=-0.1)

    def test_memory_too_small(self):
        with self.assertRaises(ValueError):
            PointSmoother(point_memory=0)


if __name__ == "__main__":
    unittest.main()
