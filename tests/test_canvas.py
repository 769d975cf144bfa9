import math
import unittest

import numpy as np

from softraster.canvas import Canvas
from softraster.color import Color

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


class TestCanvas(unittest.TestCase):
    def setUp(self):
        self.canvas = Canvas(8, 6)

    def test_initial_state(self):
        self.assertEqual(self.canvas.color.shape, (48, 3))
        self.assertTrue(np.all(np.isneginf(self.canvas.depth)))
        self.assertEqual(self.canvas.get(3, 3), Color(0, 0, 0))

    def test_invalid_size(self):
        with self.assertRaises(ValueError):
            Canvas(0, 10)

    def test_clear_leaves_depth(self):
        self.assertTrue(self.canvas.check_and_set_depth(2, 2, 0.5))
        self.canvas.clear((50, 50, 50))
        self.assertEqual(self.canvas.get(7, 5), Color(50, 50, 50))
        self.assertEqual(self.canvas.depth_at(2, 2), 0.5)
        self.canvas.clear_depth()
        self.assertTrue(math.isinf(self.canvas.depth_at(2, 2)))

    def test_point_out_of_bounds(self):
        for x, y in ((-1, 0), (8, 0), (0, 6), (0, -1)):
            with self.assertRaises(IndexError):
                self.canvas.point(x, y, RED)

    def test_depth_test_same_z_twice(self):
        self.assertTrue(self.canvas.check_and_set_depth(1, 1, 0.25))
        self.assertFalse(self.canvas.check_and_set_depth(1, 1, 0.25))

    def test_depth_test_smaller_z_keeps_color(self):
        if self.canvas.check_and_set_depth(4, 2, 1.0):
            self.canvas.point(4, 2, RED)
        if self.canvas.check_and_set_depth(4, 2, 0.5):
            self.canvas.point(4, 2, BLUE)
        self.assertEqual(self.canvas.get(4, 2), RED)
        self.assertEqual(self.canvas.depth_at(4, 2), 1.0)

    def test_depth_test_rejects_nan(self):
        self.assertFalse(self.canvas.check_and_set_depth(0, 0, float("nan")))

    def test_plot_writes_only_passing_pixels(self):
        self.canvas.check_and_set_depth(1, 0, 5.0)
        xs = np.array([0, 1, 2])
        ys = np.array([0, 0, 0])
        zs = np.array([1.0, 1.0, 1.0])
        seen = []

        def shade(keep):
            seen.append(keep.copy())
            return np.tile(np.array(BLUE, dtype=np.uint8), (int(keep.sum()), 1))

        written = self.canvas.plot(xs, ys, zs, shade)
        self.assertEqual(written, 2)
        self.assertEqual(seen[0].tolist(), [True, False, True])
        self.assertEqual(self.canvas.get(0, 0), BLUE)
        self.assertEqual(self.canvas.get(1, 0), Color(0, 0, 0))
        self.assertEqual(self.canvas.depth_at(1, 0), 5.0)
        self.assertEqual(self.canvas.depth_at(2, 0), 1.0)

    def test_plot_nothing_passes(self):
        self.canvas.depth.fill(10.0)
        written = self.canvas.plot(np.array([0]), np.array([0]), np.array([1.0]), lambda keep: None)
        self.assertEqual(written, 0)

    def test_line_ignores_depth(self):
        self.canvas.depth.fill(100.0)
        self.canvas.line(0, 0, 7, 0, RED)
        for x in range(8):
            self.assertEqual(self.canvas.get(x, 0), RED)

    def test_export_flips_rows(self):
        self.canvas.point(0, 0, RED)
        self.canvas.point(7, 5, BLUE)
        out = self.canvas.export()
        self.assertEqual(out.shape, (6, 8, 3))
        self.assertEqual(tuple(out[5, 0]), RED)
        self.assertEqual(tuple(out[0, 7]), BLUE)
