"""Tests for nearest-color palette matching."""

import unittest

from blockstack.color_def import Color, DEFAULT_COLORS, color_distance2, nearest_color
from blockstack.errors import ConfigError, EmptyPaletteError


class TestNearestColor(unittest.TestCase):
    def test_red_sample(self) -> None:
        palette = [Color("red", (0, 0, 255)), Color("blue", (255, 0, 0))]
        self.assertEqual(nearest_color((10, 5, 250), palette).name, "red")

    def test_float_sample(self) -> None:
        palette = [Color("red", (0, 0, 255)), Color("blue", (255, 0, 0))]
        self.assertEqual(nearest_color((200.4, 3.1, 20.9), palette).name, "blue")

    def test_tie_goes_to_first_entry(self) -> None:
        palette = [Color("a", (0, 0, 0)), Color("b", (20, 0, 0)), Color("c", (20, 0, 0))]
        self.assertEqual(nearest_color((10, 0, 0), palette).name, "a")
        self.assertEqual(nearest_color((20, 0, 0), palette).name, "b")

    def test_empty_palette(self) -> None:
        with self.assertRaises(EmptyPaletteError):
            nearest_color((0, 0, 0), [])
        self.assertTrue(issubclass(EmptyPaletteError, ConfigError))

    def test_distance_is_unweighted_square(self) -> None:
        self.assertEqual(color_distance2((1, 2, 3), (4, 6, 3)), 25.0)

    def test_default_palette_matches_itself(self) -> None:
        for color in DEFAULT_COLORS:
            self.assertIs(nearest_color(color.bgr, DEFAULT_COLORS), color)


if __name__ == "__main__":
    unittest.main()
