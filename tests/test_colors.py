from __future__ import annotations

import math
import unittest

import numpy as np

from colors import Color, blend_colors
from errors import ColorParseError, HSVRangeError


class ColorConstructorTests(unittest.TestCase):
    def test_named_constructors(self) -> None:
        self.assertEqual(Color.white().to_tuple(), (1.0, 1.0, 1.0, 1.0))
        self.assertEqual(Color.black().to_tuple(), (0.0, 0.0, 0.0, 1.0))
        self.assertEqual(Color.red().to_tuple(), (1.0, 0.0, 0.0, 1.0))
        self.assertEqual(Color.green().to_tuple(), (0.0, 1.0, 0.0, 1.0))
        self.assertEqual(Color.blue().to_tuple(), (0.0, 0.0, 1.0, 1.0))
        self.assertEqual(Color.transparent().to_tuple(), (0.0, 0.0, 0.0, 0.0))

    def test_default_is_all_zero(self) -> None:
        self.assertEqual(Color(), Color.transparent())
        self.assertEqual(Color.new(0.25, 0.5, 0.75, 1.0), Color(0.25, 0.5, 0.75, 1.0))

    def test_construction_does_not_clamp(self) -> None:
        color = Color(2.0, -1.0, 0.5, 3.0)
        self.assertEqual((color.r, color.g, color.a), (2.0, -1.0, 3.0))

    def test_value_is_rgb_mean_without_alpha(self) -> None:
        self.assertAlmostEqual(Color(0.3, 0.6, 0.9, 0.0).value(), 0.6, places=5)
        self.assertEqual(Color.white().with_a(0.0).value(), 1.0)

    def test_channel_setters_and_functional_updates(self) -> None:
        color = Color.black()
        color.r = 0.5
        color.a = 0.25
        self.assertEqual(color.to_tuple(), (0.5, 0.0, 0.0, 0.25))

        updated = color.with_g(1.0).with_b(0.75)
        self.assertEqual(updated.to_tuple(), (0.5, 1.0, 0.75, 0.25))
        self.assertEqual(color.to_tuple(), (0.5, 0.0, 0.0, 0.25))
        self.assertEqual(Color.red().with_r(0.0).with_a(0.5), Color(0.0, 0.0, 0.0, 0.5))

    def test_equality_is_exact_and_colors_are_unhashable(self) -> None:
        self.assertNotEqual(Color(0.1, 0.0, 0.0, 1.0), Color(0.2, 0.0, 0.0, 1.0))
        self.assertEqual(Color(0.1, 0.0, 0.0, 1.0), Color(0.1, 0.0, 0.0, 1.0))
        with self.assertRaises(TypeError):
            hash(Color.red())

    def test_rgba8_conversions(self) -> None:
        self.assertEqual(Color.from_rgba8(255, 128, 0).to_rgba8(), (255, 128, 0, 255))
        self.assertEqual(Color(2.0, -1.0, 0.5, 1.0).to_rgba8(), (255, 0, 128, 255))
        self.assertEqual(list(Color.blue()), [0.0, 0.0, 1.0, 1.0])


class ColorHexTests(unittest.TestCase):
    def test_parses_with_and_without_prefix(self) -> None:
        expected = (254, 203, 0, 255)
        for text in ("#fecb00", "fecb00", "0xfecb00", "#FECB00", "0xFeCb00"):
            with self.subTest(text=text):
                self.assertEqual(Color.from_hex(text).to_rgba8(), expected)

    def test_parses_alpha(self) -> None:
        color = Color.from_hex("#11223344")
        self.assertEqual(color.to_rgba8(), (0x11, 0x22, 0x33, 0x44))
        self.assertEqual(Color.from_hex("#112233").a, 1.0)

    def test_ignores_trailing_characters_after_alpha(self) -> None:
        self.assertEqual(Color.from_hex("#11223344zz"), Color.from_hex("#11223344"))

    def test_rejects_malformed_input(self) -> None:
        for text in ("", "#", "#12345", "0x1234", "#12345g", "#1234567", "+12345",
                     " 12345", "#1_2345", "#-12345", "#zzzzzz", "#112233g0"):
            with self.subTest(text=text):
                with self.assertRaises(ColorParseError):
                    Color.from_hex(text)

    def test_parse_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Color.from_hex("nothex")

    def test_as_hex_formats_uppercase(self) -> None:
        self.assertEqual(Color.red().as_hex(), "#FF0000")
        self.assertEqual(Color.red().as_hex(include_alpha=True), "#FF0000FF")
        self.assertEqual(Color.transparent().as_hex(True), "#00000000")

    def test_as_hex_clamps_out_of_range_channels(self) -> None:
        self.assertEqual(Color(2.0, -1.0, 0.5, 1.0).as_hex(), "#FF0080")
        self.assertEqual(Color(float("nan"), 0.0, 0.0, 1.0).as_hex(), "#000000")

    def test_hex_round_trip(self) -> None:
        for r, g, b, a in [(0, 0, 0, 0), (255, 255, 255, 255), (254, 203, 0, 255),
                           (1, 127, 128, 200), (17, 34, 51, 68)]:
            color = Color.from_rgba8(r, g, b, a)
            with self.subTest(color=color):
                self.assertEqual(Color.from_hex(color.as_hex(True)), color)
                self.assertEqual(Color.from_hex(color.as_hex(False)), color.with_a(1.0))
                self.assertEqual(Color.from_hex(color.as_hex(True).replace("#", "0x")), color)


class ColorHsvTests(unittest.TestCase):
    def test_primary_hues(self) -> None:
        self.assertEqual(Color.from_hsv(0.0, 1.0, 1.0).to_rgba8(), (255, 0, 0, 255))
        self.assertEqual(Color.from_hsv(0.5, 1.0, 1.0).to_rgba8(), (0, 255, 255, 255))
        self.assertEqual(Color.from_hsv(1.0, 1.0, 1.0).to_rgba8(), (255, 0, 0, 255))

    def test_hue_near_one_wraps_toward_red(self) -> None:
        r, g, b, _ = Color.from_hsv(0.99, 1.0, 1.0).to_rgba8()
        self.assertEqual(r, 255)
        self.assertEqual(g, 0)
        self.assertLess(b, 20)

    def test_zero_saturation_is_grey(self) -> None:
        color = Color.from_hsv(0.3, 0.0, 0.5)
        self.assertEqual(color.to_tuple(), (0.5, 0.5, 0.5, 1.0))

    def test_sum_above_three_is_rejected(self) -> None:
        with self.assertRaises(HSVRangeError):
            Color.from_hsv(1.0, 1.0, 1.01)
        with self.assertRaises(ValueError):
            Color.from_hsv(2.0, 2.0, 0.0)

    def test_sum_of_exactly_three_is_accepted(self) -> None:
        self.assertEqual(Color.from_hsv(1.0, 1.0, 1.0).a, 1.0)


class ColorArithmeticTests(unittest.TestCase):
    def assertColorAlmostEqual(self, first: Color, second: Color) -> None:
        for a, b in zip(first, second):
            self.assertAlmostEqual(a, b, places=5)

    def test_add_then_subtract_is_identity(self) -> None:
        c1 = Color(0.2, 0.4, 0.6, 0.8)
        c2 = Color(0.7, 0.1, 0.9, 0.3)
        self.assertColorAlmostEqual((c1 + c2) - c2, c1)

    def test_scale_then_divide_is_identity(self) -> None:
        c1 = Color(0.2, 0.4, 0.6, 0.8)
        for s in (0.5, 3.0, 7.25):
            self.assertColorAlmostEqual((c1 * s) / s, c1)

    def test_scalar_multiplication_commutes(self) -> None:
        color = Color(0.2, 0.4, 0.6, 0.8)
        self.assertEqual(2 * color, color * 2)

    def test_component_wise_color_operators(self) -> None:
        c1 = Color(0.5, 1.0, 0.25, 1.0)
        c2 = Color(0.5, 0.5, 0.5, 0.5)
        self.assertEqual((c1 * c2).to_tuple(), (0.25, 0.5, 0.125, 0.5))
        self.assertEqual((c1 / c2).to_tuple(), (1.0, 2.0, 0.5, 2.0))
        self.assertEqual((c1 % c2).to_tuple(), (0.0, 0.0, 0.25, 0.0))
        self.assertEqual((Color(1.5, -1.5, 0.75, 1.0) % 1.0).to_tuple(), (0.5, -0.5, 0.75, 0.0))

    def test_arithmetic_may_leave_the_unit_range(self) -> None:
        self.assertEqual((Color.white() + Color.white()).to_tuple(), (2.0, 2.0, 2.0, 2.0))
        self.assertEqual((Color.black() - Color.white()).r, -1.0)

    def test_division_by_zero_propagates_inf_and_nan(self) -> None:
        result = Color(1.0, 0.0, -1.0, 1.0) / 0
        self.assertEqual(result.r, math.inf)
        self.assertTrue(math.isnan(result.g))
        self.assertEqual(result.b, -math.inf)
        self.assertTrue(math.isnan((Color.white() % 0.0).r))
        self.assertTrue(math.isnan((Color.white() / Color.transparent() * 0).r))

    def test_adding_a_scalar_is_unsupported(self) -> None:
        with self.assertRaises(TypeError):
            Color.white() + 1.0


class BlendColorsTests(unittest.TestCase):
    def test_opaque_source_replaces_destination(self) -> None:
        buffer = np.ones((2, 2, 4), dtype=np.float32)
        blend_colors(buffer, Color.blue(), np.ones((2, 2), dtype=np.float32))
        np.testing.assert_array_equal(buffer[0, 0], [0.0, 0.0, 1.0, 1.0])

    def test_partial_coverage_mixes_over_opaque_background(self) -> None:
        buffer = np.ones((1, 1, 4), dtype=np.float32)
        blend_colors(buffer, Color.black(), np.full((1, 1), 0.5, dtype=np.float32))
        np.testing.assert_allclose(buffer[0, 0], [0.5, 0.5, 0.5, 1.0])

    def test_zero_coverage_over_transparent_stays_transparent(self) -> None:
        buffer = np.zeros((1, 3, 4), dtype=np.float32)
        blend_colors(buffer, Color.red(), np.zeros((1, 3), dtype=np.float32))
        np.testing.assert_array_equal(buffer, np.zeros((1, 3, 4), dtype=np.float32))


if __name__ == "__main__":
    unittest.main()
