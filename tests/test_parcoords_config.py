from __future__ import annotations

import unittest
from unittest.mock import patch

from parcoords import Margins, PlotConfig, parse_pointer_event
from parcoords.config import DEFAULT_PLOT_WIDTH, parse_hex_color, resolve_plot_width
from parcoords.palette import category_color, category_key


class PlotConfigTests(unittest.TestCase):
    def test_defaults_match_reference_layout(self) -> None:
        config = PlotConfig()
        self.assertEqual(config.margins, Margins(top=70, right=50, bottom=10, left=70))
        self.assertEqual(config.inner_height, config.height - 2)
        self.assertEqual(config.container_width, config.width + 120)
        self.assertEqual(config.container_height, config.height + 80)
        self.assertEqual(config.render_batch_size, 30)
        self.assertEqual((config.alpha_initial, config.alpha_selected), (1.15, 0.85))

    def test_invalid_values_are_rejected(self) -> None:
        for overrides in ({"width": 1}, {"device_pixel_ratio": 0.0}, {"render_fps": 0}, {"palette": ()}):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    PlotConfig(**overrides)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            Margins(top=-1)

    def test_width_follows_detected_screen(self) -> None:
        with patch("parcoords.config._detect_screen_size", return_value=(2000, 1200)):
            self.assertEqual(resolve_plot_width(Margins(), display_fraction=0.5), 1000 - 120)
            config = PlotConfig.from_display(display_fraction=0.5, height=300)
        self.assertEqual(config.width, 880)
        self.assertEqual(config.height, 300)

    def test_width_falls_back_without_display(self) -> None:
        with patch("parcoords.config._detect_screen_size", return_value=None):
            self.assertEqual(PlotConfig.from_display().width, DEFAULT_PLOT_WIDTH)
        self.assertEqual(PlotConfig.from_display(width=640).width, 640)

    def test_from_display_rejects_non_margins(self) -> None:
        with self.assertRaises(TypeError):
            PlotConfig.from_display(width=640, margins=(1, 2, 3, 4))

    def test_parse_hex_color(self) -> None:
        self.assertEqual(parse_hex_color("#50A9D4"), (0x50, 0xA9, 0xD4, 255))
        self.assertEqual(parse_hex_color("fff", alpha=10), (255, 255, 255, 10))
        with self.assertRaises(ValueError):
            parse_hex_color("#12345")


class PaletteTests(unittest.TestCase):
    def test_known_categories_use_palette(self) -> None:
        self.assertEqual(category_color(0.0), parse_hex_color("#D27F8A"))
        self.assertEqual(category_color("8"), parse_hex_color("#785D82"))
        self.assertEqual(category_key(3.0), "3")

    def test_unknown_categories_are_deterministic(self) -> None:
        self.assertEqual(category_color(10.0), category_color(1.0))
        self.assertEqual(category_color("write"), category_color("write"))
        self.assertEqual(category_color(None), category_color("None"))


class PointerEventTests(unittest.TestCase):
    def test_parse_pointer_payload(self) -> None:
        event = parse_pointer_event("pointer_down", {"x": "12.5", "y": 40, "ts": 1.25, "button": 0})
        assert event is not None
        self.assertEqual((event.x, event.y, event.timestamp, event.button), (12.5, 40.0, 1.25, 0))

    def test_invalid_payloads_are_ignored(self) -> None:
        self.assertIsNone(parse_pointer_event("wheel", {"x": 1, "y": 2}))
        self.assertIsNone(parse_pointer_event("pointer_up", {"x": 1}))
        self.assertIsNone(parse_pointer_event("pointer_up", {"x": "a", "y": 2}))
        self.assertIsNone(parse_pointer_event("pointer_up", [1, 2]))


if __name__ == "__main__":
    unittest.main()
