from __future__ import annotations

import numpy as np

from parcoords.brush import BrushState
from parcoords.config import PlotConfig
from parcoords.layout import ScreenLayout
from parcoords.raster import draw_hline, draw_text, draw_vline, fill_rect, new_canvas, text_size


TICK_LENGTH = 6
TICK_LABEL_GAP = 3
TITLE_GAP = 12


def render_overlay(config: PlotConfig, layout: ScreenLayout, brushes: BrushState | None = None) -> np.ndarray:
    """Axes, ticks, titles and brush rectangles on a transparent container-sized layer."""
    canvas = new_canvas(config.container_width, config.container_height)
    top = config.margins.top
    for index, dim in enumerate(layout.dimensions):
        x = config.margins.left + int(round(layout.x_position_of(index)))
        draw_vline(canvas, x, top, top + config.inner_height, config.axis_color)

        for tick, offset, label in dim.axis_ticks():
            y = top + int(round(offset))
            draw_hline(canvas, x - TICK_LENGTH, x, y, config.axis_color)
            tw, th = text_size(label, font_size_px=config.font_size_px)
            color = dim.tick_color(tick) if dim.tick_color is not None else config.text_color
            draw_text(
                canvas,
                x - TICK_LENGTH - TICK_LABEL_GAP - tw,
                y - th // 2,
                label,
                color,
                font_size_px=config.font_size_px,
            )

        _, title_h = text_size(dim.description, font_size_px=config.font_size_px)
        draw_text(canvas, x, top - TITLE_GAP - title_h, dim.description, config.text_color, font_size_px=config.font_size_px)

        if brushes is None:
            continue
        extent = brushes.axis(dim.key).extent
        if extent is None:
            continue
        lo = top + int(round(extent[0]))
        hi = top + int(round(extent[1]))
        half = config.brush_handle_half_width
        fill_rect(canvas, x - half, lo, 2 * half, max(1, hi - lo), config.brush_color)
        draw_hline(canvas, x - half, x + half, lo, config.brush_outline_color)
        draw_hline(canvas, x - half, x + half, hi, config.brush_outline_color)
    return canvas
