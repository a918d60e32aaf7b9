from .canvas import blend_pixels, blit, draw_hline, draw_vline, fill, fill_rect, new_canvas
from .draw_lines import polyline_pixels
from .draw_text import draw_text, text_size
from .surface import DrawingSurface, RasterSurface

__all__ = [
    "DrawingSurface",
    "RasterSurface",
    "blend_pixels",
    "blit",
    "draw_hline",
    "draw_text",
    "draw_vline",
    "fill",
    "fill_rect",
    "new_canvas",
    "polyline_pixels",
    "text_size",
]
