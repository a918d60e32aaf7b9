from __future__ import annotations

from typing import Protocol

import numpy as np

from parcoords.raster.canvas import RGBA, Composite, blend_pixels, fill, new_canvas
from parcoords.raster.draw_lines import polyline_pixels, unique_pixels


class DrawingSurface(Protocol):
    """Canvas-style immediate-mode drawing target used by the render queue."""

    global_alpha: float
    composite: Composite
    stroke_style: RGBA
    line_width: int

    def clear(self) -> None:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def stroke(self) -> None:
        ...


class RasterSurface:
    """numpy RGBA surface with a canvas-like path API.

    Coordinates are logical pixels; the backing store is scaled by
    ``pixel_ratio``. A stroke blends every covered pixel exactly once so
    self-overlapping paths do not double up.
    """

    def __init__(self, width: int, height: int, *, pixel_ratio: float = 1.0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface width/height must be > 0")
        if pixel_ratio <= 0:
            raise ValueError("pixel_ratio must be > 0")
        self.width = int(width)
        self.height = int(height)
        self.pixel_ratio = float(pixel_ratio)
        self.pixels = new_canvas(
            max(1, int(round(self.width * self.pixel_ratio))),
            max(1, int(round(self.height * self.pixel_ratio))),
        )
        self.global_alpha: float = 1.0
        self.composite: Composite = "source-over"
        self.stroke_style: RGBA = (0, 0, 0, 255)
        self.line_width: int = 1
        self.strokes = 0
        self._subpaths: list[list[tuple[float, float]]] = []

    def clear(self) -> None:
        fill(self.pixels, (0, 0, 0, 0))
        self._subpaths = []

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x * self.pixel_ratio, y * self.pixel_ratio)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((x * self.pixel_ratio, y * self.pixel_ratio))

    def stroke(self) -> None:
        width = max(1, int(round(self.line_width * self.pixel_ratio)))
        parts_x: list[np.ndarray] = []
        parts_y: list[np.ndarray] = []
        for path in self._subpaths:
            if len(path) < 2:
                continue
            arr = np.asarray(path, dtype=np.float64)
            px, py = polyline_pixels(arr[:, 0], arr[:, 1], width=width)
            parts_x.append(px)
            parts_y.append(py)
        self.strokes += 1
        if not parts_x:
            return
        px, py = unique_pixels(np.concatenate(parts_x), np.concatenate(parts_y))
        blend_pixels(
            self.pixels,
            px,
            py,
            self.stroke_style,
            alpha=self.global_alpha,
            composite=self.composite,
        )

    def to_rgba(self) -> np.ndarray:
        return self.pixels.copy()
