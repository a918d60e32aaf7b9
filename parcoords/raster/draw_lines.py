from __future__ import annotations

import numpy as np


def segment_pixels(x0: float, y0: float, x1: float, y1: float) -> tuple[np.ndarray, np.ndarray]:
    steps = int(max(abs(round(x1) - round(x0)), abs(round(y1) - round(y0)))) + 1
    xs = np.rint(np.linspace(x0, x1, steps)).astype(np.int64)
    ys = np.rint(np.linspace(y0, y1, steps)).astype(np.int64)
    return xs, ys


def polyline_pixels(xs: np.ndarray, ys: np.ndarray, width: int = 1) -> tuple[np.ndarray, np.ndarray]:
    """Unique pixels covered by a polyline stroked with a square brush."""
    if xs.size < 2:
        return np.empty(0, dtype=np.int64), np.empty(0, dtype=np.int64)
    parts_x: list[np.ndarray] = []
    parts_y: list[np.ndarray] = []
    for i in range(xs.size - 1):
        sx, sy = segment_pixels(float(xs[i]), float(ys[i]), float(xs[i + 1]), float(ys[i + 1]))
        parts_x.append(sx)
        parts_y.append(sy)
    px = np.concatenate(parts_x)
    py = np.concatenate(parts_y)
    radius = max(0, width // 2)
    if radius:
        offsets = np.arange(-radius, radius + 1, dtype=np.int64)
        ox, oy = np.meshgrid(offsets, offsets)
        px = (px[:, None] + ox.ravel()[None, :]).ravel()
        py = (py[:, None] + oy.ravel()[None, :]).ravel()
    return unique_pixels(px, py)


def unique_pixels(px: np.ndarray, py: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    if px.size == 0:
        return px, py
    coords = np.unique(np.stack([py, px], axis=1), axis=0)
    return coords[:, 1], coords[:, 0]
