from __future__ import annotations

from typing import Literal

import numpy as np


RGBA = tuple[int, int, int, int]
Composite = Literal["source-over", "darken"]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :] = np.asarray(color, dtype=np.uint8)


def blend_pixels(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    *,
    alpha: float = 1.0,
    composite: Composite = "source-over",
) -> None:
    """Blend one colour into every (x, y) pixel; out-of-bounds points are dropped.

    Callers pass each pixel at most once per stroke.
    """
    if xs.size == 0:
        return
    inside = (xs >= 0) & (xs < dst.shape[1]) & (ys >= 0) & (ys < dst.shape[0])
    xs = xs[inside]
    ys = ys[inside]
    if xs.size == 0:
        return

    a = max(0.0, min(1.0, alpha)) * (color[3] / 255.0)
    if a <= 0.0:
        return
    src = np.asarray(color[:3], dtype=np.float32).reshape(1, 3)
    current = dst[ys, xs, :3].astype(np.float32)
    dst_alpha = dst[ys, xs, 3:4].astype(np.float32) / 255.0
    if composite == "darken":
        # Over an opaque backdrop darken mixes min(src, dst); over a clear one it acts like source-over.
        mixed = np.minimum(src, current) * dst_alpha + src * (1.0 - dst_alpha)
    else:
        mixed = np.broadcast_to(src, current.shape)
    out_alpha = a + dst_alpha * (1.0 - a)
    safe = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = (mixed * a + current * dst_alpha * (1.0 - a)) / safe
    dst[ys, xs, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    dst[ys, xs, 3] = np.clip(np.rint(out_alpha[:, 0] * 255.0), 0, 255).astype(np.uint8)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    xs = np.arange(xa, xb + 1, dtype=np.int64)
    blend_pixels(dst, xs, np.full(xs.shape, y, dtype=np.int64), color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    ys = np.arange(ya, yb + 1, dtype=np.int64)
    blend_pixels(dst, np.full(ys.shape, x, dtype=np.int64), ys, color)


def fill_rect(dst: np.ndarray, x: int, y: int, width: int, height: int, color: RGBA) -> None:
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + width)
    y1 = min(dst.shape[0], y + height)
    if x1 <= x0 or y1 <= y0:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    blend_pixels(dst, xx.ravel(), yy.ravel(), color)


def blit(dst: np.ndarray, src: np.ndarray, x0: int = 0, y0: int = 0) -> None:
    h, w, _ = src.shape
    y1 = min(dst.shape[0], y0 + h)
    x1 = min(dst.shape[1], x0 + w)
    if y0 >= y1 or x0 >= x1:
        return

    view = dst[y0:y1, x0:x1]
    patch = src[: y1 - y0, : x1 - x0]
    alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
    inv = 1.0 - alpha
    view[:, :, :3] = (patch[:, :, :3] * alpha + view[:, :, :3] * inv).astype(np.uint8)
    view[:, :, 3] = 255
