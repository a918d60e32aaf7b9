from __future__ import annotations

from dataclasses import dataclass, field
import itertools
import logging
import time
from typing import Callable, Mapping, Sequence

import numpy as np

from parcoords.config import PlotConfig
from parcoords.layout import ScreenLayout, row_vertices, subpaths
from parcoords.palette import category_color
from parcoords.raster.surface import DrawingSurface


LOGGER = logging.getLogger(__name__)

DrawFn = Callable[[int], None]


def global_alpha(count: int, k: float, exponent: float = 0.3) -> float:
    """Per-pass line alpha: ``min(k / count ** exponent, 1)``, in (0, 1]."""
    if count <= 0:
        return 1.0
    return min(k / float(count) ** exponent, 1.0)


@dataclass
class FrameRateController:
    """Paces render ticks to a fixed number of batches per second."""

    target_fps: int
    _next_tick_at: float | None = None

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")

    @property
    def target_dt(self) -> float:
        return 1.0 / float(self.target_fps)

    def should_tick(self, now: float) -> bool:
        if self._next_tick_at is None:
            self._next_tick_at = now
        if now < self._next_tick_at:
            return False
        dt = self.target_dt
        while self._next_tick_at <= now:
            self._next_tick_at += dt
        return True

    def compute_sleep(self, tick_started_at: float, tick_finished_at: float) -> float:
        elapsed = max(0.0, tick_finished_at - tick_started_at)
        return max(0.0, self.target_dt - elapsed)

    def reset(self) -> None:
        self._next_tick_at = None


class CancellationToken:
    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


@dataclass
class RenderTask:
    """One render pass over a fixed snapshot of record indices."""

    task_id: int
    indices: np.ndarray
    alpha: float
    token: CancellationToken = field(default_factory=CancellationToken)
    cursor: int = 0
    batches_drawn: int = 0

    @property
    def total(self) -> int:
        return int(self.indices.size)

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def done(self) -> bool:
        return self.cancelled or self.cursor >= self.total

    def step(self, draw: DrawFn, batch_size: int) -> int:
        drawn = 0
        while self.cursor < self.total and drawn < batch_size:
            if self.token.cancelled:
                break
            draw(int(self.indices[self.cursor]))
            self.cursor += 1
            drawn += 1
        if drawn:
            self.batches_drawn += 1
        return drawn


class PolylinePainter:
    """Draws one record's polyline, coloured by its category."""

    def __init__(
        self,
        surface: DrawingSurface,
        layout: ScreenLayout,
        records: Sequence[Mapping[str, object]],
        positions: np.ndarray,
    ) -> None:
        self.surface = surface
        self.records = records
        self.positions = positions
        self.color_key = layout.config.color_key
        self.palette = layout.config.palette
        self._x_positions = layout.x_positions()

    def __call__(self, index: int) -> None:
        surface = self.surface
        surface.stroke_style = category_color(self.records[index].get(self.color_key), self.palette)
        surface.begin_path()
        for path in subpaths(row_vertices(self._x_positions, self.positions[index])):
            x0, y0 = path[0]
            surface.move_to(x0, y0)
            for x, y in path[1:]:
                surface.line_to(x, y)
        surface.stroke()


class RenderQueue:
    """Draws record polylines in batches, at most one pass in flight."""

    def __init__(
        self,
        surface: DrawingSurface,
        draw: DrawFn,
        *,
        batch_size: int = 30,
        controller: FrameRateController | None = None,
        line_width: int = 1,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        self.surface = surface
        self.draw = draw
        self.batch_size = int(batch_size)
        self.controller = controller or FrameRateController(target_fps=30)
        self.line_width = int(line_width)
        self._task: RenderTask | None = None
        self._ids = itertools.count(1)

    @classmethod
    def from_config(cls, surface: DrawingSurface, draw: DrawFn, config: PlotConfig) -> "RenderQueue":
        return cls(
            surface,
            draw,
            batch_size=config.render_batch_size,
            controller=FrameRateController(target_fps=config.render_fps),
            line_width=config.line_width,
        )

    @property
    def active_task(self) -> RenderTask | None:
        if self._task is None or self._task.done:
            return None
        return self._task

    @property
    def last_task(self) -> RenderTask | None:
        return self._task

    def invalidate(self) -> None:
        task = self._task
        if task is not None and not task.done:
            LOGGER.debug("render pass %d cancelled at %d/%d", task.task_id, task.cursor, task.total)
        if task is not None:
            task.token.cancel()

    def render(self, indices: Sequence[int] | np.ndarray, alpha: float) -> RenderTask:
        self.invalidate()
        surface = self.surface
        surface.clear()
        surface.global_alpha = alpha
        surface.composite = "darken"
        surface.line_width = self.line_width
        task = RenderTask(
            task_id=next(self._ids),
            indices=np.asarray(indices, dtype=np.int64).reshape(-1),
            alpha=alpha,
        )
        self._task = task
        self.controller.reset()
        LOGGER.debug("render pass %d started: %d records, alpha=%.3f", task.task_id, task.total, alpha)
        return task

    def tick(self, now: float | None = None) -> int:
        """Draw one batch if the pace allows; returns the number of records drawn."""
        task = self.active_task
        if task is None:
            return 0
        if now is not None and not self.controller.should_tick(now):
            return 0
        return task.step(self.draw, self.batch_size)

    def drain(self) -> int:
        drawn = 0
        while self.active_task is not None:
            drawn += self.tick()
        return drawn

    def run_until_idle(
        self,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        drawn = 0
        while self.active_task is not None:
            started = clock()
            drawn += self.tick(started)
            sleep(self.controller.compute_sleep(started, clock()))
        return drawn
