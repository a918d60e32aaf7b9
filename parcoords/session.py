from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Literal, Sequence

import numpy as np
from PIL import Image

from parcoords.brush import BrushCoordinator, BrushTransition, Selection, SelectionContext
from parcoords.column_types import Extent
from parcoords.config import PlotConfig
from parcoords.data import Dataset, load_dataset, load_dataset_async
from parcoords.dimensions import DEFAULT_DIMENSIONS, DimensionConfig, build_dimensions
from parcoords.events import PointerDispatch, PointerEvent
from parcoords.layout import ScreenLayout
from parcoords.overlay import render_overlay
from parcoords.raster import RasterSurface, blit, new_canvas
from parcoords.render_queue import PolylinePainter, RenderQueue, RenderTask, global_alpha
from parcoords.table import DEFAULT_COLUMNS, SummaryTable, TableColumn, TableSync, TableView


LOGGER = logging.getLogger(__name__)

DragMode = Literal["select", "move"]


@dataclass(frozen=True)
class _Drag:
    key: str
    mode: DragMode
    anchor: float
    origin: Extent | None


class ParcoordsSession:
    """One loaded data set wired to its plot, brushes and summary table."""

    def __init__(
        self,
        dataset: Dataset,
        *,
        config: PlotConfig | None = None,
        dimension_configs: Sequence[DimensionConfig] = DEFAULT_DIMENSIONS,
        table_view: TableView | None = None,
        columns: Sequence[TableColumn] = DEFAULT_COLUMNS,
    ) -> None:
        self.config = config or PlotConfig()
        self.dimension_configs = tuple(dimension_configs)
        self.dimensions = build_dimensions(self.dimension_configs, dataset.records, self.config)
        self.layout = ScreenLayout(config=self.config, dimensions=self.dimensions)

        self.surface = RasterSurface(self.config.width, self.config.height, pixel_ratio=self.config.device_pixel_ratio)
        self.render_queue = RenderQueue.from_config(self.surface, self._draw, self.config)

        self.table = table_view if table_view is not None else SummaryTable()
        self.table_sync = TableSync(
            self.table,
            columns,
            size=self.config.table_size,
            sort_by=self.config.table_sort_key,
        )
        self._bind(dataset)

    @classmethod
    def from_csv(
        cls,
        path: str | Path,
        *,
        dimension_configs: Sequence[DimensionConfig] = DEFAULT_DIMENSIONS,
        delimiter: str = ",",
        **kwargs: object,
    ) -> "ParcoordsSession":
        dataset = load_dataset(path, dimension_configs, delimiter=delimiter)
        return cls(dataset, dimension_configs=dimension_configs, **kwargs)  # type: ignore[arg-type]

    @classmethod
    async def from_csv_async(
        cls,
        path: str | Path,
        *,
        dimension_configs: Sequence[DimensionConfig] = DEFAULT_DIMENSIONS,
        delimiter: str = ",",
        **kwargs: object,
    ) -> "ParcoordsSession":
        dataset = await load_dataset_async(path, dimension_configs, delimiter=delimiter)
        return cls(dataset, dimension_configs=dimension_configs, **kwargs)  # type: ignore[arg-type]

    @property
    def selection(self) -> Selection:
        return self.brushes.selection

    def start(self) -> RenderTask:
        """Initial pass: nothing brushed, every record drawn."""
        selection = self.brushes.selection
        alpha = global_alpha(len(selection), self.config.alpha_initial, self.config.alpha_exponent)
        task = self.render_queue.render(selection.indices, alpha)
        self.table_sync.update(selection)
        LOGGER.info("session started: %d records, %d dimensions", len(self.dataset), len(self.dimensions))
        return task

    def reload(self, dataset: Dataset) -> RenderTask:
        """Swap in new records and redraw them unbrushed.

        Derived domains and scales are recomputed; explicit ones are kept.
        Brushes are cleared since their extents refer to the old scales.
        """
        self.render_queue.invalidate()
        for dim in self.dimensions:
            dim.rebind(dataset.records, self.config)
        self._bind(dataset)
        LOGGER.info("session reloaded: %d records", len(dataset))
        return self.start()

    def reload_csv(self, path: str | Path, *, delimiter: str = ",") -> RenderTask:
        return self.reload(load_dataset(path, self.dimension_configs, delimiter=delimiter))

    def tick(self, now: float | None = None) -> int:
        return self.render_queue.tick(now)

    def drain(self) -> int:
        return self.render_queue.drain()

    def handle_pointer(self, event: PointerEvent) -> PointerDispatch:
        lx = event.x - self.config.margins.left
        ly = event.y - self.config.margins.top
        if event.event_type == "pointer_down":
            return self._pointer_down(lx, ly)
        drag = self._drag
        if drag is None:
            return PointerDispatch(handled=False)
        extent = self._drag_extent(drag, ly)
        if event.event_type == "pointer_move":
            transition = self.brushes.brush_change(drag.key, extent)
        else:
            self._drag = None
            transition = self.brushes.brush_end(drag.key, extent)
        return self._dispatched(drag.key, transition)

    def to_rgba(self) -> np.ndarray:
        """Compose background, line surface and axis overlay into one frame."""
        cfg = self.config
        frame = new_canvas(cfg.container_width, cfg.container_height, color=cfg.background_color)
        plot = self.surface.to_rgba()
        if plot.shape[1] != cfg.width or plot.shape[0] != cfg.height:
            plot = np.asarray(Image.fromarray(plot).resize((cfg.width, cfg.height), Image.Resampling.BILINEAR))
        blit(frame, plot, cfg.margins.left, cfg.margins.top)
        blit(frame, render_overlay(cfg, self.layout, self.brushes.state))
        return frame

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        Image.fromarray(self.to_rgba()).save(out)
        return out

    def _bind(self, dataset: Dataset) -> None:
        self.dataset = dataset
        self.positions = self.layout.project_all(dataset.records)
        self._painter = PolylinePainter(self.surface, self.layout, dataset.records, self.positions)
        context = SelectionContext(
            records=dataset.records,
            dimensions=self.dimensions,
            positions=self.positions,
            alpha_k=self.config.alpha_selected,
            alpha_exponent=self.config.alpha_exponent,
        )
        self.brushes = BrushCoordinator(context, self.render_queue, self.table_sync)
        self._drag: _Drag | None = None

    def _draw(self, index: int) -> None:
        self._painter(index)

    def _pointer_down(self, lx: float, ly: float) -> PointerDispatch:
        index = self.layout.axis_at(lx, ly)
        if index is None:
            return PointerDispatch(handled=False)
        key = self.dimensions[index].key
        current = self.brushes.state.axis(key).extent
        if current is not None and current[0] <= ly <= current[1]:
            self._drag = _Drag(key=key, mode="move", anchor=ly, origin=current)
        else:
            self._drag = _Drag(key=key, mode="select", anchor=self._clamp(ly), origin=None)
        return self._dispatched(key, self.brushes.brush_start(key))

    def _drag_extent(self, drag: _Drag, ly: float) -> Extent | None:
        if drag.mode == "move" and drag.origin is not None:
            lo, hi = drag.origin
            shift = min(max(ly - drag.anchor, -lo), self.config.height - hi)
            return (lo + shift, hi + shift)
        y = self._clamp(ly)
        return (min(drag.anchor, y), max(drag.anchor, y))

    def _clamp(self, y: float) -> float:
        return min(max(y, 0.0), float(self.config.height))

    @staticmethod
    def _dispatched(key: str, transition: BrushTransition) -> PointerDispatch:
        # Captured drags never bubble; start events say so explicitly.
        stopped = transition.propagation_stopped or bool(transition.effects)
        return PointerDispatch(handled=True, propagation_stopped=stopped, axis_key=key)
