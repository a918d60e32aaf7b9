"""Brushable parallel-coordinates plots rendered onto a numpy raster."""

from parcoords.brush import (
    BrushClear,
    BrushClearAll,
    BrushCoordinator,
    BrushEnd,
    BrushMove,
    BrushStart,
    BrushState,
    Selection,
    compute_selection,
    reduce_brush,
)
from parcoords.column_types import CATEGORICAL, NUMERIC, ColumnKind, ColumnType, column_type
from parcoords.config import Margins, PlotConfig
from parcoords.data import Dataset, load_dataset, load_dataset_async
from parcoords.dimensions import DEFAULT_DIMENSIONS, Dimension, DimensionConfig, build_dimensions
from parcoords.errors import DataLoadError, ParcoordsConfigError, ParcoordsError
from parcoords.events import PointerDispatch, PointerEvent, parse_pointer_event
from parcoords.layout import ScreenLayout, subpaths
from parcoords.render_queue import CancellationToken, RenderQueue, RenderTask, global_alpha
from parcoords.session import ParcoordsSession
from parcoords.table import SummaryTable, TableColumn, TableDiff, TableSync

__all__ = [
    "BrushClear",
    "BrushClearAll",
    "BrushCoordinator",
    "BrushEnd",
    "BrushMove",
    "BrushStart",
    "BrushState",
    "CATEGORICAL",
    "CancellationToken",
    "ColumnKind",
    "ColumnType",
    "DEFAULT_DIMENSIONS",
    "DataLoadError",
    "Dataset",
    "Dimension",
    "DimensionConfig",
    "Margins",
    "NUMERIC",
    "ParcoordsConfigError",
    "ParcoordsError",
    "ParcoordsSession",
    "PlotConfig",
    "PointerDispatch",
    "PointerEvent",
    "RenderQueue",
    "RenderTask",
    "ScreenLayout",
    "Selection",
    "SummaryTable",
    "TableColumn",
    "TableDiff",
    "TableSync",
    "build_dimensions",
    "column_type",
    "compute_selection",
    "global_alpha",
    "load_dataset",
    "load_dataset_async",
    "parse_pointer_event",
    "reduce_brush",
    "subpaths",
]
