from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Mapping, Sequence

import numpy as np

from parcoords.config import PlotConfig
from parcoords.dimensions import Dimension


Vertex = tuple[float, float]


@dataclass(frozen=True)
class ScreenLayout:
    """Axis placement and record projection in plot-local pixels."""

    config: PlotConfig
    dimensions: tuple[Dimension, ...]

    def x_position_of(self, index: int) -> float:
        n = len(self.dimensions)
        if index < 0 or index >= n:
            raise IndexError(f"dimension index out of range: {index}")
        if n == 1:
            return self.config.width / 2.0
        return index * (self.config.width / float(n - 1))

    def x_positions(self) -> np.ndarray:
        return np.asarray([self.x_position_of(i) for i in range(len(self.dimensions))], dtype=np.float64)

    def project(self, record: Mapping[str, object]) -> list[Vertex | None]:
        out: list[Vertex | None] = []
        for i, dim in enumerate(self.dimensions):
            value = record.get(dim.key)
            if value is None:
                out.append(None)
                continue
            y = dim.scale(value)
            out.append(None if math.isnan(y) else (self.x_position_of(i), y))
        return out

    def project_all(self, records: Sequence[Mapping[str, object]]) -> np.ndarray:
        """Scaled y position per record and dimension; NaN marks absent values."""
        if not self.dimensions:
            return np.empty((len(records), 0), dtype=np.float64)
        columns = [dim.scale.map_values([record.get(dim.key) for record in records]) for dim in self.dimensions]
        return np.column_stack(columns) if records else np.empty((0, len(self.dimensions)), dtype=np.float64)

    def axis_at(self, x: float, y: float) -> int | None:
        """Index of the axis whose brush band contains the plot-local point."""
        if y < 0 or y > self.config.height:
            return None
        half = self.config.brush_half_width
        for i in range(len(self.dimensions)):
            if abs(x - self.x_position_of(i)) <= half:
                return i
        return None


def subpaths(vertices: Sequence[Vertex | None]) -> list[list[Vertex]]:
    """Split a projected polyline wherever a vertex is missing.

    A missing vertex ends the current sub-path; the next present vertex starts
    a new one. Sub-paths with a single vertex are kept, drawing them is up to
    the surface.
    """
    paths: list[list[Vertex]] = []
    current: list[Vertex] = []
    for vertex in vertices:
        if vertex is None:
            if current:
                paths.append(current)
            current = []
            continue
        current.append(vertex)
    if current:
        paths.append(current)
    return paths


def row_vertices(x_positions: np.ndarray, row: np.ndarray) -> list[Vertex | None]:
    return [None if math.isnan(y) else (float(x), float(y)) for x, y in zip(x_positions.tolist(), row.tolist(), strict=False)]
