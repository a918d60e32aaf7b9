from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import TYPE_CHECKING, Literal, Mapping, Sequence, Union

import numpy as np

from parcoords.column_types import Extent
from parcoords.dimensions import Dimension
from parcoords.render_queue import RenderQueue, global_alpha

if TYPE_CHECKING:
    from parcoords.table.sync import TableSync


LOGGER = logging.getLogger(__name__)

AxisPhase = Literal["idle", "dragging", "committed"]

MIN_EXTENT_SPAN = 1e-9


@dataclass(frozen=True)
class AxisBrush:
    phase: AxisPhase = "idle"
    extent: Extent | None = None


@dataclass(frozen=True)
class BrushState:
    """Brush phase and extent per dimension key, in dimension order."""

    axes: tuple[tuple[str, AxisBrush], ...] = ()

    @classmethod
    def for_dimensions(cls, dimensions: Sequence[Dimension]) -> "BrushState":
        return cls(axes=tuple((dim.key, AxisBrush()) for dim in dimensions))

    def axis(self, key: str) -> AxisBrush:
        for axis_key, brush in self.axes:
            if axis_key == key:
                return brush
        raise KeyError(f"unknown brush axis: {key}")

    def with_axis(self, key: str, brush: AxisBrush) -> "BrushState":
        self.axis(key)
        return BrushState(axes=tuple((k, brush if k == key else b) for k, b in self.axes))

    def actives(self) -> dict[str, Extent]:
        return {key: brush.extent for key, brush in self.axes if brush.extent is not None}


@dataclass(frozen=True)
class BrushStart:
    key: str


@dataclass(frozen=True)
class BrushMove:
    key: str
    extent: Extent | None


@dataclass(frozen=True)
class BrushEnd:
    key: str
    extent: Extent | None


@dataclass(frozen=True)
class BrushClear:
    key: str


@dataclass(frozen=True)
class BrushClearAll:
    pass


BrushEvent = Union[BrushStart, BrushMove, BrushEnd, BrushClear, BrushClearAll]


@dataclass(frozen=True)
class Selection:
    indices: np.ndarray
    records: tuple[Mapping[str, object], ...]

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class StopPropagation:
    key: str


@dataclass(frozen=True)
class InvalidateRender:
    pass


@dataclass(frozen=True)
class StartRender:
    selection: Selection
    alpha: float


@dataclass(frozen=True)
class UpdateTable:
    selection: Selection


Effect = Union[StopPropagation, InvalidateRender, StartRender, UpdateTable]


@dataclass(frozen=True)
class SelectionContext:
    """Read-only inputs needed to turn brush extents into a selection."""

    records: tuple[Mapping[str, object], ...]
    dimensions: tuple[Dimension, ...]
    positions: np.ndarray
    alpha_k: float
    alpha_exponent: float = 0.3


@dataclass(frozen=True)
class BrushTransition:
    state: BrushState
    effects: tuple[Effect, ...] = field(default_factory=tuple)

    @property
    def propagation_stopped(self) -> bool:
        return any(isinstance(effect, StopPropagation) for effect in self.effects)


def normalize_extent(extent: Extent | None) -> Extent | None:
    if extent is None:
        return None
    lo, hi = float(extent[0]), float(extent[1])
    if lo > hi:
        lo, hi = hi, lo
    if hi - lo < MIN_EXTENT_SPAN:
        return None
    return (lo, hi)


def compute_selection(
    positions: np.ndarray,
    dimensions: Sequence[Dimension],
    actives: Mapping[str, Extent],
) -> np.ndarray:
    """Indices of records inside every active extent; no actives selects all."""
    mask = np.ones(positions.shape[0], dtype=bool)
    for column, dim in enumerate(dimensions):
        extent = actives.get(dim.key)
        if extent is None:
            continue
        mask &= dim.column_type.within_positions(positions[:, column], extent)
    return np.flatnonzero(mask)


def select(context: SelectionContext, actives: Mapping[str, Extent]) -> Selection:
    indices = compute_selection(context.positions, context.dimensions, actives)
    return Selection(indices=indices, records=tuple(context.records[i] for i in indices.tolist()))


def _reselect(state: BrushState, context: SelectionContext) -> tuple[Effect, ...]:
    selection = select(context, state.actives())
    alpha = global_alpha(len(selection), context.alpha_k, context.alpha_exponent)
    return (InvalidateRender(), StartRender(selection=selection, alpha=alpha), UpdateTable(selection=selection))


def reduce_brush(state: BrushState, event: BrushEvent, context: SelectionContext) -> BrushTransition:
    """Pure brush state machine: idle -> dragging -> committed | idle."""
    if isinstance(event, BrushStart):
        current = state.axis(event.key)
        return BrushTransition(
            state=state.with_axis(event.key, replace(current, phase="dragging")),
            effects=(StopPropagation(key=event.key),),
        )

    if isinstance(event, BrushMove):
        brush = AxisBrush(phase="dragging", extent=normalize_extent(event.extent))
        next_state = state.with_axis(event.key, brush)
        return BrushTransition(state=next_state, effects=_reselect(next_state, context))

    if isinstance(event, BrushEnd):
        extent = normalize_extent(event.extent)
        brush = AxisBrush(phase="idle") if extent is None else AxisBrush(phase="committed", extent=extent)
        next_state = state.with_axis(event.key, brush)
        return BrushTransition(state=next_state, effects=_reselect(next_state, context))

    if isinstance(event, BrushClear):
        next_state = state.with_axis(event.key, AxisBrush())
        return BrushTransition(state=next_state, effects=_reselect(next_state, context))

    if isinstance(event, BrushClearAll):
        next_state = BrushState(axes=tuple((key, AxisBrush()) for key, _ in state.axes))
        return BrushTransition(state=next_state, effects=_reselect(next_state, context))

    raise TypeError(f"unsupported brush event: {event!r}")


class BrushCoordinator:
    """Holds brush state and applies reducer effects to the render queue and table."""

    def __init__(
        self,
        context: SelectionContext,
        render_queue: RenderQueue,
        table_sync: "TableSync",
    ) -> None:
        self.context = context
        self.render_queue = render_queue
        self.table_sync = table_sync
        self.state = BrushState.for_dimensions(context.dimensions)
        self.selection = select(context, {})

    def dispatch(self, event: BrushEvent) -> BrushTransition:
        transition = reduce_brush(self.state, event, self.context)
        self.state = transition.state
        for effect in transition.effects:
            self._apply(effect)
        return transition

    def brush_start(self, key: str) -> BrushTransition:
        return self.dispatch(BrushStart(key=key))

    def brush_change(self, key: str, extent: Extent | None) -> BrushTransition:
        return self.dispatch(BrushMove(key=key, extent=extent))

    def brush_end(self, key: str, extent: Extent | None) -> BrushTransition:
        return self.dispatch(BrushEnd(key=key, extent=extent))

    def clear(self, key: str | None = None) -> BrushTransition:
        if key is None:
            return self.dispatch(BrushClearAll())
        return self.dispatch(BrushClear(key=key))

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, InvalidateRender):
            self.render_queue.invalidate()
        elif isinstance(effect, StartRender):
            self.selection = effect.selection
            LOGGER.debug(
                "selection recomputed: %d of %d records, actives=%s",
                len(effect.selection),
                len(self.context.records),
                sorted(self.state.actives()),
            )
            self.render_queue.render(effect.selection.indices, effect.alpha)
        elif isinstance(effect, UpdateTable):
            self.table_sync.update(effect.selection)
