from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Mapping, Sequence

from parcoords.column_types import ColumnKind, ColumnType, Domain, column_type
from parcoords.config import PlotConfig
from parcoords.errors import ParcoordsConfigError
from parcoords.palette import category_color
from parcoords.scales import Scale


TickFormat = Callable[[object, int], str]
TickColor = Callable[[object], tuple[int, int, int, int]]


@dataclass(frozen=True)
class DimensionConfig:
    """Declares one visualized column before data is known."""

    key: str
    kind: ColumnKind | str = ColumnKind.NUMERIC
    description: str | None = None
    domain: Domain | None = None
    scale: Scale | None = None
    tick_format: TickFormat | None = None
    tick_color: TickColor | None = None

    def __post_init__(self) -> None:
        if not self.key.strip():
            raise ParcoordsConfigError("dimension key must be non-empty")

    @property
    def column_type(self) -> ColumnType:
        return column_type(self.kind)


@dataclass
class Dimension:
    key: str
    description: str
    column_type: ColumnType
    domain: Domain
    scale: Scale
    tick_format: TickFormat | None = None
    tick_color: TickColor | None = None
    _explicit_domain: bool = field(default=False, repr=False)
    _explicit_scale: bool = field(default=False, repr=False)

    def rebind(self, records: Sequence[Mapping[str, object]], config: PlotConfig) -> None:
        """Recompute derived domain and scale after a data reload.

        Callers holding projected positions must recompute them as well;
        `ParcoordsSession.reload` does both.
        """
        if not self._explicit_domain:
            self.domain = self.column_type.domain(_coerced(self.column_type, self.key, records))
        if not self._explicit_scale:
            self.scale = self.column_type.default_scale(self.domain, config.inner_height)  # type: ignore[assignment]

    def axis_ticks(self, target: int = 10) -> tuple[tuple[object, float, str], ...]:
        """Tick value, offset and label for the axis, honouring ``tick_format``."""
        out: list[tuple[object, float, str]] = []
        ticks = self.scale.ticks(target)
        labels = self.scale.tick_labels(target)
        for i, (tick, label) in enumerate(zip(ticks, labels, strict=False)):
            text = self.tick_format(tick, i) if self.tick_format is not None else label
            out.append((tick, self.scale(tick), text))
        return tuple(out)


def build_dimensions(
    configs: Sequence[DimensionConfig],
    records: Sequence[Mapping[str, object]],
    config: PlotConfig,
) -> tuple[Dimension, ...]:
    seen: set[str] = set()
    dims: list[Dimension] = []
    for decl in configs:
        if decl.key in seen:
            raise ParcoordsConfigError(f"duplicate dimension key: {decl.key}")
        seen.add(decl.key)
        ctype = decl.column_type
        domain = decl.domain
        if domain is None:
            domain = ctype.domain(_coerced(ctype, decl.key, records))
        scale = decl.scale
        if scale is None:
            scale = ctype.default_scale(domain, config.inner_height)  # type: ignore[assignment]
        dims.append(
            Dimension(
                key=decl.key,
                description=decl.description or decl.key,
                column_type=ctype,
                domain=domain,
                scale=scale,  # type: ignore[arg-type]
                tick_format=decl.tick_format,
                tick_color=decl.tick_color,
                _explicit_domain=decl.domain is not None,
                _explicit_scale=decl.scale is not None,
            )
        )
    return tuple(dims)


def _coerced(ctype: ColumnType, key: str, records: Sequence[Mapping[str, object]]) -> Iterator[object]:
    coerce = ctype.coerce
    return (coerce(record.get(key)) for record in records)


def _format_time_tick(value: object, index: int) -> str:
    _ = index
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


DEFAULT_DIMENSIONS: tuple[DimensionConfig, ...] = (
    DimensionConfig(key="time", description="time", tick_format=_format_time_tick, tick_color=category_color),
    DimensionConfig(key="event_type", description="event_type"),
    DimensionConfig(key="cpu_id", description="cpu_id"),
    DimensionConfig(key="disk_usage", description="disk_usage"),
    DimensionConfig(key="memory_usage", description="memory_usage"),
)
