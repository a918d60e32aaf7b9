from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
import math
from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

from parcoords.errors import ParcoordsConfigError
from parcoords.scales import LinearScale, PointScale

if TYPE_CHECKING:
    from parcoords.dimensions import Dimension


Extent = tuple[float, float]
Domain = tuple


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


_KIND_ALIASES: dict[str, ColumnKind] = {
    "numeric": ColumnKind.NUMERIC,
    "number": ColumnKind.NUMERIC,
    "categorical": ColumnKind.CATEGORICAL,
    "string": ColumnKind.CATEGORICAL,
}


def _coerce_numeric(raw: object) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal, np.integer, np.floating)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    return value if math.isfinite(value) else None


def _coerce_categorical(raw: object) -> str | None:
    if raw is None:
        return None
    text = str(raw)
    return text if text else None


def _numeric_domain(values: Iterable[object]) -> tuple[float, float]:
    present = [float(v) for v in values if v is not None]  # type: ignore[arg-type]
    if not present:
        return (0.0, 0.0)
    return (min(present), max(present))


def _categorical_domain(values: Iterable[object]) -> tuple[str, ...]:
    return tuple(sorted({str(v) for v in values if v is not None}))


def _numeric_scale(domain: Domain, inner_height: float) -> LinearScale:
    lo, hi = domain
    return LinearScale(domain=(float(lo), float(hi)), range=(float(inner_height), 0.0))


def _categorical_scale(domain: Domain, inner_height: float) -> PointScale:
    return PointScale(domain=tuple(str(v) for v in domain), range=(0.0, float(inner_height)))


@dataclass(frozen=True)
class ColumnType:
    """Capabilities shared by every dimension of one scalar kind."""

    kind: ColumnKind
    coerce: Callable[[object], object]
    domain: Callable[[Iterable[object]], Domain]
    default_scale: Callable[[Domain, float], object]

    def within(self, value: object, extent: Extent, dimension: "Dimension") -> bool:
        """True when the scaled position of ``value`` lies inside ``extent``.

        Absent values are never within an extent.
        """
        if value is None:
            return False
        position = dimension.scale(value)
        return bool(self.within_positions(np.asarray([position], dtype=np.float64), extent)[0])

    @staticmethod
    def within_positions(positions: np.ndarray, extent: Extent) -> np.ndarray:
        lo, hi = extent
        # NaN compares false on both sides, so absent positions drop out.
        return (positions >= lo) & (positions <= hi)


NUMERIC = ColumnType(
    kind=ColumnKind.NUMERIC,
    coerce=_coerce_numeric,
    domain=_numeric_domain,
    default_scale=_numeric_scale,
)

CATEGORICAL = ColumnType(
    kind=ColumnKind.CATEGORICAL,
    coerce=_coerce_categorical,
    domain=_categorical_domain,
    default_scale=_categorical_scale,
)

_REGISTRY: dict[ColumnKind, ColumnType] = {
    ColumnKind.NUMERIC: NUMERIC,
    ColumnKind.CATEGORICAL: CATEGORICAL,
}


def column_type(kind: ColumnKind | str) -> ColumnType:
    if isinstance(kind, ColumnKind):
        return _REGISTRY[kind]
    resolved = _KIND_ALIASES.get(str(kind).strip().lower())
    if resolved is None:
        raise ParcoordsConfigError(f"unknown column kind: {kind!r}")
    return _REGISTRY[resolved]
