from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import cached_property
import math
from typing import Protocol, Sequence

import numpy as np


class Scale(Protocol):
    """Maps a domain value to a vertical offset inside the plot area."""

    def __call__(self, value: object) -> float:
        ...

    def map_values(self, values: Sequence[object]) -> np.ndarray:
        ...

    def ticks(self, target: int = 10) -> tuple[object, ...]:
        ...

    def tick_labels(self, target: int = 10) -> tuple[str, ...]:
        ...


@dataclass(frozen=True)
class LinearScale:
    """Continuous scale; a zero-spread domain collapses onto the range midpoint."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self) -> None:
        lo, hi = self.domain
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise ValueError("linear scale domain must be finite")

    @property
    def degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def __call__(self, value: object) -> float:
        v = _as_float(value)
        if math.isnan(v):
            return math.nan
        d0, d1 = self.domain
        r0, r1 = self.range
        if self.degenerate:
            return (r0 + r1) / 2.0
        t = (v - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def map_values(self, values: Sequence[object]) -> np.ndarray:
        arr = np.asarray([_as_float(v) for v in values], dtype=np.float64)
        d0, d1 = self.domain
        r0, r1 = self.range
        if self.degenerate:
            out = np.full(arr.shape, (r0 + r1) / 2.0, dtype=np.float64)
            out[~np.isfinite(arr)] = np.nan
            return out
        return r0 + (arr - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, target: int = 10) -> tuple[float, ...]:
        lo, hi = sorted(self.domain)
        ticks = generate_nice_ticks(lo, hi, target)
        if ticks.size > 1:
            eps = abs(float(ticks[1] - ticks[0])) * 1e-9
            ticks = ticks[(ticks >= lo - eps) & (ticks <= hi + eps)]
        return tuple(float(t) for t in ticks)

    def tick_labels(self, target: int = 10) -> tuple[str, ...]:
        return tuple(format_ticks_for_axis(np.asarray(self.ticks(target), dtype=np.float64)))


def _as_float(value: object) -> float:
    """Float form of a raw value; absent or unparseable values become NaN."""
    if value is None:
        return math.nan
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return math.nan


@dataclass(frozen=True)
class PointScale:
    """Discrete scale placing each domain value on an evenly spaced point."""

    domain: tuple[str, ...]
    range: tuple[float, float]

    @cached_property
    def _positions(self) -> dict[str, float]:
        r0, r1 = self.range
        n = len(self.domain)
        if n == 0:
            return {}
        if n == 1:
            return {self.domain[0]: (r0 + r1) / 2.0}
        step = (r1 - r0) / float(n - 1)
        return {value: r0 + i * step for i, value in enumerate(self.domain)}

    def __call__(self, value: object) -> float:
        if value is None:
            return math.nan
        return self._positions.get(str(value), math.nan)

    def map_values(self, values: Sequence[object]) -> np.ndarray:
        positions = self._positions
        return np.asarray(
            [math.nan if v is None else positions.get(str(v), math.nan) for v in values],
            dtype=np.float64,
        )

    def ticks(self, target: int = 10) -> tuple[str, ...]:
        _ = target
        return self.domain

    def tick_labels(self, target: int = 10) -> tuple[str, ...]:
        return self.ticks(target)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Snap floating-point drift (e.g. -4.44e-16) back onto the step grid.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-6):
        return f"{value:.4e}"

    decimals = _decimals_from_step(step) if step is not None else 6
    d = Decimal(str(value))
    try:
        q = d.quantize(Decimal("1").scaleb(-decimals))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return "0" if out == "-0" else out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)
    if round_result:
        bounds = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
        nice_frac = next((nice for limit, nice in bounds if frac < limit), 10.0)
    else:
        bounds = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
        nice_frac = next((nice for limit, nice in bounds if frac <= limit), 10.0)
    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    exp = Decimal(str(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exp)))
