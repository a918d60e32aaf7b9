from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional


PointerEventType = Literal["pointer_down", "pointer_move", "pointer_up"]

_POINTER_EVENT_TYPES = frozenset({"pointer_down", "pointer_move", "pointer_up"})


@dataclass(frozen=True)
class PointerEvent:
    """Pointer input in container coordinates (top-left origin)."""

    event_type: PointerEventType
    x: float
    y: float
    timestamp: float = 0.0
    button: Optional[int] = None


@dataclass(frozen=True)
class PointerDispatch:
    handled: bool
    propagation_stopped: bool = False
    axis_key: Optional[str] = None


def parse_pointer_event(event_type: str, payload: object) -> PointerEvent | None:
    """Parse a host pointer payload (``{"x", "y", "ts"}``) into a PointerEvent."""
    if event_type not in _POINTER_EVENT_TYPES or not isinstance(payload, Mapping):
        return None
    try:
        x = float(payload["x"])
        y = float(payload["y"])
    except (KeyError, TypeError, ValueError):
        return None
    timestamp = payload.get("ts", 0.0)
    button = payload.get("button")
    return PointerEvent(
        event_type=event_type,  # type: ignore[arg-type]
        x=x,
        y=y,
        timestamp=float(timestamp) if isinstance(timestamp, (int, float)) else 0.0,
        button=int(button) if isinstance(button, int) else None,
    )
