from __future__ import annotations

from functools import lru_cache
import zlib

from parcoords.config import EVENT_TYPE_PALETTE, RGBA, parse_hex_color


@lru_cache(maxsize=8)
def _resolved(palette: tuple[tuple[str, str], ...]) -> tuple[dict[str, RGBA], tuple[RGBA, ...]]:
    by_key = {key: parse_hex_color(hex_value) for key, hex_value in palette}
    return by_key, tuple(by_key[key] for key, _ in palette)


def category_key(value: object) -> str:
    """Stringify a category the way the palette keys are written."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def category_color(value: object, palette: tuple[tuple[str, str], ...] = EVENT_TYPE_PALETTE) -> RGBA:
    """Deterministic colour for a category; unknown categories fold onto the palette."""
    by_key, ordered = _resolved(palette)
    key = category_key(value)
    color = by_key.get(key)
    if color is not None:
        return color
    try:
        slot = int(key)
    except ValueError:
        slot = zlib.crc32(key.encode("utf-8"))
    return ordered[slot % len(ordered)]
