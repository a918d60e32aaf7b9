from __future__ import annotations

from dataclasses import dataclass, field


RGBA = tuple[int, int, int, int]

DEFAULT_PLOT_WIDTH = 960
DEFAULT_DISPLAY_FRACTION = 0.82
DEFAULT_CONTAINER_HEIGHT = 500

# Stroke colours per event type, keyed by the stringified category.
EVENT_TYPE_PALETTE: tuple[tuple[str, str], ...] = (
    ("0", "#D27F8A"),
    ("1", "#50A9D4"),
    ("2", "#4CFC86"),
    ("3", "#C97D0B"),
    ("4", "#459248"),
    ("5", "#D26FA7"),
    ("6", "#E1525A"),
    ("7", "#5DB5B3"),
    ("8", "#785D82"),
)


@dataclass(frozen=True)
class Margins:
    top: int = 70
    right: int = 50
    bottom: int = 10
    left: int = 70

    def __post_init__(self) -> None:
        if min(self.top, self.right, self.bottom, self.left) < 0:
            raise ValueError("margins must be >= 0")


@dataclass(frozen=True)
class PlotConfig:
    """Immutable layout and rendering settings shared by every component."""

    width: int = DEFAULT_PLOT_WIDTH
    height: int = DEFAULT_CONTAINER_HEIGHT - 70 - 10
    margins: Margins = field(default_factory=Margins)
    device_pixel_ratio: float = 1.0
    line_width: int = 1
    render_batch_size: int = 30
    render_fps: int = 30
    alpha_initial: float = 1.15
    alpha_selected: float = 0.85
    alpha_exponent: float = 0.3
    brush_half_width: int = 10
    brush_handle_half_width: int = 8
    table_size: int = 5
    table_sort_key: str = "event_type"
    color_key: str = "event_type"
    palette: tuple[tuple[str, str], ...] = EVENT_TYPE_PALETTE
    background_color: RGBA = (255, 255, 255, 255)
    axis_color: RGBA = (40, 40, 40, 255)
    text_color: RGBA = (20, 20, 20, 255)
    brush_color: RGBA = (120, 120, 120, 70)
    brush_outline_color: RGBA = (90, 90, 90, 255)
    font_size_px: float = 10.0

    def __post_init__(self) -> None:
        if self.width <= 1 or self.height <= 3:
            raise ValueError("plot width must be > 1 and height > 3")
        if self.device_pixel_ratio <= 0:
            raise ValueError("device_pixel_ratio must be > 0")
        if self.line_width <= 0:
            raise ValueError("line_width must be > 0")
        if self.render_batch_size <= 0:
            raise ValueError("render_batch_size must be > 0")
        if self.render_fps <= 0:
            raise ValueError("render_fps must be > 0")
        if self.alpha_initial <= 0 or self.alpha_selected <= 0:
            raise ValueError("alpha constants must be > 0")
        if self.alpha_exponent <= 0:
            raise ValueError("alpha_exponent must be > 0")
        if self.brush_half_width <= 0:
            raise ValueError("brush_half_width must be > 0")
        if self.table_size < 0:
            raise ValueError("table_size must be >= 0")
        if not self.palette:
            raise ValueError("palette must include at least one colour")

    @property
    def inner_height(self) -> int:
        """Vertical extent that axis scales map onto."""
        return self.height - 2

    @property
    def container_width(self) -> int:
        return self.width + self.margins.left + self.margins.right

    @property
    def container_height(self) -> int:
        return self.height + self.margins.top + self.margins.bottom

    @classmethod
    def from_display(
        cls,
        *,
        display_fraction: float = DEFAULT_DISPLAY_FRACTION,
        **overrides: object,
    ) -> "PlotConfig":
        margins = overrides.get("margins", Margins())
        if not isinstance(margins, Margins):
            raise TypeError(f"margins must be a Margins instance, got {type(margins).__name__}")
        if "width" not in overrides:
            overrides["width"] = resolve_plot_width(margins, display_fraction=display_fraction)
        return cls(**overrides)  # type: ignore[arg-type]


def resolve_plot_width(margins: Margins, *, display_fraction: float = DEFAULT_DISPLAY_FRACTION) -> int:
    if display_fraction <= 0:
        raise ValueError("display_fraction must be > 0")
    screen = _detect_screen_size()
    if screen is None:
        return DEFAULT_PLOT_WIDTH
    container = int(screen[0] * display_fraction)
    return max(2, container - margins.left - margins.right)


def _detect_screen_size() -> tuple[int, int] | None:
    try:
        import tkinter as tk

        root = tk.Tk()
        root.withdraw()
        width = int(root.winfo_screenwidth())
        height = int(root.winfo_screenheight())
        root.destroy()
        if width > 0 and height > 0:
            return (width, height)
    except Exception:
        return None
    return None


def parse_hex_color(value: str, alpha: int = 255) -> RGBA:
    raw = value.strip().lstrip("#")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6:
        raise ValueError(f"invalid hex colour: {value!r}")
    return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16), alpha)
