from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Mapping, Protocol, Sequence


@dataclass(frozen=True)
class TableColumn:
    column_id: str
    label: str
    key: str
    css_class: str = "num"

    def __post_init__(self) -> None:
        if not self.column_id.strip():
            raise ValueError("column_id must be non-empty")
        if not self.label.strip():
            raise ValueError("column label must be non-empty")
        if not self.key.strip():
            raise ValueError("column key must be non-empty")


DEFAULT_COLUMNS: tuple[TableColumn, ...] = (
    TableColumn(column_id="time", label="time", key="time", css_class="title"),
    TableColumn(column_id="event_type", label="event_type", key="event_type"),
    TableColumn(column_id="cpu_id", label="cpu_id", key="cpu_id"),
    TableColumn(column_id="disk_usage", label="disk_usage", key="disk_usage"),
    TableColumn(column_id="memory_usage", label="memory_usage", key="memory_usage"),
)


class TableView(Protocol):
    def render(self, columns: Sequence[TableColumn], rows: Sequence[Mapping[str, object]]) -> None:
        ...


class SummaryTable:
    """Default table view: keeps the last rendered rows and prints them as text."""

    def __init__(self, component_id: str = "grid") -> None:
        self.component_id = component_id
        self.columns: tuple[TableColumn, ...] = ()
        self.rows: tuple[Mapping[str, object], ...] = ()
        self.render_count = 0

    def render(self, columns: Sequence[TableColumn], rows: Sequence[Mapping[str, object]]) -> None:
        self.columns = tuple(columns)
        self.rows = tuple(dict(row) for row in rows)
        self.render_count += 1

    def cell_texts(self) -> list[list[str]]:
        return [[cell_text(row.get(column.key)) for column in self.columns] for row in self.rows]

    def render_ascii(self) -> str:
        headers = [column.label for column in self.columns]
        cells = self.cell_texts()
        widths = []
        for col_idx, header in enumerate(headers):
            body_max = max((len(row[col_idx]) for row in cells), default=0)
            widths.append(min(28, max(4, len(header), body_max)))

        def _clip(value: str, width: int) -> str:
            if len(value) <= width:
                return value.ljust(width)
            return value[: width - 3] + "..."

        border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        lines = [
            f"table={self.component_id} rows={len(self.rows)}",
            border,
            "| " + " | ".join(_clip(headers[i], widths[i]) for i in range(len(widths))) + " |",
            border,
        ]
        for row in cells:
            lines.append("| " + " | ".join(_clip(row[i], widths[i]) for i in range(len(widths))) + " |")
        lines.append(border)
        return "\n".join(lines)


def cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isfinite(value):
        if abs(value - round(value)) <= 1e-9:
            return str(int(round(value)))
        return f"{value:.4f}".rstrip("0").rstrip(".")
    return str(value)


def sort_key(value: object) -> tuple[int, float, str]:
    """Numbers first, then text, absent values last."""
    if value is None:
        return (2, 0.0, "")
    if isinstance(value, bool):
        return (0, float(int(value)), "")
    if isinstance(value, (int, float)):
        numeric = float(value)
        if math.isfinite(numeric):
            return (0, numeric, "")
    return (1, 0.0, str(value))
