from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from parcoords.table.component import DEFAULT_COLUMNS, TableColumn, TableView, sort_key

if TYPE_CHECKING:
    from parcoords.brush import Selection


@dataclass(frozen=True)
class TableRow:
    key: int
    cells: tuple[object, ...]


@dataclass(frozen=True)
class TableDiff:
    entered: tuple[int, ...] = ()
    updated: tuple[int, ...] = ()
    exited: tuple[int, ...] = ()
    order: tuple[int, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.entered or self.updated or self.exited)


class TableSync:
    """Projects the selection's first rows (by sort key) into the table view."""

    def __init__(
        self,
        view: TableView,
        columns: Sequence[TableColumn] = DEFAULT_COLUMNS,
        *,
        size: int = 5,
        sort_by: str = "event_type",
    ) -> None:
        if size < 0:
            raise ValueError("size must be >= 0")
        self.view = view
        self.columns = tuple(columns)
        self.size = int(size)
        self.sort_by = sort_by
        self.rows: tuple[TableRow, ...] = ()

    def top_rows(self, selection: "Selection") -> tuple[TableRow, ...]:
        keyed = list(zip(selection.indices.tolist(), selection.records, strict=False))
        # Stable sort keeps load order among equal keys.
        keyed.sort(key=lambda item: sort_key(item[1].get(self.sort_by)))
        return tuple(
            TableRow(key=int(index), cells=tuple(record.get(column.key) for column in self.columns))
            for index, record in keyed[: self.size]
        )

    def update(self, selection: "Selection") -> TableDiff:
        rows = self.top_rows(selection)
        previous = {row.key: (position, row) for position, row in enumerate(self.rows)}
        current_keys = {row.key for row in rows}

        entered: list[int] = []
        updated: list[int] = []
        for position, row in enumerate(rows):
            old = previous.get(row.key)
            if old is None:
                entered.append(row.key)
            elif old[0] != position or old[1].cells != row.cells:
                updated.append(row.key)
        exited = tuple(row.key for row in self.rows if row.key not in current_keys)

        self.rows = rows
        self.view.render(
            self.columns,
            [{column.key: cell for column, cell in zip(self.columns, row.cells, strict=False)} for row in rows],
        )
        return TableDiff(
            entered=tuple(entered),
            updated=tuple(updated),
            exited=exited,
            order=tuple(row.key for row in rows),
        )
