from .component import DEFAULT_COLUMNS, SummaryTable, TableColumn, TableView, cell_text
from .sync import TableDiff, TableRow, TableSync

__all__ = [
    "DEFAULT_COLUMNS",
    "SummaryTable",
    "TableColumn",
    "TableDiff",
    "TableRow",
    "TableSync",
    "TableView",
    "cell_text",
]
