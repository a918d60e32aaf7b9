from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from parcoords.dimensions import DimensionConfig
from parcoords.errors import DataLoadError


LOGGER = logging.getLogger(__name__)

Record = Mapping[str, object]


@dataclass(frozen=True)
class Dataset:
    """Immutable, coerced records in load order."""

    records: tuple[Record, ...]
    columns: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.records)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]], configs: Sequence[DimensionConfig]) -> "Dataset":
        """Coerce dimension columns; empty cells and failed coercions become ``None``."""
        coercers = {decl.key: decl.column_type.coerce for decl in configs}
        records: list[Record] = []
        columns: list[str] = []
        for row in rows:
            coerced: dict[str, object] = {}
            for key, raw in row.items():
                if key not in columns:
                    columns.append(key)
                coerce = coercers.get(key)
                if coerce is None:
                    coerced[key] = raw
                elif raw is None or raw == "":
                    coerced[key] = None
                else:
                    coerced[key] = coerce(raw)
            records.append(MappingProxyType(coerced))
        return cls(records=tuple(records), columns=tuple(columns))

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, configs: Sequence[DimensionConfig]) -> "Dataset":
        frame = df.astype(object).where(pd.notna(df), None)
        return cls.from_rows(frame.to_dict(orient="records"), configs)


def read_rows(path: str | Path, *, delimiter: str = ",") -> list[dict[str, Any]]:
    """Read a delimited file with a header row into raw string rows."""
    try:
        df = pd.read_csv(path, sep=delimiter, dtype=str, keep_default_na=False, skipinitialspace=True)
    except (OSError, ValueError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        LOGGER.error("failed to load %s: %s", path, exc)
        raise DataLoadError(f"failed to load {path}: {exc}") from exc
    return df.to_dict(orient="records")


def load_dataset(
    path: str | Path,
    configs: Sequence[DimensionConfig],
    *,
    delimiter: str = ",",
) -> Dataset:
    rows = read_rows(path, delimiter=delimiter)
    dataset = Dataset.from_rows(rows, configs)
    missing = [decl.key for decl in configs if decl.key not in dataset.columns]
    if missing:
        LOGGER.info("columns missing from %s, values treated as absent: %s", path, ", ".join(missing))
    LOGGER.info("loaded %d records from %s", len(dataset), path)
    return dataset


async def load_dataset_async(
    path: str | Path,
    configs: Sequence[DimensionConfig],
    *,
    delimiter: str = ",",
) -> Dataset:
    return await asyncio.to_thread(load_dataset, path, configs, delimiter=delimiter)
