from __future__ import annotations

import math
import unittest

import numpy as np

from parcoords import CATEGORICAL, NUMERIC, ColumnKind, ParcoordsConfigError, column_type
from parcoords.config import PlotConfig
from parcoords.dimensions import DimensionConfig, build_dimensions


class ColumnTypeTests(unittest.TestCase):
    def test_numeric_coerce_treats_bad_input_as_absent(self) -> None:
        self.assertEqual(NUMERIC.coerce("3.5"), 3.5)
        self.assertEqual(NUMERIC.coerce(" 7 "), 7.0)
        self.assertEqual(NUMERIC.coerce(4), 4.0)
        self.assertIsNone(NUMERIC.coerce(""))
        self.assertIsNone(NUMERIC.coerce("abc"))
        self.assertIsNone(NUMERIC.coerce("nan"))
        self.assertIsNone(NUMERIC.coerce("inf"))
        self.assertIsNone(NUMERIC.coerce(None))
        self.assertIsNone(NUMERIC.coerce(True))

    def test_categorical_coerce_stringifies(self) -> None:
        self.assertEqual(CATEGORICAL.coerce(5), "5")
        self.assertEqual(CATEGORICAL.coerce("disk"), "disk")
        self.assertIsNone(CATEGORICAL.coerce(""))
        self.assertIsNone(CATEGORICAL.coerce(None))

    def test_numeric_domain_ignores_absent_values(self) -> None:
        self.assertEqual(NUMERIC.domain([3.0, None, -1.0, 8.0]), (-1.0, 8.0))
        self.assertEqual(NUMERIC.domain([None, None]), (0.0, 0.0))

    def test_categorical_domain_is_sorted_distinct(self) -> None:
        self.assertEqual(CATEGORICAL.domain(["write", "read", None, "write", "flush"]), ("flush", "read", "write"))

    def test_lookup_by_kind_and_alias(self) -> None:
        self.assertIs(column_type(ColumnKind.NUMERIC), NUMERIC)
        self.assertIs(column_type("Number"), NUMERIC)
        self.assertIs(column_type("string"), CATEGORICAL)
        self.assertIs(column_type("categorical"), CATEGORICAL)
        with self.assertRaises(ParcoordsConfigError):
            column_type("date")

    def test_within_compares_in_scaled_space(self) -> None:
        config = PlotConfig()
        records = [{"disk_usage": 10.0}, {"disk_usage": 90.0}]
        (dim,) = build_dimensions([DimensionConfig(key="disk_usage")], records, config)
        # Larger values plot higher, so 10 sits at the bottom of the axis.
        self.assertAlmostEqual(dim.scale(10.0), float(config.inner_height))
        self.assertTrue(NUMERIC.within(10.0, (400.0, 420.0), dim))
        self.assertFalse(NUMERIC.within(90.0, (400.0, 420.0), dim))
        self.assertTrue(NUMERIC.within(90.0, (0.0, 5.0), dim))

    def test_within_excludes_absent_values(self) -> None:
        config = PlotConfig()
        (dim,) = build_dimensions([DimensionConfig(key="cpu_id")], [{"cpu_id": 1.0}], config)
        self.assertFalse(NUMERIC.within(None, (-1e9, 1e9), dim))

    def test_categorical_within_uses_point_positions(self) -> None:
        config = PlotConfig()
        records = [{"op": "read"}, {"op": "write"}, {"op": "flush"}]
        (dim,) = build_dimensions([DimensionConfig(key="op", kind="string")], records, config)
        self.assertEqual(dim.scale("flush"), 0.0)
        self.assertTrue(CATEGORICAL.within("flush", (0.0, 1.0), dim))
        self.assertFalse(CATEGORICAL.within("write", (0.0, 1.0), dim))
        self.assertFalse(CATEGORICAL.within("unknown", (0.0, 1e9), dim))

    def test_within_positions_drops_nan(self) -> None:
        positions = np.asarray([1.0, math.nan, 5.0, 12.0], dtype=np.float64)
        mask = NUMERIC.within_positions(positions, (0.0, 10.0))
        self.assertEqual(mask.tolist(), [True, False, True, False])


if __name__ == "__main__":
    unittest.main()
