"""Tests for indicator API payload parsing."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from IndicatorFilter.api.parser import (
    coerce_id,
    parse_indicator_rows,
    parse_metadataset,
    parse_search_results,
)


class TestCoerceId(unittest.TestCase):
    def test_accepts_numbers_and_numeric_strings(self) -> None:
        self.assertEqual(coerce_id(7), 7)
        self.assertEqual(coerce_id("42"), 42)
        self.assertEqual(coerce_id(" 5 "), 5)
        self.assertEqual(coerce_id(3.0), 3)
        self.assertEqual(coerce_id("8.0"), 8)

    def test_rejects_non_numeric(self) -> None:
        for value in ("abc", 1.5, "2.5", True, None, [1]):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    coerce_id(value)


class TestParseSearchResults(unittest.TestCase):
    def test_groups_keep_order_and_ids_become_int(self) -> None:
        results = parse_search_results(
            {
                "Quarterly": [{"id": "10", "name": "GDP", "code": None}],
                "Monthly": [{"id": 3, "name": "CPI", "code": "CPI"}],
            }
        )
        self.assertEqual(results.frequencies, ("Quarterly", "Monthly"))
        self.assertEqual(results.items_for("Quarterly")[0].id, 10)
        self.assertEqual(results.items_for("Quarterly")[0].code, "")
        self.assertEqual(results.total, 2)

    def test_null_and_empty_are_empty_results(self) -> None:
        self.assertTrue(parse_search_results(None).is_empty)
        self.assertTrue(parse_search_results({}).is_empty)
        self.assertTrue(parse_search_results({"Monthly": None}).is_empty)

    def test_bad_shapes_raise(self) -> None:
        with self.assertRaises(TypeError):
            parse_search_results([1, 2])
        with self.assertRaises(TypeError):
            parse_search_results({"Monthly": "CPI"})
        with self.assertRaises(ValueError):
            parse_search_results({"Monthly": [{"name": "no id"}]})
        with self.assertRaises(ValueError):
            parse_search_results({"Monthly": [{"id": "x1"}]})


class TestParseIndicators(unittest.TestCase):
    def test_metadataset_drops_nulls_and_ignores_bad_categories(self) -> None:
        metadata = parse_metadataset({"metadataset": {"source": ["IMF", None], "base_year": [2015], "unit": "kg"}})
        self.assertEqual(metadata.source, ("IMF",))
        self.assertEqual(metadata.base_year, ("2015",))
        self.assertEqual(metadata.unit, ())
        self.assertEqual(metadata.region, ())

    def test_missing_metadataset_is_empty(self) -> None:
        self.assertEqual(parse_metadataset({}).frequency, ())

    def test_rows_skip_non_objects(self) -> None:
        rows = parse_indicator_rows({"indicators": [{"id": 1}, "junk"]})
        self.assertEqual(rows, [{"id": 1}])
        with self.assertRaises(TypeError):
            parse_indicator_rows({"indicators": "nope"})


if __name__ == "__main__":
    unittest.main()
