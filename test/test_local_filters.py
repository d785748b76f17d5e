"""Tests for client-side filtering of fetched indicator rows."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from IndicatorFilter.core.models import FilterGroup, IndicatorItem, SearchResultSet
from IndicatorFilter.core.query import BooleanClause, FilterExpression
from IndicatorFilter.filters.local import (
    evaluate_expression,
    facet_filter,
    filter_by_workflow_frequency,
    group_by_frequency,
    narrow_to_results,
    text_search,
)

ROWS = [
    {"id": 1, "name": "Consumer Price Index", "code": "CPI_EU", "source": "Eurostat", "frequency": "MONTHLY",
     "seasonally_adjusted": True, "region": ["Europe"]},
    {"id": 2, "name": "Gross Domestic Product", "code": "GDP_EU", "source": "Eurostat", "frequency": "ANNUAL",
     "seasonally_adjusted": False, "region": ["Europe"]},
    {"id": 3, "name": "Unemployment Rate", "code": "UR_US", "source": "BLS", "frequency": "MONTHLY",
     "seasonally_adjusted": True, "region": ["North America"]},
    {"id": 4, "name": "Retail price index", "code": "RPI_UK", "source": "ONS", "frequency": "QUARTERLY",
     "description": "Legacy price measure", "region": None},
]


def _ids(rows) -> list[int]:
    return [row["id"] for row in rows]


class TestTextSearch(unittest.TestCase):
    def test_case_insensitive_over_name_code_description(self) -> None:
        self.assertEqual(_ids(text_search(ROWS, "PRICE")), [1, 4])
        self.assertEqual(_ids(text_search(ROWS, "ur_us")), [3])
        self.assertEqual(_ids(text_search(ROWS, "legacy")), [4])

    def test_blank_term_keeps_everything(self) -> None:
        self.assertEqual(_ids(text_search(ROWS, "  ")), [1, 2, 3, 4])


class TestFacetFilter(unittest.TestCase):
    GROUPS = [FilterGroup("source"), FilterGroup("seasonally_adjusted"), FilterGroup("region")]

    def test_groups_combine_with_and_values_with_or(self) -> None:
        kept = facet_filter(ROWS, {"source": ["Eurostat", "BLS"], "seasonally_adjusted": ["true"]}, self.GROUPS)
        self.assertEqual(_ids(kept), [1, 3])

    def test_list_valued_field_matches_any_element(self) -> None:
        kept = facet_filter(ROWS, {"region": ["North America"]}, self.GROUPS)
        self.assertEqual(_ids(kept), [3])

    def test_no_selection_keeps_everything(self) -> None:
        self.assertEqual(_ids(facet_filter(ROWS, {}, self.GROUPS)), [1, 2, 3, 4])


class TestNarrowAndEvaluate(unittest.TestCase):
    def test_narrow_to_results_matches_ids_as_strings(self) -> None:
        results = SearchResultSet(
            groups={"Monthly": (IndicatorItem(id=3, name="UR", code="UR_US"), IndicatorItem(id=1, name="CPI", code="CPI_EU"))}
        )
        rows = ROWS + [{"id": "1", "name": "string id"}]
        self.assertEqual(_ids(narrow_to_results(rows, results)), [1, 3, "1"])

    def test_narrow_to_empty_results_keeps_nothing(self) -> None:
        self.assertEqual(narrow_to_results(ROWS, SearchResultSet()), [])

    def test_expression_folds_left_to_right(self) -> None:
        # (source=Eurostat OR source=BLS) NOT frequency=ANNUAL
        expression = FilterExpression(
            base=BooleanClause("source", "Eurostat"),
            additional_fields=(
                BooleanClause("source", "BLS", boolean="OR"),
                BooleanClause("frequency", "ANNUAL", boolean="NOT"),
            ),
        )
        self.assertEqual(_ids(evaluate_expression(ROWS, expression)), [1, 3])

    def test_text_clause_uses_substring(self) -> None:
        expression = FilterExpression(
            base=BooleanClause("name", "price"),
            additional_fields=(BooleanClause("seasonally_adjusted", "true", boolean="AND"),),
        )
        self.assertEqual(_ids(evaluate_expression(ROWS, expression)), [1])


class TestGroupByFrequency(unittest.TestCase):
    def test_groups_in_first_seen_order_with_int_ids(self) -> None:
        rows = [
            {"id": "3", "name": "UR", "code": "UR_US", "frequency": "MONTHLY"},
            {"id": 2, "name": "GDP", "code": None, "frequency": "ANNUAL"},
            {"id": 1.0, "name": "CPI", "frequency": "MONTHLY"},
            {"id": 9, "name": "Misc"},
        ]
        results = group_by_frequency(rows)
        self.assertEqual(results.frequencies, ("MONTHLY", "ANNUAL", "UNKNOWN"))
        self.assertEqual([item.id for item in results.items_for("MONTHLY")], [3, 1])
        self.assertEqual(results.items_for("ANNUAL")[0].code, "")

    def test_row_without_id_raises(self) -> None:
        with self.assertRaises(ValueError):
            group_by_frequency([{"name": "no id", "frequency": "MONTHLY"}])


class TestWorkflowFrequency(unittest.TestCase):
    def test_yearly_workflow_accepts_annual(self) -> None:
        self.assertEqual(_ids(filter_by_workflow_frequency(ROWS, "Yearly")), [2])

    def test_missing_workflow_frequency_keeps_everything(self) -> None:
        self.assertEqual(_ids(filter_by_workflow_frequency(ROWS, None)), [1, 2, 3, 4])


if __name__ == "__main__":
    unittest.main()
