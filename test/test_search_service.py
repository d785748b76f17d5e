"""Tests for the indicator search service."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from _stubs import StubApi

from IndicatorFilter.core.models import FilterGroup
from IndicatorFilter.core.query import BooleanClause, FilterExpression
from IndicatorFilter.services.search import IndicatorSearchService, SearchError

EXPRESSION = FilterExpression(
    base=BooleanClause(field="source", value="Eurostat"),
    additional_fields=(BooleanClause(field="frequency", value="MONTHLY", boolean="AND"),),
)


class TestIndicatorSearchService(unittest.TestCase):
    def test_payload_sent_unmodified(self) -> None:
        api = StubApi()
        IndicatorSearchService(client=api).search(EXPRESSION)
        self.assertEqual(
            api.search_calls,
            [
                {
                    "base": {"field": "source", "value": "Eurostat"},
                    "additionalFields": [{"boolean": "AND", "field": "frequency", "value": "MONTHLY"}],
                }
            ],
        )

    def test_ids_coerced_to_int(self) -> None:
        api = StubApi(
            search_response={
                "Monthly": [{"id": "12", "name": "CPI", "code": "CPI_EU"}, {"id": 13, "name": "HICP", "code": "HICP"}],
            }
        )
        results = IndicatorSearchService(client=api).search(EXPRESSION)
        self.assertEqual([item.id for item in results.items_for("Monthly")], [12, 13])
        self.assertTrue(all(isinstance(item.id, int) for item in results.all_items()))

    def test_empty_results_are_valid(self) -> None:
        for response in ({}, {"Monthly": [], "Annual": []}):
            results = IndicatorSearchService(client=StubApi(search_response=response)).search(EXPRESSION)
            self.assertTrue(results.is_empty)

    def test_identical_searches_are_not_cached(self) -> None:
        api = StubApi()
        service = IndicatorSearchService(client=api)
        service.search(EXPRESSION)
        service.search(EXPRESSION)
        self.assertEqual(len(api.search_calls), 2)

    def test_api_failure_raises_search_error(self) -> None:
        with self.assertRaises(SearchError):
            IndicatorSearchService(client=StubApi(fail_search=True)).search(EXPRESSION)

    def test_non_numeric_id_raises_search_error(self) -> None:
        api = StubApi(search_response={"Monthly": [{"id": "abc", "name": "X", "code": "X"}]})
        with self.assertRaises(SearchError):
            IndicatorSearchService(client=api).search(EXPRESSION)

    def test_load_catalog_full_mode(self) -> None:
        catalog = IndicatorSearchService(client=StubApi()).load_catalog()
        self.assertTrue(catalog.loaded)
        self.assertEqual(len(catalog), 6 + 2)
        self.assertEqual([item.id for item in catalog.get("source").items], ["Eurostat", "IMF"])

    def test_load_catalog_narrow_mode(self) -> None:
        catalog = IndicatorSearchService(client=StubApi()).load_catalog([FilterGroup(group="country")])
        self.assertEqual(catalog.keys(), ("country", "name", "description", "code"))

    def test_load_catalog_failure(self) -> None:
        with self.assertRaises(SearchError):
            IndicatorSearchService(client=StubApi(fail_metadata=True)).load_catalog()

    def test_load_rows(self) -> None:
        rows = IndicatorSearchService(client=StubApi()).load_rows()
        self.assertEqual([row["name"] for row in rows], ["CPI", "GDP"])

    def test_search_local_evaluates_fetched_rows(self) -> None:
        api = StubApi()
        results = IndicatorSearchService(client=api).search_local(EXPRESSION)
        self.assertEqual(results.frequencies, ("MONTHLY",))
        self.assertEqual([item.id for item in results.items_for("MONTHLY")], [1])
        self.assertEqual(api.search_calls, [])

    def test_search_local_bad_row_raises_search_error(self) -> None:
        api = StubApi(metadata={"indicators": [{"name": "no id", "source": "Eurostat", "frequency": "MONTHLY"}]})
        with self.assertRaises(SearchError):
            IndicatorSearchService(client=api).search_local(EXPRESSION)

    def test_add_to_table(self) -> None:
        api = StubApi()
        IndicatorSearchService(client=api).add_to_table("7", [1, 2])
        self.assertEqual(api.add_calls, [("7", [1, 2])])

    def test_close_closes_client(self) -> None:
        api = StubApi()
        IndicatorSearchService(client=api).close()
        self.assertTrue(api.closed)


if __name__ == "__main__":
    unittest.main()
