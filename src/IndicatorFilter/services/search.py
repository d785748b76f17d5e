"""Search service over the indicator platform API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from IndicatorFilter.api.client import ApiError
from IndicatorFilter.api.parser import parse_indicator_rows, parse_metadataset, parse_search_results
from IndicatorFilter.core.models import FilterGroup, SearchResultSet
from IndicatorFilter.core.query import FilterExpression
from IndicatorFilter.filters.catalog import FieldCatalog, build_catalog
from IndicatorFilter.filters.local import evaluate_expression, group_by_frequency
from IndicatorFilter.utils.log import log


class SearchError(RuntimeError):
    """Raised when a collaborator call fails or returns an unusable payload."""


class IndicatorApi(Protocol):
    """Subset of the REST API used by the search service."""

    def get_indicators(self) -> Any:
        raise NotImplementedError

    def boolean_filter(self, payload: dict[str, Any]) -> Any:
        raise NotImplementedError

    def add_indicators_to_table(self, table_id: str, indicators: Sequence[int]) -> Any:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class IndicatorSearchService:
    """Application service wrapping the search, metadata, and table endpoints.

    Every call goes to the API; nothing is cached or retried.
    """

    client: IndicatorApi

    def load_catalog(self, items: Sequence[FilterGroup] | None = None) -> FieldCatalog:
        """Fetch the metadata set and build the field catalog.

        Args:
            items: Caller groups for narrow mode; None for the full catalog.

        Raises:
            SearchError: If the metadata request fails.
        """
        payload = self._call("load metadata", self.client.get_indicators)
        try:
            metadataset = parse_metadataset(payload)
        except (TypeError, ValueError) as error:
            raise SearchError(f"Invalid metadata response: {error}") from error
        catalog = build_catalog(metadataset, items)
        log.debug("Field catalog built: %s", ", ".join(catalog.keys()))
        return catalog

    def load_rows(self) -> list[dict[str, Any]]:
        """Fetch indicator rows for local filtering.

        Raises:
            SearchError: If the request fails.
        """
        payload = self._call("load indicators", self.client.get_indicators)
        try:
            return parse_indicator_rows(payload)
        except (TypeError, ValueError) as error:
            raise SearchError(f"Invalid indicators response: {error}") from error

    def search(self, expression: FilterExpression) -> SearchResultSet:
        """Submit an expression and group the hits by frequency.

        Args:
            expression: Validated filter expression, sent unmodified.

        Returns:
            Fresh result set with numeric ids. May be empty.

        Raises:
            SearchError: If the request fails or the response is malformed.
        """
        payload = expression.to_payload()
        log.debug("Boolean filter payload: %s", payload)
        response = self._call("search", lambda: self.client.boolean_filter(payload))
        try:
            results = parse_search_results(response)
        except (TypeError, ValueError) as error:
            raise SearchError(f"Invalid search response: {error}") from error
        log.info("Search returned %d indicators in %d frequencies", results.total, len(results.frequencies))
        return results

    def search_local(self, expression: FilterExpression) -> SearchResultSet:
        """Evaluate an expression over fetched indicator rows instead of the server.

        Clauses fold left to right with no precedence, the order the boolean
        filter endpoint is assumed to use.

        Raises:
            SearchError: If the rows cannot be fetched or a row has no numeric id.
        """
        rows = self.load_rows()
        try:
            results = group_by_frequency(evaluate_expression(rows, expression))
        except ValueError as error:
            raise SearchError(f"Invalid indicator row: {error}") from error
        log.info("Local filter kept %d of %d indicators", results.total, len(rows))
        return results

    def add_to_table(self, table_id: str, indicator_ids: Sequence[int]) -> None:
        """Add indicators to a table; the call succeeds or fails as a whole.

        Raises:
            SearchError: If the request fails.
        """
        self._call("add indicators", lambda: self.client.add_indicators_to_table(table_id, list(indicator_ids)))
        log.info("Added %d indicators to table %s", len(indicator_ids), table_id)

    def close(self) -> None:
        self.client.close()

    @staticmethod
    def _call(what: str, func: Any) -> Any:
        try:
            return func()
        except ApiError as error:
            raise SearchError(f"Failed to {what}: {error}") from error
