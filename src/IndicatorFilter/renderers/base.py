"""Base class for search result writers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from IndicatorFilter.core.models import SearchResultSet
from IndicatorFilter.core.query import FilterExpression


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_results(self, expression: FilterExpression, results: SearchResultSet) -> None:
        """Write the results of one search.

        Args:
            expression: Expression that produced the results.
            results: Grouped search results.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Flush anything buffered.

        Args:
            action: The CLI command name (e.g., 'search').
        """
