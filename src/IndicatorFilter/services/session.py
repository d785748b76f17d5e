"""Advanced filter session: the working state of one filter dialog.

A session owns the field catalog, the editable expression, the latest search
results and the selection over them. Nothing here is shared between
sessions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from IndicatorFilter.core.models import FilterGroup, SearchResultSet
from IndicatorFilter.filters.builder import ExpressionBuilder, ExpressionValidationError
from IndicatorFilter.filters.catalog import FieldCatalog, placeholder_catalog
from IndicatorFilter.filters.resolver import ValueInput, resolve_value_input
from IndicatorFilter.filters.selection import (
    SelectionAction,
    SelectionState,
    SelectionValidationError,
    ToggleAll,
    ToggleItem,
    apply_selection,
    require_selection,
)
from IndicatorFilter.services.notices import Notifier
from IndicatorFilter.services.search import IndicatorSearchService, SearchError
from IndicatorFilter.utils.log import log


class SubmissionInProgressError(RuntimeError):
    """Raised when a submit is triggered while the same submit is in flight."""


class CatalogNotLoadedError(RuntimeError):
    """Raised when searching before the field catalog has loaded."""


def table_detail_path(table_id: str) -> str:
    return f"/dashboard/tables/{table_id}/"


@dataclass(slots=True)
class FilterSession:
    """State and actions of one advanced filter dialog.

    Attributes:
        service: Search service used for all collaborator calls.
        items: Caller groups; when given the catalog is built in narrow mode.
        on_results: When given, each successful result set, with ids already
            coerced to int, is handed to it instead of being shown for
            selection.
        navigate: Called with the table detail path after a successful add.
        notifier: Collects user notifications.
        local: Evaluate searches over fetched rows instead of the boolean
            filter endpoint.
    """

    service: IndicatorSearchService
    items: Sequence[FilterGroup] | None = None
    on_results: Callable[[SearchResultSet], None] | None = None
    navigate: Callable[[str], None] | None = None
    notifier: Notifier = field(default_factory=Notifier)
    local: bool = False
    catalog: FieldCatalog = field(init=False)
    builder: ExpressionBuilder = field(init=False)
    results: SearchResultSet | None = field(init=False, default=None)
    selection: SelectionState | None = field(init=False, default=None)
    show_results: bool = field(init=False, default=False)
    field_errors: dict[str, str] = field(init=False, default_factory=dict)
    is_searching: bool = field(init=False, default=False)
    is_adding: bool = field(init=False, default=False)
    closed: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.catalog = placeholder_catalog()
        self.builder = ExpressionBuilder(self.catalog)

    @property
    def can_search(self) -> bool:
        return self.catalog.loaded and not self.is_searching and not self.closed

    @property
    def has_matches(self) -> bool:
        return self.results is not None and not self.results.is_empty

    def load(self) -> bool:
        """Load the field catalog and start a fresh expression.

        Returns:
            True when the catalog loaded; False leaves the placeholder.
        """
        try:
            catalog = self.service.load_catalog(self.items)
        except SearchError as error:
            log.debug("Catalog load failed: %s", error)
            self.notifier.notify("Error", "Failed to load indicator metadata.", variant="destructive")
            return False
        if self.closed:
            return False
        self.catalog = catalog
        self.builder = ExpressionBuilder(catalog)
        self.field_errors = {}
        return True

    def value_input(self, field_key: str | None) -> ValueInput:
        return resolve_value_input(field_key, self.catalog)

    def search(self) -> SearchResultSet | None:
        """Validate and submit the current expression.

        Returns:
            The new result set, or None when the request failed or the
            session was closed before the response arrived.

        Raises:
            CatalogNotLoadedError: If the catalog is still a placeholder.
            SubmissionInProgressError: If a search is already running.
            ExpressionValidationError: If the expression is invalid; the
                messages are also kept in ``field_errors``.
        """
        if not self.catalog.loaded:
            raise CatalogNotLoadedError("Field catalog has not loaded yet")
        if self.is_searching:
            raise SubmissionInProgressError("A search is already in progress")

        try:
            expression = self.builder.build()
        except ExpressionValidationError as error:
            self.field_errors = error.errors
            raise
        self.field_errors = {}

        self.is_searching = True
        try:
            if self.local:
                results = self.service.search_local(expression)
            else:
                results = self.service.search(expression)
        except SearchError as error:
            log.debug("Search failed: %s", error)
            self.notifier.notify("Error", "Failed to search indicators. Please try again.", variant="destructive")
            return None
        finally:
            self.is_searching = False

        if self.closed:
            log.debug("Session closed; dropping %d search results", results.total)
            return None

        self.results = results
        self.selection = SelectionState.empty_for(results)
        if self.on_results is not None:
            self.show_results = False
            self.on_results(results)
        else:
            self.show_results = True
        return results

    def toggle_item(self, frequency: str, index: int) -> bool:
        return self._apply(ToggleItem(frequency=frequency, index=index), variant="destructive")

    def toggle_all(self, frequency: str) -> bool:
        return self._apply(ToggleAll(frequency=frequency), variant="default")

    def submit_selection(self, table_id: str) -> str | None:
        """Add the selected indicators to a table.

        Returns:
            The table detail path on success, None when the request failed.
            Selection is kept on failure so the user can retry.

        Raises:
            SubmissionInProgressError: If an add is already running.
            SelectionValidationError: If nothing is selected.
        """
        if self.is_adding:
            raise SubmissionInProgressError("Indicators are already being added")
        if self.results is None or self.selection is None:
            self.notifier.notify("No indicators selected", "Run a search first.", variant="destructive")
            raise SelectionValidationError("No search results to select from")
        try:
            indicator_ids = require_selection(self.selection, self.results)
        except SelectionValidationError as error:
            self.notifier.notify("No indicators selected", str(error), variant="destructive")
            raise

        self.is_adding = True
        try:
            self.service.add_to_table(table_id, indicator_ids)
        except SearchError as error:
            self.notifier.notify("Error", str(error) or "Failed to add indicators", variant="destructive")
            return None
        finally:
            self.is_adding = False

        self.notifier.notify(
            "Indicators added successfully!",
            f"Added {len(indicator_ids)} indicators to the table.",
        )
        path = table_detail_path(table_id)
        if self.navigate is not None and not self.closed:
            self.navigate(path)
        return path

    def close(self) -> None:
        """Mark the session closed; late responses are discarded."""
        self.closed = True

    def _apply(self, action: SelectionAction, *, variant: str) -> bool:
        if self.selection is None:
            return False
        outcome = apply_selection(self.selection, action)
        if outcome.notice is not None:
            self.notifier.notify(outcome.notice.title, outcome.notice.description, variant=variant)
            return False
        self.selection = outcome.state
        return True
