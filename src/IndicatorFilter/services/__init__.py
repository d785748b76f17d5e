"""Service layer for IndicatorFilter.

Wraps the REST client in an application service and provides the per-dialog
filter session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from IndicatorFilter.services.notices import Notice, Notifier
from IndicatorFilter.services.search import IndicatorSearchService, SearchError
from IndicatorFilter.services.session import (
    CatalogNotLoadedError,
    FilterSession,
    SubmissionInProgressError,
    table_detail_path,
)

if TYPE_CHECKING:
    from IndicatorFilter.config import AppConfig


def create_search_service(config: AppConfig) -> IndicatorSearchService:
    """Create a search service connected to the configured API.

    Args:
        config: Application configuration.

    Returns:
        Search service owning a fresh HTTP client.
    """
    from IndicatorFilter.api.client import IndicatorApiClient

    client = IndicatorApiClient(
        base_url=config.api.base_url,
        token=config.api.token,
        timeout=config.api.timeout,
    )
    return IndicatorSearchService(client=client)


__all__ = [
    "CatalogNotLoadedError",
    "FilterSession",
    "IndicatorSearchService",
    "Notice",
    "Notifier",
    "SearchError",
    "SubmissionInProgressError",
    "create_search_service",
    "table_detail_path",
]
