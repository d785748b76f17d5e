"""REST client and payload parsers for the indicator platform API."""

from __future__ import annotations

from IndicatorFilter.api.client import ApiError, IndicatorApiClient
from IndicatorFilter.api.parser import (
    coerce_id,
    parse_indicator_rows,
    parse_metadataset,
    parse_search_results,
)

__all__ = [
    "ApiError",
    "IndicatorApiClient",
    "coerce_id",
    "parse_indicator_rows",
    "parse_metadataset",
    "parse_search_results",
]
