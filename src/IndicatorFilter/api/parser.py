"""Parsers for indicator API payloads."""

from __future__ import annotations

from typing import Any, Mapping

from IndicatorFilter.core.models import IndicatorItem, MetadataSet, SearchResultSet

_METADATA_KEYS = ("category", "base_year", "region", "country", "source", "frequency", "unit", "code")


def parse_metadataset(payload: Any) -> MetadataSet:
    """Extract the metadata set from a ``GET /indicators/`` response.

    Missing or non-list categories become empty; null values are dropped and
    the rest are stringified.

    Raises:
        TypeError: If the payload is not an object.
    """
    if not isinstance(payload, Mapping):
        raise TypeError("indicators response must be an object")
    raw = payload.get("metadataset") or {}
    if not isinstance(raw, Mapping):
        raise TypeError("metadataset must be an object")
    return MetadataSet(**{key: _str_tuple(raw.get(key)) for key in _METADATA_KEYS})


def parse_indicator_rows(payload: Any) -> list[dict[str, Any]]:
    """Extract indicator rows from a ``GET /indicators/`` response."""
    if not isinstance(payload, Mapping):
        raise TypeError("indicators response must be an object")
    rows = payload.get("indicators") or []
    if not isinstance(rows, list):
        raise TypeError("indicators must be a list")
    return [dict(row) for row in rows if isinstance(row, Mapping)]


def parse_search_results(payload: Any) -> SearchResultSet:
    """Parse a boolean filter response into a result set.

    Every id is coerced to ``int`` whether it arrived as a number or a
    numeric string. A null or empty payload is a valid empty result.

    Raises:
        TypeError: If the payload or a group has the wrong shape.
        ValueError: If an id is not numeric.
    """
    if payload is None:
        return SearchResultSet()
    if not isinstance(payload, Mapping):
        raise TypeError("boolean filter response must be an object")

    groups: dict[str, tuple[IndicatorItem, ...]] = {}
    for frequency, items in payload.items():
        if items is None:
            items = []
        if not isinstance(items, list):
            raise TypeError(f"results for frequency {frequency!r} must be a list")
        groups[str(frequency)] = tuple(_parse_item(item, str(frequency), idx) for idx, item in enumerate(items))
    return SearchResultSet(groups=groups)


def coerce_id(value: Any) -> int:
    """Coerce a numeric or numeric-string id to ``int``.

    Raises:
        ValueError: If the value is not an integral number.
    """
    if isinstance(value, bool):
        raise ValueError(f"id must be numeric, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(f"id must be integral, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            number = float(text)
            if number.is_integer():
                return int(number)
            raise ValueError(f"id must be integral, got {value!r}") from None
    raise ValueError(f"id must be numeric, got {value!r}")


def _parse_item(item: Any, frequency: str, idx: int) -> IndicatorItem:
    if not isinstance(item, Mapping):
        raise TypeError(f"{frequency}[{idx}] must be an object")
    if "id" not in item:
        raise ValueError(f"{frequency}[{idx}] is missing id")
    return IndicatorItem(
        id=coerce_id(item["id"]),
        name=_safe_str(item.get("name")),
        code=_safe_str(item.get("code")),
    )


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


def _safe_str(value: Any) -> str:
    return "" if value is None else str(value)
