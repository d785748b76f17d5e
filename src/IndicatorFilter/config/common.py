"""Shared helpers for reading typed values out of config mappings."""

from __future__ import annotations

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a nested mapping section.

    Args:
        raw: Parent mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        The section, or an empty mapping for a missing optional section.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def require(section: Mapping[str, Any], name: str, config_key: str) -> Any:
    """Return a required value.

    Raises:
        ValueError: If ``name`` is missing from ``section``.
    """
    if name not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[name]


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_number(value: Any, config_key: str) -> float:
    """Accept int or float (not bool) and return it as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{config_key} must be a number")
    return float(value)


def expect_list(value: Any, config_key: str) -> list[Any]:
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    return value


def check_non_empty(value: str, config_key: str) -> None:
    """Reject empty or whitespace-only strings.

    Raises:
        ValueError: If ``value`` is blank.
    """
    if not value.strip():
        raise ValueError(f"{config_key} must not be empty")
