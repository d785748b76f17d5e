"""Output configuration for search results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from IndicatorFilter.config.common import check_non_empty, expect_str, get_section

_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Where and how results are written."""

    format: str
    base_dir: str


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load the optional ``output`` section.

    Raises:
        TypeError: If a value has the wrong type.
    """
    section = get_section(raw, "output", required=False)
    return OutputConfig(
        format=expect_str(section.get("format", "console"), "output.format").strip().lower(),
        base_dir=expect_str(section.get("base_dir", "output"), "output.base_dir"),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output settings.

    Raises:
        ValueError: On an unknown format or an empty base directory.
    """
    if config.format not in _FORMATS:
        raise ValueError(f"output.format must be one of {sorted(_FORMATS)}")
    check_non_empty(config.base_dir, "output.base_dir")
