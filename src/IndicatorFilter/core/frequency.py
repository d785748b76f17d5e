"""Frequency codes, display names, and workflow compatibility."""

from __future__ import annotations

from typing import Final, Mapping

FREQUENCY_DISPLAY_NAMES: Final[Mapping[str, str]] = {
    "MINUTE": "Per Minute",
    "HOURLY": "Hourly",
    "DAILY": "Daily",
    "WEEKLY": "Weekly",
    "BIWEEKLY": "Biweekly",
    "MONTHLY": "Monthly",
    "BIMONTHLY": "Every 2 Months",
    "QUARTERLY": "Quarterly",
    "TRIANNUAL": "Every 4 Months",
    "SEMIANNUAL": "Semiannual / Biannual",
    "ANNUAL": "Annual",
    "CUSTOM": "Custom / Other",
}

# Workflow schedule label -> indicator frequency spellings it can feed.
_WORKFLOW_COMPATIBLE: Final[Mapping[str, tuple[str, ...]]] = {
    "Monthly": ("MONTHLY", "Monthly"),
    "Quarterly": ("QUARTERLY", "Quarterly"),
    "Yearly": ("ANNUAL", "Annual", "Yearly"),
    "Daily": ("DAILY", "Daily"),
    "Weekly": ("WEEKLY", "Weekly"),
    "Biweekly": ("BIWEEKLY", "Biweekly"),
    "Bimonthly": ("BIMONTHLY", "Every 2 Months", "Bimonthly"),
    "Semiannual": ("SEMIANNUAL", "Semiannual", "Biannual", "Semiannual / Biannual"),
    "Annual": ("ANNUAL", "Annual", "Yearly"),
}


def frequency_display_name(frequency: str) -> str:
    """Return the display name for a frequency code, or the input unchanged."""
    return FREQUENCY_DISPLAY_NAMES.get(frequency, frequency)


def frequency_by_display_name(display_name: str) -> str | None:
    """Return the frequency code whose display name matches, if any."""
    for code, name in FREQUENCY_DISPLAY_NAMES.items():
        if name == display_name:
            return code
    return None


def is_frequency_compatible(workflow_frequency: str | None, indicator_frequency: str | None) -> bool:
    """Check whether an indicator frequency fits a workflow frequency.

    Missing values on either side never filter anything out. Workflow labels
    without a known mapping fall back to a case-insensitive exact match.
    """
    if not workflow_frequency or not indicator_frequency:
        return True
    candidates = _WORKFLOW_COMPATIBLE.get(workflow_frequency, ())
    target = indicator_frequency.upper()
    if not candidates:
        return workflow_frequency.upper() == target
    return any(candidate.upper() == target for candidate in candidates)
