"""CLI package for IndicatorFilter command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from IndicatorFilter.cli.runner import CommandRunner
from IndicatorFilter.cli.ui import cli


def main() -> None:
    """Run IndicatorFilter CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
