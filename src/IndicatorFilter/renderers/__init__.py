"""Output renderers for command results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from IndicatorFilter.renderers.base import OutputWriter
from IndicatorFilter.renderers.console import (
    ConsoleOutputWriter,
    render_catalog,
    render_expression,
    render_results,
)
from IndicatorFilter.renderers.json import JsonFileWriter, render_json

if TYPE_CHECKING:
    from IndicatorFilter.config import AppConfig


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create the writer for ``output.format``."""
    if config.output.format == "json":
        return JsonFileWriter(config.output.base_dir)
    return ConsoleOutputWriter()


__all__ = [
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "OutputWriter",
    "create_output_writer",
    "render_catalog",
    "render_expression",
    "render_json",
    "render_results",
]
