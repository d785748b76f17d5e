"""JSON output for search results."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from IndicatorFilter.core.models import SearchResultSet
from IndicatorFilter.core.query import FilterExpression
from IndicatorFilter.renderers.base import OutputWriter
from IndicatorFilter.utils.log import log


def render_json(expression: FilterExpression, results: SearchResultSet) -> dict[str, Any]:
    """Return one search as a JSON-serializable mapping."""
    return {
        "filter": expression.to_payload(),
        "total": results.total,
        "results": results.to_payload(),
    }


class JsonFileWriter(OutputWriter):
    """Accumulate searches and write them to one JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.searches: list[dict[str, Any]] = []
        self.written_path: Path | None = None

    def write_results(self, expression: FilterExpression, results: SearchResultSet) -> None:
        self.searches.append(render_json(expression, results))

    def finalize(self, action: str) -> None:
        """Write accumulated searches to ``<base_dir>/json/<action>_<stamp>.json``."""
        if not self.searches:
            return
        self.output_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = self.output_dir / f"{action}_{stamp}.json"
        path.write_text(json.dumps(self.searches, ensure_ascii=False, indent=2), encoding="utf-8")
        self.written_path = path
        log.info("JSON saved to %s", path)
