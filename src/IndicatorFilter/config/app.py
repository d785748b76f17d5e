"""Application config orchestration and YAML loading entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from IndicatorFilter.config.api import ApiConfig, check_api, load_api
from IndicatorFilter.config.filter import FilterConfig, check_filter, load_filter
from IndicatorFilter.config.output import OutputConfig, check_output, load_output
from IndicatorFilter.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    api: ApiConfig
    output: OutputConfig
    filter: FilterConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse and validate a config mapping, one domain at a time."""
    runtime = load_runtime(raw)
    api = load_api(raw)
    output = load_output(raw)
    filter_config = load_filter(raw)

    check_runtime(runtime)
    check_api(api)
    check_output(output)
    check_filter(filter_config)

    return AppConfig(runtime=runtime, api=api, output=output, filter=filter_config)


def load_config(path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load a config file layered over the defaults.

    When ``path`` is the default file itself, or no default file exists, the
    file is parsed on its own.
    """
    override = parse_yaml(path.read_text(encoding="utf-8"))
    if path.resolve() == default_path.resolve() or not default_path.is_file():
        return parse_config_dict(override)
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text into a mapping.

    Raises:
        ValueError: If the document root is not a mapping.
    """
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; override wins, lists are replaced."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
