"""Public configuration API for IndicatorFilter."""

from __future__ import annotations

from IndicatorFilter.config.api import ApiConfig
from IndicatorFilter.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    merge_config_dicts,
    parse_config_dict,
)
from IndicatorFilter.config.filter import FilterConfig, parse_clause_text, parse_condition_text
from IndicatorFilter.config.output import OutputConfig
from IndicatorFilter.config.runtime import RuntimeConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ApiConfig",
    "AppConfig",
    "FilterConfig",
    "OutputConfig",
    "RuntimeConfig",
    "load_config",
    "merge_config_dicts",
    "parse_clause_text",
    "parse_condition_text",
    "parse_config_dict",
]
