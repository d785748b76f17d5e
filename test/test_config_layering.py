"""Tests for layered config parsing and validation."""

import os
import sys
import unittest
from copy import deepcopy
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from IndicatorFilter.config import parse_clause_text, parse_condition_text, parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "api": {"base_url": "https://indicators.example.org/api", "token_env": "INDICATOR_API_TOKEN", "timeout": 30},
        "output": {"format": "console", "base_dir": "output"},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        with patch.dict(os.environ, {"INDICATOR_API_TOKEN": "secret"}, clear=False):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.api.base_url, "https://indicators.example.org/api")
        self.assertEqual(cfg.api.token, "secret")
        self.assertEqual(cfg.api.timeout, 30.0)
        self.assertEqual(cfg.output.format, "console")
        self.assertIsNone(cfg.filter.expression)

    def test_missing_token_is_empty(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.api.token, "")

    def test_missing_api_section_error(self) -> None:
        raw = _base_raw_config()
        del raw["api"]
        with self.assertRaisesRegex(ValueError, "api"):
            parse_config_dict(raw)

    def test_api_base_url_scheme_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["api"]["base_url"] = "ftp://example.org"
        with self.assertRaisesRegex(ValueError, "api\\.base_url"):
            parse_config_dict(raw)

    def test_api_timeout_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["api"]["timeout"] = "30"
        with self.assertRaisesRegex(TypeError, "api\\.timeout"):
            parse_config_dict(raw)

    def test_output_unknown_format_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["output"]["format"] = "markdown"
        with self.assertRaisesRegex(ValueError, "output\\.format"):
            parse_config_dict(raw)

    def test_log_level_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "verbose"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_filter_section_builds_expression(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["filter"] = {
            "base": {"field": "source", "value": "Eurostat"},
            "additional": [
                {"boolean": "or", "field": "seasonally_adjusted", "value": True},
                {"field": "base_year", "value": 2015},
            ],
        }
        cfg = parse_config_dict(raw)
        assert cfg.filter.expression is not None
        self.assertEqual(
            cfg.filter.expression.to_payload(),
            {
                "base": {"field": "source", "value": "Eurostat"},
                "additionalFields": [
                    {"boolean": "OR", "field": "seasonally_adjusted", "value": "true"},
                    {"boolean": "AND", "field": "base_year", "value": "2015"},
                ],
            },
        )

    def test_filter_unknown_operator_error_contains_key(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["filter"] = {
            "base": {"field": "source", "value": "Eurostat"},
            "additional": [{"boolean": "XOR", "field": "unit", "value": "%"}],
        }
        with self.assertRaisesRegex(ValueError, "filter\\.additional\\[0\\]\\.boolean"):
            parse_config_dict(raw)

    def test_filter_blank_value_error(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["filter"] = {"base": {"field": "source", "value": "  "}}
        with self.assertRaisesRegex(ValueError, "filter\\.base\\.value"):
            parse_config_dict(raw)


class TestClauseText(unittest.TestCase):
    def test_condition_text(self) -> None:
        self.assertEqual(parse_condition_text("source = Eurostat", "--base"), ("source", "Eurostat"))
        self.assertEqual(parse_condition_text("code=A=B", "--base"), ("code", "A=B"))
        with self.assertRaisesRegex(ValueError, "--base"):
            parse_condition_text("source", "--base")

    def test_clause_text(self) -> None:
        clause = parse_clause_text("not frequency=ANNUAL", "--clause")
        self.assertEqual(clause.to_payload(), {"boolean": "NOT", "field": "frequency", "value": "ANNUAL"})
        with self.assertRaisesRegex(ValueError, "--clause"):
            parse_clause_text("XOR unit=%", "--clause")


if __name__ == "__main__":
    unittest.main()
