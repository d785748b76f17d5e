"""API connection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from IndicatorFilter.config.common import check_non_empty, expect_number, expect_str, get_section, require


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Validated API connection settings.

    The token itself never lives in the config file; it is read from the
    environment variable named by ``token_env``.
    """

    base_url: str
    token_env: str
    token: str
    timeout: float


def load_api(raw: Mapping[str, Any]) -> ApiConfig:
    """Load the ``api`` section and resolve the token from the environment.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If a required key is missing.
    """
    section = get_section(raw, "api", required=True)
    token_env = expect_str(section.get("token_env", "INDICATOR_API_TOKEN"), "api.token_env")
    return ApiConfig(
        base_url=expect_str(require(section, "base_url", "api.base_url"), "api.base_url").strip(),
        token_env=token_env,
        token=os.getenv(token_env, "").strip() if token_env.strip() else "",
        timeout=expect_number(section.get("timeout", 30), "api.timeout"),
    )


def check_api(config: ApiConfig) -> None:
    """Validate API settings.

    Raises:
        ValueError: On an empty or non-HTTP base URL, or a non-positive timeout.
    """
    check_non_empty(config.base_url, "api.base_url")
    if not config.base_url.startswith(("http://", "https://")):
        raise ValueError("api.base_url must start with http:// or https://")
    if config.timeout <= 0:
        raise ValueError("api.timeout must be positive")
