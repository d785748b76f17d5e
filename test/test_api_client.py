"""Tests for the REST client with the HTTP session mocked out."""

import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from IndicatorFilter.api.client import ApiError, IndicatorApiClient


def _response(status: int = 200, payload=None, content: bytes = b"{}", text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    response.content = content
    response.text = text
    response.reason = "Error"
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


class TestIndicatorApiClient(unittest.TestCase):
    def test_boolean_filter_posts_payload_with_bearer_token(self) -> None:
        client = IndicatorApiClient("https://api.example.org/api/", token="abc", timeout=5)
        payload = {"base": {"field": "source", "value": "IMF"}, "additionalFields": []}
        with patch.object(requests.Session, "request", return_value=_response(payload={"Monthly": []})) as request:
            result = client.boolean_filter(payload)

        self.assertEqual(result, {"Monthly": []})
        request.assert_called_once_with(
            "POST", "https://api.example.org/api/boolean-filter/", timeout=5, json=payload
        )
        self.assertEqual(client._session.headers["Authorization"], "Bearer abc")

    def test_no_token_sends_no_authorization(self) -> None:
        client = IndicatorApiClient("https://api.example.org/api")
        self.assertNotIn("Authorization", client._session.headers)

    def test_add_indicators_posts_id_list(self) -> None:
        client = IndicatorApiClient("https://api.example.org/api")
        with patch.object(requests.Session, "request", return_value=_response(content=b"")) as request:
            result = client.add_indicators_to_table("7", (1, 2))

        self.assertIsNone(result)
        request.assert_called_once_with(
            "POST", "https://api.example.org/api/tables/7/indicators", timeout=30.0, json=[1, 2]
        )

    def test_error_status_raises_with_detail(self) -> None:
        client = IndicatorApiClient("https://api.example.org/api")
        response = _response(status=400, payload={"detail": "Unknown field"})
        with patch.object(requests.Session, "request", return_value=response):
            with self.assertRaisesRegex(ApiError, "HTTP 400: Unknown field") as ctx:
                client.get_indicators()
        self.assertEqual(ctx.exception.status_code, 400)

    def test_transport_failure_raises_once(self) -> None:
        client = IndicatorApiClient("https://api.example.org/api")
        with patch.object(requests.Session, "request", side_effect=requests.ConnectionError("down")) as request:
            with self.assertRaises(ApiError) as ctx:
                client.get_indicators()
        self.assertIsNone(ctx.exception.status_code)
        self.assertEqual(request.call_count, 1)

    def test_invalid_json_raises(self) -> None:
        client = IndicatorApiClient("https://api.example.org/api")
        with patch.object(requests.Session, "request", return_value=_response(payload=ValueError("bad"))):
            with self.assertRaisesRegex(ApiError, "invalid JSON"):
                client.get_indicators()

    def test_blank_base_url_rejected(self) -> None:
        with self.assertRaises(ValueError):
            IndicatorApiClient("  ")


if __name__ == "__main__":
    unittest.main()
