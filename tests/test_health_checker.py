# tests/test_health_checker.py

"""Tests for the search endpoint health checker."""

import unittest
from unittest.mock import MagicMock, patch

from src.config.settings import Settings
from src.services.health_checker import (
    HealthChecker,
    HealthResult,
    probe_search_endpoint,
)

SESSION_PATH = "src.services.health_checker.curl_requests.Session"


class TestProbeSearchEndpoint(unittest.TestCase):
    """probe_search_endpoint classification."""

    @patch(SESSION_PATH)
    def test_ok(self, mock_session_cls: MagicMock) -> None:
        mock_session_cls.return_value.get.return_value = MagicMock(
            status_code=200
        )

        result = probe_search_endpoint()

        self.assertEqual(result.status, "ok")
        self.assertEqual(result.target, Settings.SEARCH_URL)
        self.assertEqual(result.message, "")
        mock_session_cls.return_value.close.assert_called_once()

    @patch(SESSION_PATH)
    def test_http_error_is_down(self, mock_session_cls: MagicMock) -> None:
        mock_session_cls.return_value.get.return_value = MagicMock(
            status_code=503
        )

        result = probe_search_endpoint()

        self.assertEqual(result.status, "down")
        self.assertEqual(result.message, "HTTP 503")

    @patch(SESSION_PATH)
    def test_exception_is_down(self, mock_session_cls: MagicMock) -> None:
        mock_session_cls.return_value.get.side_effect = ConnectionError(
            "Network unreachable"
        )

        result = probe_search_endpoint("https://search.example/search")

        self.assertEqual(result.status, "down")
        self.assertEqual(result.target, "https://search.example/search")
        self.assertIn("Network unreachable", result.message)

    @patch("src.services.health_checker.time.monotonic")
    @patch(SESSION_PATH)
    def test_slow(
        self,
        mock_session_cls: MagicMock,
        mock_monotonic: MagicMock,
    ) -> None:
        mock_session_cls.return_value.get.return_value = MagicMock(
            status_code=200
        )
        mock_monotonic.side_effect = [100.0, 106.5]

        result = probe_search_endpoint()

        self.assertEqual(result.status, "slow")
        self.assertAlmostEqual(result.latency_ms, 6500.0)

    @patch(SESSION_PATH)
    def test_sends_fixed_search_params(
        self, mock_session_cls: MagicMock,
    ) -> None:
        mock_session_cls.return_value.get.return_value = MagicMock(
            status_code=200
        )

        probe_search_endpoint()

        _, kwargs = mock_session_cls.return_value.get.call_args
        self.assertEqual(kwargs["params"], Settings.SEARCH_PARAMS)
        self.assertEqual(kwargs["timeout"], Settings.HEALTH_TIMEOUT)


class TestHealthChecker(unittest.IsolatedAsyncioTestCase):
    """HealthChecker.check runs the probe off the event loop."""

    async def test_check_returns_probe_result(self) -> None:
        canned = HealthResult(
            target="https://search.example",
            status="ok",
            latency_ms=12.0,
            message="",
        )
        with patch(
            "src.services.health_checker.probe_search_endpoint",
            return_value=canned,
        ):
            result = await HealthChecker().check()

        self.assertIs(result, canned)


if __name__ == "__main__":
    unittest.main()
