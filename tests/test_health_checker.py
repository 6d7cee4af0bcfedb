# tests/test_health_checker.py

"""Tests for the catalog health checker."""

import unittest
from typing import Any, cast
from unittest.mock import MagicMock, patch

from storefront.services.health_checker import HealthChecker, probe_catalog
from tests.fakes import FakeCatalogClient


def _client(status_code: int = 200, error: Exception | None = None) -> Any:
    client = MagicMock()
    client.endpoint = "https://example.supabase.co/rest/v1/products"
    if error is not None:
        client.ping.side_effect = error
    else:
        client.ping.return_value = status_code
    return client


class TestProbeCatalog(unittest.TestCase):
    """Classification of a single probe."""

    def test_ok_status(self) -> None:
        result = probe_catalog(_client(200))
        self.assertEqual(result.status, "ok")
        self.assertEqual(result.message, "")

    def test_down_on_http_error(self) -> None:
        result = probe_catalog(_client(401))
        self.assertEqual(result.status, "down")
        self.assertIn("401", result.message)

    def test_down_on_exception(self) -> None:
        result = probe_catalog(_client(error=ConnectionError("Connection refused")))
        self.assertEqual(result.status, "down")
        self.assertIn("Connection refused", result.message)

    def test_slow(self) -> None:
        """Latency above the threshold is reported as slow."""
        with patch(
            "storefront.services.health_checker.time.monotonic",
            side_effect=[0.0, 10.0],
        ):
            result = probe_catalog(_client(200))
        self.assertEqual(result.status, "slow")
        self.assertEqual(result.latency_ms, 10_000.0)


class TestHealthChecker(unittest.IsolatedAsyncioTestCase):
    """HealthChecker async wrapper."""

    async def test_check_uses_client(self) -> None:
        checker = HealthChecker(cast(Any, FakeCatalogClient()))
        result = await checker.check()
        self.assertEqual(result.status, "ok")
        self.assertTrue(result.endpoint.endswith("/rest/v1/products"))

    async def test_check_reports_down(self) -> None:
        client = FakeCatalogClient()
        client.fail = True
        result = await HealthChecker(cast(Any, client)).check()
        self.assertEqual(result.status, "down")


if __name__ == "__main__":
    unittest.main()
