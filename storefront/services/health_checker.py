# storefront/services/health_checker.py

"""Connectivity health check for the catalog backend."""

import asyncio
import logging
import time
from dataclasses import dataclass

from storefront.config.settings import Settings
from storefront.services.catalog_client import CatalogClient

logger = logging.getLogger("storefront.health")


@dataclass
class HealthResult:
    """Result of one probe against the catalog endpoint."""

    endpoint: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_catalog(client: CatalogClient) -> HealthResult:
    """Send a one-row query and classify the response."""
    start = time.monotonic()
    try:
        status_code = client.ping()
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            endpoint=client.endpoint,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )
    elapsed_ms = (time.monotonic() - start) * 1000

    if status_code != 200:
        return HealthResult(
            endpoint=client.endpoint,
            status="down",
            latency_ms=elapsed_ms,
            message=f"HTTP {status_code}",
        )

    if elapsed_ms > Settings.HEALTH_SLOW_MS:
        return HealthResult(
            endpoint=client.endpoint,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )

    return HealthResult(
        endpoint=client.endpoint,
        status="ok",
        latency_ms=elapsed_ms,
        message="",
    )


class HealthChecker:
    """Runs the catalog probe off the event loop."""

    def __init__(self, client: CatalogClient) -> None:
        self.client = client

    async def check(self) -> HealthResult:
        result = await asyncio.to_thread(probe_catalog, self.client)
        logger.info(
            "Health check %s: %s (%.0fms) %s",
            result.endpoint,
            result.status,
            result.latency_ms,
            result.message,
        )
        return result
