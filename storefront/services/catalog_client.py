# storefront/services/catalog_client.py

"""Read-only client for the hosted ``products`` table (PostgREST)."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests

from storefront.config.settings import Settings
from storefront.models.product import Product
from storefront.services.errors import CatalogQueryError, ConfigurationError

logger = logging.getLogger("storefront.catalog")


class CatalogClient:
    """Issues the two catalog queries the storefront needs.

    ``list_products`` returns the whole table, newest first.
    ``get_product`` returns one row or ``None``.  Every call is made
    exactly once: a failure raises :class:`CatalogQueryError` and it is
    up to the caller to try again.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        session: curl_requests.Session | None = None,
    ) -> None:
        self.settings = Settings()
        self.base_url = (base_url or self.settings.SUPABASE_URL).rstrip("/")
        self.api_key = api_key or self.settings.SUPABASE_ANON_KEY
        if not self.base_url or not self.api_key:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_ANON_KEY must be set"
            )
        self.table = self.settings.PRODUCTS_TABLE
        self.session = session or curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self) -> dict[str, str]:
        return {
            **self.settings.DEFAULT_HEADERS,
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }

    def _fetch_rows(self, params: dict[str, str]) -> list[dict[str, Any]]:
        """GET the table endpoint and return the decoded row list."""
        try:
            resp = self.session.get(
                self.endpoint,
                params=params,
                headers=self._headers(),
                timeout=self._request_timeout,
            )
        except Exception as exc:
            logger.warning(
                "Catalog request failed (%s): %s", params, exc, exc_info=True
            )
            raise CatalogQueryError(f"Catalog request failed: {exc}") from exc

        if resp.status_code != 200:
            logger.warning(
                "Catalog returned HTTP %d for %s", resp.status_code, params
            )
            raise CatalogQueryError(
                f"Catalog returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            rows = resp.json()
        except ValueError as exc:
            raise CatalogQueryError(
                "Catalog response is not valid JSON",
                status_code=resp.status_code,
            ) from exc

        if not isinstance(rows, list):
            raise CatalogQueryError(
                f"Expected a row list, got {type(rows).__name__}",
                status_code=resp.status_code,
            )
        return rows

    def list_products(self) -> list[Product]:
        """Fetch every product ordered by ``created_at`` descending."""
        rows = self._fetch_rows({"select": "*", "order": "created_at.desc"})
        products = [Product.from_row(row) for row in rows]
        logger.info("Fetched %d products", len(products))
        return products

    def get_product(self, product_id: str) -> Product | None:
        """Fetch one product by primary key; ``None`` if no such row."""
        rows = self._fetch_rows({"select": "*", "id": f"eq.{product_id}"})
        if not rows:
            logger.info("No product with id %s", product_id)
            return None
        return Product.from_row(rows[0])

    def ping(self) -> int:
        """Issue a one-row probe and return the HTTP status code.

        Transport errors propagate unchanged; the health checker turns
        them into a "down" result.
        """
        resp = self.session.get(
            self.endpoint,
            params={"select": "id", "limit": "1"},
            headers=self._headers(),
            timeout=self._request_timeout,
        )
        return int(resp.status_code)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
