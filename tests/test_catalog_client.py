# tests/test_catalog_client.py

"""Tests for CatalogClient query building and failure handling."""

import json
import unittest
from decimal import Decimal
from unittest.mock import MagicMock, patch

from storefront.services.catalog_client import CatalogClient
from storefront.services.errors import CatalogQueryError, ConfigurationError

BASE_URL = "https://example.supabase.co"

_ROWS = [
    {
        "id": "b",
        "name": "Yoga Mat",
        "description": None,
        "price": 49.99,
        "image_url": None,
        "category": "Sports",
        "stock": 50,
        "created_at": "2025-11-10T08:31:55+00:00",
        "updated_at": "2025-11-10T08:31:55+00:00",
    },
    {
        "id": "a",
        "name": "Running Shoes",
        "description": "Lightweight running shoes",
        "price": "129.99",
        "image_url": "https://images.example.com/shoes.jpg",
        "category": "Footwear",
        "stock": 40,
        "created_at": "2025-11-10T08:31:54+00:00",
        "updated_at": "2025-11-10T08:31:54+00:00",
    },
]


def _response(status_code: int = 200, payload: object = None) -> MagicMock:
    """Build a fake curl_cffi response."""
    resp = MagicMock()
    resp.status_code = status_code
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


def _client(session: MagicMock) -> CatalogClient:
    return CatalogClient(base_url=BASE_URL, api_key="anon-key", session=session)


class TestConfiguration(unittest.TestCase):
    """Constructor validation."""

    def test_missing_url_raises(self) -> None:
        client_kwargs = {"base_url": "", "api_key": "k"}
        with patch(
            "storefront.services.catalog_client.Settings.SUPABASE_URL", ""
        ):
            with self.assertRaises(ConfigurationError):
                CatalogClient(**client_kwargs)

    def test_missing_key_raises(self) -> None:
        with patch(
            "storefront.services.catalog_client.Settings.SUPABASE_ANON_KEY", ""
        ):
            with self.assertRaises(ConfigurationError):
                CatalogClient(base_url=BASE_URL, api_key="")

    def test_endpoint_strips_trailing_slash(self) -> None:
        client = CatalogClient(
            base_url=BASE_URL + "/", api_key="k", session=MagicMock()
        )
        self.assertEqual(client.endpoint, f"{BASE_URL}/rest/v1/products")

    def test_default_session_is_created(self) -> None:
        """Without an injected session, a curl_cffi session is built."""
        client = CatalogClient(base_url=BASE_URL, api_key="k")
        self.assertIsNotNone(client.session)


class TestListProducts(unittest.TestCase):
    """CatalogClient.list_products behaviour."""

    def test_returns_products_in_server_order(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(200, _ROWS)
        products = _client(session).list_products()
        self.assertEqual([p.id for p in products], ["b", "a"])
        self.assertEqual(products[1].price, Decimal("129.99"))

    def test_query_parameters_and_headers(self) -> None:
        """Full table, newest first, authenticated with the anon key."""
        session = MagicMock()
        session.get.return_value = _response(200, [])
        _client(session).list_products()

        args, kwargs = session.get.call_args
        self.assertEqual(args[0], f"{BASE_URL}/rest/v1/products")
        self.assertEqual(
            kwargs["params"], {"select": "*", "order": "created_at.desc"}
        )
        self.assertEqual(kwargs["headers"]["apikey"], "anon-key")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer anon-key")

    def test_empty_table(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(200, [])
        self.assertEqual(_client(session).list_products(), [])

    def test_http_error_raises_with_status(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(503, {"message": "down"})
        with self.assertRaises(CatalogQueryError) as ctx:
            _client(session).list_products()
        self.assertEqual(ctx.exception.status_code, 503)

    def test_transport_error_raises(self) -> None:
        session = MagicMock()
        session.get.side_effect = ConnectionError("Connection refused")
        with self.assertRaises(CatalogQueryError) as ctx:
            _client(session).list_products()
        self.assertIn("Connection refused", str(ctx.exception))
        self.assertIsNone(ctx.exception.status_code)

    def test_no_automatic_retry(self) -> None:
        """A failure is surfaced after exactly one request."""
        session = MagicMock()
        session.get.return_value = _response(500, None)
        with self.assertRaises(CatalogQueryError):
            _client(session).list_products()
        self.assertEqual(session.get.call_count, 1)

    def test_invalid_json_raises(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(
            200, json.JSONDecodeError("bad", "doc", 0)
        )
        with self.assertRaises(CatalogQueryError):
            _client(session).list_products()

    def test_non_list_payload_raises(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(200, {"id": "a"})
        with self.assertRaises(CatalogQueryError):
            _client(session).list_products()

    def test_malformed_row_raises(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(200, [{"id": "x"}])
        with self.assertRaises(CatalogQueryError):
            _client(session).list_products()


class TestGetProduct(unittest.TestCase):
    """CatalogClient.get_product behaviour."""

    def test_found(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(200, [_ROWS[1]])
        product = _client(session).get_product("a")
        assert product is not None
        self.assertEqual(product.name, "Running Shoes")
        _, kwargs = session.get.call_args
        self.assertEqual(kwargs["params"], {"select": "*", "id": "eq.a"})

    def test_not_found_is_none(self) -> None:
        """Zero rows is a value, not an exception."""
        session = MagicMock()
        session.get.return_value = _response(200, [])
        self.assertIsNone(_client(session).get_product("missing"))

    def test_bad_id_syntax_is_query_failure(self) -> None:
        """PostgREST rejects a non-uuid with HTTP 400."""
        session = MagicMock()
        session.get.return_value = _response(400, {"code": "22P02"})
        with self.assertRaises(CatalogQueryError) as ctx:
            _client(session).get_product("not-a-uuid")
        self.assertEqual(ctx.exception.status_code, 400)


class TestPingAndClose(unittest.TestCase):
    """Health probe and session lifecycle."""

    def test_ping_returns_status(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(200, [])
        self.assertEqual(_client(session).ping(), 200)
        _, kwargs = session.get.call_args
        self.assertEqual(kwargs["params"]["limit"], "1")

    def test_context_manager_closes_session(self) -> None:
        session = MagicMock()
        with _client(session):
            pass
        session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
