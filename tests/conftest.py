# tests/conftest.py

"""Shared pytest fixtures for the storefront tests."""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_http_session() -> Generator[MagicMock, None, None]:
    """Patch the curl_cffi session class so no test touches the network."""
    with patch(
        "storefront.services.catalog_client.curl_requests.Session"
    ) as session_cls:
        yield session_cls
