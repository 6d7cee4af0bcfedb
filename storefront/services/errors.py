# storefront/services/errors.py

"""Exceptions raised by the storefront services.

A missing product is *not* represented here: catalog lookups return
``None`` for an id with no row, and callers treat that as a navigation
dead-end rather than a failure.
"""


class StorefrontError(Exception):
    """Base class for all storefront errors."""


class ConfigurationError(StorefrontError):
    """The backend URL or API key is missing from the environment."""


class CatalogQueryError(StorefrontError):
    """A remote catalog query could not complete.

    Covers transport failures, non-200 responses and payloads that do
    not decode into product rows.
    """

    def __init__(
        self, message: str, status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
