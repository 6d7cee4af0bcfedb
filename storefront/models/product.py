# storefront/models/product.py

"""Product snapshot model for catalog rows fetched from the backend."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from storefront.config.settings import Settings
from storefront.services.errors import CatalogQueryError

_CENTS = Decimal("0.01")


def to_price(value: Any) -> Decimal:
    """Coerce a JSON number or string to a two-digit ``Decimal``.

    Goes through ``str()`` so float payloads such as ``199.99`` do not
    drag binary rounding error into cart totals.
    """
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise CatalogQueryError(f"Invalid price: {value!r}") from exc
    if not price.is_finite():
        raise CatalogQueryError(f"Invalid price: {value!r}")
    return price.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_price(amount: Decimal) -> str:
    """Render an amount as ``$1,299.00``."""
    return f"{Settings.CURRENCY_SYMBOL}{amount:,.2f}"


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse a ``timestamptz`` string as returned by PostgREST."""
    if value is None:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise CatalogQueryError(f"Invalid timestamp: {value!r}") from exc


@dataclass(frozen=True)
class Product:
    """A read-only snapshot of one ``products`` row.

    Frozen: the client never edits catalog data, and a snapshot may go
    stale relative to the store without being refreshed in place.
    """

    id: str
    name: str
    price: Decimal
    description: str | None = None
    image_url: str | None = None
    category: str | None = None
    stock: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Product":
        """Build a product from a PostgREST JSON row.

        Raises:
            CatalogQueryError: When a required column is missing or a
                value cannot be decoded.
        """
        try:
            product_id = row["id"]
            name = row["name"]
            raw_price = row["price"]
        except (KeyError, TypeError) as exc:
            raise CatalogQueryError(
                f"Malformed product row: {row!r}"
            ) from exc

        try:
            stock = int(row.get("stock") or 0)
        except (TypeError, ValueError) as exc:
            raise CatalogQueryError(
                f"Invalid stock for product {product_id}: "
                f"{row.get('stock')!r}"
            ) from exc

        return cls(
            id=str(product_id),
            name=str(name),
            price=to_price(raw_price),
            description=row.get("description"),
            image_url=row.get("image_url"),
            category=row.get("category"),
            stock=stock,
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )

    @property
    def in_stock(self) -> bool:
        """True when at least one unit can be added to the cart."""
        return self.stock > 0

    @property
    def display_image(self) -> str:
        """Image URL, falling back to the placeholder."""
        return self.image_url or Settings.PLACEHOLDER_IMAGE

    @property
    def stock_label(self) -> str:
        """Availability text shown on cards and the detail view."""
        if self.in_stock:
            return f"{self.stock} in stock"
        return "Out of stock"

    @property
    def display_price(self) -> str:
        return format_price(self.price)
