# storefront/models/cart_item.py

"""Cart line item model."""

from dataclasses import dataclass
from decimal import Decimal

from storefront.models.product import Product


@dataclass
class CartLineItem:
    """One product snapshot and the quantity requested for it.

    Identity is ``product.id``; the cart holds at most one line item per
    id and never keeps a line with ``quantity < 1``.
    """

    product: Product
    quantity: int = 1

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        """``price * quantity`` for this line."""
        return self.product.price * self.quantity
