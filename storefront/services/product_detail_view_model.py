# storefront/services/product_detail_view_model.py

"""State behind the product detail screen."""

import asyncio
import logging

from storefront.models.product import Product
from storefront.services.cart_store import CartStore
from storefront.services.catalog_client import CatalogClient
from storefront.services.errors import CatalogQueryError

logger = logging.getLogger("storefront.detail")


class ProductDetailViewModel:
    """Loads a single product and drives the quantity selector.

    The selector is where the stock limit lives: the quantity never
    exceeds ``product.stock`` and never drops below 1.
    """

    def __init__(self, client: CatalogClient, cart: CartStore) -> None:
        self.client = client
        self.cart = cart
        self.product: Product | None = None
        self.loading: bool = False
        self.quantity: int = 1
        self._closed: bool = False

    async def load_product(self, product_id: str) -> Product | None:
        """Fetch *product_id* from the backend.

        Returns the product, or ``None`` when there is no such row or
        the screen was closed before the response arrived.  Query
        failures are logged and re-raised, except after a close.
        """
        self.loading = True
        try:
            product = await asyncio.to_thread(
                self.client.get_product, product_id
            )
        except CatalogQueryError:
            if self._closed:
                logger.debug(
                    "Discarding failure for product %s after close", product_id
                )
                return None
            logger.error(
                "Error fetching product %s", product_id, exc_info=True
            )
            raise
        finally:
            self.loading = False

        if self._closed:
            logger.debug("Discarding product %s after close", product_id)
            return None

        if product is None:
            logger.warning("Product %s not found", product_id)
        self.product = product
        self.quantity = 1
        return product

    @property
    def can_increment(self) -> bool:
        return self.product is not None and self.quantity < self.product.stock

    @property
    def can_decrement(self) -> bool:
        return self.quantity > 1

    def increment_quantity(self) -> int:
        if self.can_increment:
            self.quantity += 1
        return self.quantity

    def decrement_quantity(self) -> int:
        if self.can_decrement:
            self.quantity -= 1
        return self.quantity

    def add_to_cart(self) -> int:
        """Add the selected quantity to the cart, one unit at a time.

        Returns the number of units added (0 when nothing is loaded or
        the product is out of stock).
        """
        if self.product is None or not self.product.in_stock:
            return 0
        for _ in range(self.quantity):
            self.cart.add_to_cart(self.product)
        logger.info(
            "Added %d x '%s' to cart", self.quantity, self.product.name
        )
        return self.quantity

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True
