# storefront/services/cart_store.py

"""In-memory shopping cart for the current session."""

import logging
import threading
from collections.abc import Callable
from decimal import Decimal

from storefront.models.cart_item import CartLineItem
from storefront.models.product import Product

logger = logging.getLogger("storefront.cart")

CartListener = Callable[["CartStore"], None]


def clamp_quantity(product: Product, desired: int) -> int:
    """Clamp a requested quantity to ``0..product.stock``.

    The store itself accepts any quantity; screens call this before
    ``update_quantity`` so the cart never asks for more than the
    snapshot says is available.
    """
    return max(0, min(desired, product.stock))


class CartStore:
    """Single in-memory authority for the cart contents.

    Screens receive the store through their constructor and read it
    directly.  The four mutations below are the only way to change
    it; each one is applied synchronously under one lock and then
    announced to subscribers, so a reader never observes a stale
    total.  Totals are recomputed on every call.
    """

    def __init__(self) -> None:
        # dict preserves insertion order = first-add order
        self._items: dict[str, CartLineItem] = {}
        self._lock = threading.RLock()
        self._listeners: list[CartListener] = []

    # ── Mutations ────────────────────────────────────────

    def add_to_cart(self, product: Product) -> None:
        """Add one unit of *product*, creating the line if needed."""
        with self._lock:
            item = self._items.get(product.id)
            if item is None:
                self._items[product.id] = CartLineItem(product=product)
                logger.debug("Added '%s' to cart", product.name)
            else:
                item.quantity += 1
                logger.debug(
                    "Incremented '%s' to %d", product.name, item.quantity
                )
            self._notify()

    def remove_from_cart(self, product_id: str) -> None:
        """Remove the line for *product_id*; absent ids are ignored."""
        with self._lock:
            item = self._items.pop(product_id, None)
            if item is None:
                return
            logger.debug("Removed '%s' from cart", item.product.name)
            self._notify()

    def update_quantity(self, product_id: str, new_quantity: int) -> None:
        """Set the quantity of an existing line.

        ``new_quantity <= 0`` removes the line.  Unknown ids are
        ignored.  No upper bound is checked against stock.
        """
        with self._lock:
            item = self._items.get(product_id)
            if item is None:
                return
            if new_quantity <= 0:
                self.remove_from_cart(product_id)
                return
            item.quantity = new_quantity
            logger.debug(
                "Set '%s' quantity to %d", item.product.name, new_quantity
            )
            self._notify()

    def clear_cart(self) -> None:
        """Empty the cart unconditionally."""
        with self._lock:
            count = len(self._items)
            self._items.clear()
            logger.debug("Cart cleared (%d line items removed)", count)
            self._notify()

    # ── Reads ────────────────────────────────────────────

    def get_cart_total(self) -> Decimal:
        """Sum of ``price * quantity`` over all line items."""
        with self._lock:
            return sum(
                (item.line_total for item in self._items.values()),
                Decimal("0.00"),
            )

    def get_cart_count(self) -> int:
        """Total units in the cart, not the number of line items."""
        with self._lock:
            return sum(item.quantity for item in self._items.values())

    def get_item(self, product_id: str) -> CartLineItem | None:
        with self._lock:
            return self._items.get(product_id)

    @property
    def items(self) -> list[CartLineItem]:
        """Line items in first-add order (a copy of the list)."""
        with self._lock:
            return list(self._items.values())

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    # ── Subscribers ──────────────────────────────────────

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register *listener* to run after every mutation.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Cart listener %r failed", listener)
