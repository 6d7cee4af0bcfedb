# storefront/ui/app.py

"""Terminal UI for the storefront: catalog, product detail and cart."""

import logging

from textual.app import App
from textual.binding import Binding
from textual.screen import Screen

from storefront.services.cart_store import CartStore
from storefront.services.catalog_client import CatalogClient
from storefront.ui.screens import CartScreen, CatalogScreen, ProductDetailScreen

logger = logging.getLogger("storefront.ui")


class StorefrontApp(App[None]):
    """Terminal storefront backed by the hosted product catalog.

    The app owns the one :class:`CartStore` for the session and hands
    it, together with the catalog client, to every screen it opens.
    """

    TITLE = "ShopHub"
    SUB_TITLE = "Discover amazing products at great prices"

    CSS = """
    #title_bar, #search_bar, #quantity_bar, #cart_actions {
        height: auto;
    }
    #title {
        width: 1fr;
        text-style: bold;
    }
    #cart_badge {
        width: auto;
    }
    #search_input {
        width: 1fr;
    }
    #category_select {
        width: 28;
    }
    #status, #cart_summary, #cart_total {
        padding: 0 1;
    }
    #detail_container, #cart_container {
        padding: 1 2;
    }
    #detail_quantity {
        width: 6;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("c", "show_cart", "Cart"),
    ]

    def __init__(
        self,
        client: CatalogClient | None = None,
        cart: CartStore | None = None,
    ) -> None:
        super().__init__()
        self.client = client if client is not None else CatalogClient()
        self.cart = cart if cart is not None else CartStore()

    def get_default_screen(self) -> Screen[None]:
        return CatalogScreen(self.client, self.cart)

    def open_product(self, product_id: str) -> None:
        """Navigate to the detail screen for *product_id*."""
        logger.info("Opening product %s", product_id)
        self.push_screen(ProductDetailScreen(self.client, self.cart, product_id))

    def on_catalog_screen_product_chosen(
        self, event: CatalogScreen.ProductChosen,
    ) -> None:
        self.open_product(event.product_id)

    def action_show_cart(self) -> None:
        if isinstance(self.screen, CartScreen):
            return
        self.push_screen(CartScreen(self.cart))

