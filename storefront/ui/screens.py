# storefront/ui/screens.py

"""Catalog, product detail and cart screens for the storefront TUI."""

import logging
from collections.abc import Callable
from typing import cast

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.message import Message
from textual.screen import Screen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Select,
    Static,
)

from storefront.config.settings import Settings
from storefront.models.product import Product, format_price
from storefront.services.cart_store import CartStore, clamp_quantity
from storefront.services.catalog_client import CatalogClient
from storefront.services.catalog_view_model import CatalogViewModel
from storefront.services.errors import CatalogQueryError
from storefront.services.product_detail_view_model import (
    ProductDetailViewModel,
)

logger = logging.getLogger("storefront.ui")

ALL_CATEGORIES_LABEL = "All Categories"


def cart_summary(cart: CartStore) -> str:
    """Header text for the cart, e.g. ``3 items in your cart``."""
    count = cart.get_cart_count()
    if count == 0:
        return "Your cart is empty"
    return f"{count} item{'s' if count != 1 else ''} in your cart"


class CatalogScreen(Screen[None]):
    """Searchable, category-filtered product list."""

    BINDINGS = [
        Binding("a", "add_to_cart", "Add to Cart"),
        Binding("r", "reload", "Reload"),
        Binding("escape", "clear_filters", "Clear Filters"),
    ]

    class ProductChosen(Message):
        """Posted when a product row is selected for the detail view."""

        def __init__(self, product_id: str) -> None:
            super().__init__()
            self.product_id = product_id

    def __init__(self, client: CatalogClient, cart: CartStore) -> None:
        super().__init__()
        self.cart = cart
        self.view = CatalogViewModel(client)
        self._visible: list[Product] = []
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Horizontal(
                Static("🛒 ShopHub", id="title"),
                Static(cart_summary(self.cart), id="cart_badge"),
                id="title_bar",
            ),
            Horizontal(
                Input(placeholder="Search products...", id="search_input"),
                Select[str](
                    [(ALL_CATEGORIES_LABEL, Settings.ALL_CATEGORIES)],
                    value=Settings.ALL_CATEGORIES,
                    allow_blank=False,
                    id="category_select",
                ),
                Button("Clear Filters", id="clear_btn"),
                id="search_bar",
            ),
            Static("Loading products...", id="status"),
            DataTable(id="products_table", zebra_stripes=True, cursor_type="row"),
            id="main_container",
        )
        yield Footer()

    @property
    def table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )

    async def on_mount(self) -> None:
        """Set up columns, follow the cart and fetch the catalog."""
        self.table.add_columns("Name", "Category", "Price", "Availability")
        self._unsubscribe = self.cart.subscribe(self._on_cart_changed)
        await self.refresh_catalog()

    def on_unmount(self) -> None:
        self.view.close()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_cart_changed(self, cart: CartStore) -> None:
        self.query_one("#cart_badge", Static).update(cart_summary(cart))

    async def refresh_catalog(self) -> None:
        """Load the catalog; on failure keep showing the last list."""
        status = self.query_one("#status", Static)
        status.update("Loading products...")
        try:
            applied = await self.view.load_products()
        except CatalogQueryError:
            self.app.notify("Failed to load products", severity="error")
            self.populate_table()
            return
        if not applied:
            return

        select = cast(Select[str], self.query_one("#category_select", Select))
        select.set_options(
            [(ALL_CATEGORIES_LABEL, Settings.ALL_CATEGORIES)]
            + [(c, c) for c in self.view.categories]
        )
        if self.view.selected_category in self.view.categories:
            select.value = self.view.selected_category
        else:
            self.view.set_category(Settings.ALL_CATEGORIES)
        self.populate_table()

    def populate_table(self) -> None:
        """Render the filtered product list."""
        self._visible = self.view.filtered_products
        table = self.table
        table.clear()
        for p in self._visible:
            stock_style = "" if p.in_stock else "dim red"
            table.add_row(
                Text(p.name[:50]),
                Text(p.category or ""),
                Text(p.display_price, style="bold green"),
                Text(p.stock_label, style=stock_style),
                key=p.id,
            )

        status = self.query_one("#status", Static)
        if not self.view.products:
            status.update("No products available")
        elif not self._visible:
            status.update("❌ No products match your filters")
        else:
            status.update(
                f"Showing {len(self._visible)} of "
                f"{len(self.view.products)} products"
            )

    def highlighted_product(self) -> Product | None:
        row = self.table.cursor_row
        if 0 <= row < len(self._visible):
            return self._visible[row]
        return None

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search_input":
            self.view.set_search_text(event.value)
            self.populate_table()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "category_select" and event.value != Select.BLANK:
            self.view.set_category(str(event.value))
            self.populate_table()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "clear_btn":
            self.action_clear_filters()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key.value is not None:
            self.post_message(self.ProductChosen(event.row_key.value))

    def action_clear_filters(self) -> None:
        self.view.clear_filters()
        self.query_one("#search_input", Input).value = ""
        select = cast(Select[str], self.query_one("#category_select", Select))
        select.value = Settings.ALL_CATEGORIES
        self.populate_table()

    def action_add_to_cart(self) -> None:
        product = self.highlighted_product()
        if product is None:
            self.app.notify("Select a product first", severity="warning")
            return
        if not product.in_stock:
            self.app.notify(f"{product.name} is out of stock", severity="warning")
            return
        self.cart.add_to_cart(product)
        logger.debug("Catalog add-to-cart: %s", product.id)
        self.app.notify(f"Added {product.name} to cart")

    async def action_reload(self) -> None:
        await self.refresh_catalog()


class ProductDetailScreen(Screen[None]):
    """Single product view with a stock-bounded quantity selector."""

    BINDINGS = [
        Binding("escape", "back", "Back to Shop"),
        Binding("plus", "increment", "+"),
        Binding("minus", "decrement", "-"),
        Binding("a", "add_to_cart", "Add to Cart"),
    ]

    def __init__(
        self, client: CatalogClient, cart: CartStore, product_id: str,
    ) -> None:
        super().__init__()
        self.product_id = product_id
        self.view = ProductDetailViewModel(client, cart)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Button("← Back to Shop", id="back_btn"),
            Static("Loading...", id="detail_name"),
            Static("", id="detail_price"),
            Static("", id="detail_description"),
            Static("", id="detail_stock"),
            Static("", id="detail_image"),
            Horizontal(
                Button("-", id="dec_btn"),
                Static("1", id="detail_quantity"),
                Button("+", id="inc_btn"),
                Button("Add to Cart", variant="primary", id="add_btn"),
                id="quantity_bar",
            ),
            id="detail_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        try:
            product = await self.view.load_product(self.product_id)
        except CatalogQueryError:
            self.app.notify("Failed to load product", severity="error")
            self.query_one("#detail_name", Static).update("Product not found")
            self.query_one("#quantity_bar").display = False
            return

        if self.view.closed:
            return
        if product is None:
            logger.info("Product %s not found, returning to catalog", self.product_id)
            self.app.notify("Product not found", severity="error")
            self.app.pop_screen()
            return
        self.render_product()

    def on_unmount(self) -> None:
        self.view.close()

    def render_product(self) -> None:
        product = self.view.product
        if product is None:
            return
        title = product.name
        if product.category:
            title = f"{title}  [{product.category}]"
        self.query_one("#detail_name", Static).update(Text(title, style="bold"))
        self.query_one("#detail_price", Static).update(
            Text(product.display_price, style="bold green")
        )
        self.query_one("#detail_description", Static).update(
            Text(product.description or "No description available")
        )
        self.query_one("#detail_stock", Static).update(
            f"{product.stock} items in stock" if product.in_stock else "Out of stock"
        )
        self.query_one("#detail_image", Static).update(
            Text(product.display_image, style="dim")
        )
        self.query_one("#quantity_bar").display = product.in_stock
        self._render_quantity()

    def _render_quantity(self) -> None:
        self.query_one("#detail_quantity", Static).update(str(self.view.quantity))
        self.query_one("#dec_btn", Button).disabled = not self.view.can_decrement
        self.query_one("#inc_btn", Button).disabled = not self.view.can_increment

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "back_btn":
            self.action_back()
        elif event.button.id == "dec_btn":
            self.action_decrement()
        elif event.button.id == "inc_btn":
            self.action_increment()
        elif event.button.id == "add_btn":
            self.action_add_to_cart()

    def action_increment(self) -> None:
        self.view.increment_quantity()
        self._render_quantity()

    def action_decrement(self) -> None:
        self.view.decrement_quantity()
        self._render_quantity()

    def action_add_to_cart(self) -> None:
        added = self.view.add_to_cart()
        if added and self.view.product is not None:
            self.app.notify(f"Added {added} x {self.view.product.name} to cart")

    def action_back(self) -> None:
        self.app.pop_screen()


class CartScreen(Screen[None]):
    """Cart contents with per-line quantity controls and the total."""

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("plus", "increment", "+"),
        Binding("minus", "decrement", "-"),
        Binding("d", "remove", "Remove"),
        Binding("x", "clear_cart", "Clear Cart"),
    ]

    def __init__(self, cart: CartStore) -> None:
        super().__init__()
        self.cart = cart
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static("Shopping Cart", id="cart_title"),
            Static(cart_summary(self.cart), id="cart_summary"),
            DataTable(id="cart_table", zebra_stripes=True, cursor_type="row"),
            Static("", id="cart_total"),
            Horizontal(
                Button("Clear Cart", id="clear_cart_btn"),
                Button("Back to Shop", variant="primary", id="cart_back_btn"),
                id="cart_actions",
            ),
            id="cart_container",
        )
        yield Footer()

    @property
    def table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#cart_table", DataTable),
        )

    def on_mount(self) -> None:
        self.table.add_columns("Product", "Unit Price", "Qty", "Subtotal")
        self._unsubscribe = self.cart.subscribe(lambda _cart: self.populate())
        self.populate()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def populate(self) -> None:
        """Redraw the line items and totals from the store."""
        table = self.table
        cursor = table.cursor_row
        table.clear()
        for item in self.cart.items:
            table.add_row(
                Text(item.product.name[:40]),
                item.product.display_price,
                str(item.quantity),
                Text(format_price(item.line_total), style="bold"),
                key=item.product_id,
            )
        if self.cart.items:
            table.move_cursor(row=min(cursor, len(self.cart) - 1))

        self.query_one("#cart_summary", Static).update(cart_summary(self.cart))
        total = self.query_one("#cart_total", Static)
        if self.cart.is_empty:
            total.update("Start shopping to add items to your cart")
        else:
            total.update(
                Text(f"Total: {format_price(self.cart.get_cart_total())}", style="bold")
            )

    def _highlighted_item_id(self) -> str | None:
        items = self.cart.items
        row = self.table.cursor_row
        if 0 <= row < len(items):
            return items[row].product_id
        return None

    def action_increment(self) -> None:
        product_id = self._highlighted_item_id()
        item = self.cart.get_item(product_id) if product_id else None
        if item is None:
            return
        wanted = clamp_quantity(item.product, item.quantity + 1)
        if wanted <= item.quantity:
            self.app.notify(
                f"Only {item.product.stock} of {item.product.name} in stock",
                severity="warning",
            )
            return
        self.cart.update_quantity(item.product_id, wanted)

    def action_decrement(self) -> None:
        product_id = self._highlighted_item_id()
        item = self.cart.get_item(product_id) if product_id else None
        if item is not None:
            self.cart.update_quantity(item.product_id, item.quantity - 1)

    def action_remove(self) -> None:
        product_id = self._highlighted_item_id()
        if product_id is not None:
            self.cart.remove_from_cart(product_id)

    def action_clear_cart(self) -> None:
        if not self.cart.is_empty:
            self.cart.clear_cart()
            self.app.notify("Cart cleared")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "clear_cart_btn":
            self.action_clear_cart()
        elif event.button.id == "cart_back_btn":
            self.action_back()

    def action_back(self) -> None:
        self.app.pop_screen()
