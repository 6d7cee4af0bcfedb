# storefront/cli/runner.py

"""Headless catalog runner: reuses the view models without the TUI."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from storefront.config.settings import Settings
from storefront.models.product import Product
from storefront.services.catalog_client import CatalogClient
from storefront.services.catalog_view_model import CatalogViewModel
from storefront.services.cart_store import CartStore
from storefront.services.errors import CatalogQueryError
from storefront.services.product_detail_view_model import (
    ProductDetailViewModel,
)

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _product_to_dict(p: Product) -> dict[str, object]:
    """Serialise a product for JSON output (price as a string)."""
    return {
        "id": p.id,
        "name": p.name,
        "description": p.description,
        "price": f"{p.price:.2f}",
        "image_url": p.display_image,
        "category": p.category,
        "stock": p.stock,
        "created_at": p.created_at.isoformat() if p.created_at else None,
        "updated_at": p.updated_at.isoformat() if p.updated_at else None,
    }


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=40)
    table.add_column("Category", style="magenta")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Availability", justify="right")
    table.add_column("ID", overflow="fold", style="dim")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            Text(p.name),
            Text(p.category or "-"),
            p.display_price,
            p.stock_label,
            p.id,
        )

    Console().print(table)


def _emit(products: list[Product], output_format: str) -> None:
    if output_format == "table":
        _print_table(products)
        return
    json.dump(
        [_product_to_dict(p) for p in products],
        sys.stdout,
        ensure_ascii=False,
        indent=2,
    )
    sys.stdout.write("\n")


async def cli_list(
    client: CatalogClient,
    search: str,
    category: str | None,
    output_format: str,
) -> int:
    """List (optionally filtered) products; exit code 0=ok, 1=fail."""
    view = CatalogViewModel(client)
    try:
        await view.load_products()
    except CatalogQueryError as exc:
        _err.print(f"[red]Failed to load products: {exc}[/red]")
        return 1

    view.set_search_text(search)
    view.set_category(category or Settings.ALL_CATEGORIES)
    products = view.filtered_products

    if view.categories:
        _err.print(f"[dim]Categories: {', '.join(view.categories)}[/dim]")
    if not products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    logger.info(
        "Listing %d of %d products (search=%r, category=%r)",
        len(products),
        len(view.products),
        search,
        category,
    )
    _err.print(
        f"[green]✓ {len(products)} of {len(view.products)} products[/green]"
    )
    _emit(products, output_format)
    return 0


async def cli_show(
    client: CatalogClient,
    product_id: str,
    output_format: str,
) -> int:
    """Show a single product; exit code 1 on failure or not found."""
    detail = ProductDetailViewModel(client, CartStore())
    try:
        product = await detail.load_product(product_id)
    except CatalogQueryError as exc:
        _err.print(f"[red]Failed to load product: {exc}[/red]")
        return 1

    if product is None:
        _err.print(f"[yellow]Product not found: {product_id}[/yellow]")
        return 1

    _emit([product], output_format)
    return 0


async def run_health_check(client: CatalogClient) -> int:
    """Probe the catalog endpoint and print the outcome."""
    from storefront.services.health_checker import HealthChecker

    _err.print("[bold]Running catalog health check...[/bold]")
    result = await HealthChecker(client).check()

    table = Table(
        title="Catalog Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Endpoint", style="bold", overflow="fold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    if result.status == "ok":
        status = "[green]✅ OK[/green]"
    elif result.status == "slow":
        status = "[yellow]⚠️  SLOW[/yellow]"
    else:
        status = "[red]❌ DOWN[/red]"

    latency = f"{result.latency_ms:.0f}ms" if result.latency_ms > 0 else "-"
    table.add_row(result.endpoint, status, latency, result.message)

    Console().print(table)
    return 1 if result.status == "down" else 0
