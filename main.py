# main.py

"""Entry point for the storefront client (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from storefront.config.logging_config import setup_logging
from storefront.config.settings import Settings
from storefront.services.catalog_client import CatalogClient
from storefront.services.errors import ConfigurationError

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Browse the ShopHub catalog and manage a cart.",
        epilog="Set SUPABASE_URL and SUPABASE_ANON_KEY in the environment or .env.",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        default=False,
        dest="list_products",
        help="List products headlessly instead of launching the TUI.",
    )
    parser.add_argument(
        "-s",
        "--search",
        default="",
        help="Case-insensitive text matched against name or description.",
    )
    parser.add_argument(
        "-c",
        "--category",
        default=None,
        help=f"Exact category to keep (default: {Settings.ALL_CATEGORIES}).",
    )
    parser.add_argument(
        "-p",
        "--product",
        default=None,
        dest="product_id",
        help="Show a single product by id.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the catalog backend.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO logs to stderr.",
    )
    return parser


def _run_tui(client: CatalogClient) -> None:
    """Launch the interactive Textual TUI."""
    from storefront.ui.app import StorefrontApp

    try:
        app = StorefrontApp(client=client)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("storefront TUI shutting down")


def _run_headless(client: CatalogClient, args: argparse.Namespace) -> int:
    """Dispatch a headless command and return its exit code."""
    from storefront.cli.runner import cli_list, cli_show, run_health_check

    if args.health:
        return asyncio.run(run_health_check(client))
    if args.product_id is not None:
        return asyncio.run(
            cli_show(client, args.product_id, args.output_format)
        )
    return asyncio.run(
        cli_list(client, args.search, args.category, args.output_format)
    )


def main() -> None:
    """Route to the TUI (no flags) or a headless command."""
    parser = _build_parser()
    args = parser.parse_args()

    console_level = logging.INFO if args.verbose else logging.WARNING
    log_file = setup_logging(console_level)
    logger.info("storefront starting, log file: %s", log_file)

    try:
        client = CatalogClient()
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        parser.exit(2, f"storefront: {exc}\n")

    headless = (
        args.list_products
        or args.health
        or args.product_id is not None
        or bool(args.search)
        or args.category is not None
    )
    with client:
        if not headless:
            _run_tui(client)
            return
        exit_code = _run_headless(client, args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
