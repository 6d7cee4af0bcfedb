# storefront/services/catalog_view_model.py

"""State behind the catalog screen: product list, facets and filters."""

import asyncio
import logging

from storefront.config.settings import Settings
from storefront.filters.product_filter import ProductFilter
from storefront.models.product import Product
from storefront.services.catalog_client import CatalogClient
from storefront.services.errors import CatalogQueryError

logger = logging.getLogger("storefront.catalog")


class CatalogViewModel:
    """Bridges the remote catalog and the rendered product list.

    The full list is fetched once per :meth:`load_products` call;
    search and category filtering happen locally and are recomputed
    every time :attr:`filtered_products` is read.
    """

    def __init__(self, client: CatalogClient) -> None:
        self.client = client
        self.products: list[Product] = []
        self.categories: list[str] = []
        self.loading: bool = False
        self.search_text: str = ""
        self.selected_category: str = Settings.ALL_CATEGORIES
        self._closed: bool = False
        self._generation: int = 0

    async def load_products(self) -> bool:
        """Fetch the catalog and replace the product list.

        Returns ``True`` when the result was applied, ``False`` when it
        arrived after :meth:`close` or after a newer load had started
        and was dropped.  On :class:`CatalogQueryError` the previous
        list and categories are kept and the error is re-raised for the
        caller to report, unless the load had already gone stale.
        """
        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            products = await asyncio.to_thread(self.client.list_products)
        except CatalogQueryError:
            if self._closed or generation != self._generation:
                logger.debug("Discarding stale catalog failure")
                return False
            logger.error("Error fetching products", exc_info=True)
            raise
        finally:
            if generation == self._generation:
                self.loading = False

        if self._closed or generation != self._generation:
            logger.debug("Discarding stale catalog result")
            return False

        self.products = products
        self.categories = ProductFilter.extract_categories(products)
        logger.info(
            "Catalog loaded: %d products, %d categories",
            len(self.products),
            len(self.categories),
        )
        return True

    @property
    def filtered_products(self) -> list[Product]:
        return ProductFilter.filter_products(
            self.products, self.search_text, self.selected_category
        )

    def set_search_text(self, text: str) -> None:
        self.search_text = text

    def set_category(self, category: str) -> None:
        self.selected_category = category

    def clear_filters(self) -> None:
        """Reset search text and category to their defaults."""
        self.search_text = ""
        self.selected_category = Settings.ALL_CATEGORIES

    @property
    def has_active_filters(self) -> bool:
        return bool(self.search_text) or (
            self.selected_category != Settings.ALL_CATEGORIES
        )

    def get_product(self, product_id: str) -> Product | None:
        """Look up an already-loaded product by id."""
        return ProductFilter.find_product(self.products, product_id)

    def close(self) -> None:
        """Mark the view as gone; in-flight results will be dropped."""
        self._closed = True
