# storefront/filters/product_filter.py

"""Client-side catalog filtering and facet derivation."""

import logging

from storefront.config.settings import Settings
from storefront.models.product import Product

logger = logging.getLogger("storefront.filters")


class ProductFilter:
    """Pure helpers over an in-memory product list.

    None of these mutate their inputs; the catalog view model calls
    them again whenever the product list, search text or selected
    category changes.
    """

    @staticmethod
    def matches_search(product: Product, search_text: str) -> bool:
        """Case-insensitive substring match on name or description."""
        needle = search_text.lower()
        if needle in product.name.lower():
            return True
        if product.description is None:
            return False
        return needle in product.description.lower()

    @staticmethod
    def filter_products(
        products: list[Product],
        search_text: str,
        selected_category: str = Settings.ALL_CATEGORIES,
    ) -> list[Product]:
        """Return the products matching the search text and category.

        An empty *search_text* matches everything.  The reserved
        ``"all"`` category disables the category constraint; any other
        value must equal ``product.category`` exactly.  Input order is
        preserved.
        """
        filtered = list(products)

        if search_text:
            filtered = [
                p
                for p in filtered
                if ProductFilter.matches_search(p, search_text)
            ]

        if selected_category != Settings.ALL_CATEGORIES:
            filtered = [
                p for p in filtered if p.category == selected_category
            ]

        logger.debug(
            "Filter search=%r category=%r kept %d of %d products",
            search_text,
            selected_category,
            len(filtered),
            len(products),
        )
        return filtered

    @staticmethod
    def extract_categories(products: list[Product]) -> list[str]:
        """Distinct non-empty categories, in first-seen order."""
        seen: dict[str, None] = {}
        for product in products:
            if product.category:
                seen.setdefault(product.category, None)
        return list(seen)

    @staticmethod
    def find_product(
        products: list[Product], product_id: str,
    ) -> Product | None:
        """Return the product with *product_id*, or ``None``."""
        for product in products:
            if product.id == product_id:
                return product
        return None
