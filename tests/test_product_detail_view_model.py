# tests/test_product_detail_view_model.py

"""Tests for ProductDetailViewModel lookup and quantity selector."""

import asyncio
import unittest
from typing import Any, cast

from storefront.services.cart_store import CartStore
from storefront.services.errors import CatalogQueryError
from storefront.services.product_detail_view_model import (
    ProductDetailViewModel,
)
from tests.fakes import (
    HEADPHONES,
    SHOES,
    SOLD_OUT,
    FakeCatalogClient,
    GatedCatalogClient,
)


def _detail(
    client: FakeCatalogClient, cart: CartStore | None = None,
) -> ProductDetailViewModel:
    return ProductDetailViewModel(
        cast(Any, client), cart if cart is not None else CartStore()
    )


class TestLoadProduct(unittest.IsolatedAsyncioTestCase):
    """ProductDetailViewModel.load_product outcomes."""

    async def test_found(self) -> None:
        detail = _detail(FakeCatalogClient([SHOES, HEADPHONES]))
        product = await detail.load_product("headphones")
        self.assertIs(product, HEADPHONES)
        self.assertIs(detail.product, HEADPHONES)
        self.assertFalse(detail.loading)

    async def test_not_found_returns_none(self) -> None:
        """A missing id is an ordinary None result, not an error."""
        detail = _detail(FakeCatalogClient([SHOES]))
        self.assertIsNone(await detail.load_product("missing"))
        self.assertIsNone(detail.product)

    async def test_query_failure_raises(self) -> None:
        client = FakeCatalogClient([SHOES])
        client.fail = True
        detail = _detail(client)
        with self.assertRaises(CatalogQueryError):
            await detail.load_product("shoes")
        self.assertIsNone(detail.product)
        self.assertFalse(detail.loading)

    async def test_discarded_after_close(self) -> None:
        client = GatedCatalogClient([SHOES])
        detail = _detail(client)
        task = asyncio.create_task(detail.load_product("shoes"))
        await asyncio.to_thread(client.entered.wait, 5)
        detail.close()
        client.release()
        self.assertIsNone(await task)
        self.assertIsNone(detail.product)
        self.assertTrue(detail.closed)

    async def test_failure_after_close_is_discarded(self) -> None:
        client = GatedCatalogClient([SHOES])
        detail = _detail(client)
        task = asyncio.create_task(detail.load_product("shoes"))
        await asyncio.to_thread(client.entered.wait, 5)
        detail.close()
        client.fail = True
        client.release()
        self.assertIsNone(await task)
        self.assertIsNone(detail.product)
        self.assertFalse(detail.loading)


class TestQuantitySelector(unittest.IsolatedAsyncioTestCase):
    """Quantity bounds: 1 <= quantity <= stock."""

    async def test_increment_capped_at_stock(self) -> None:
        detail = _detail(FakeCatalogClient([HEADPHONES]))
        await detail.load_product("headphones")
        for _ in range(5):
            detail.increment_quantity()
        self.assertEqual(detail.quantity, HEADPHONES.stock)
        self.assertFalse(detail.can_increment)

    async def test_decrement_floors_at_one(self) -> None:
        detail = _detail(FakeCatalogClient([SHOES]))
        await detail.load_product("shoes")
        detail.decrement_quantity()
        self.assertEqual(detail.quantity, 1)
        self.assertFalse(detail.can_decrement)

    async def test_increment_without_product(self) -> None:
        detail = _detail(FakeCatalogClient([]))
        self.assertEqual(detail.increment_quantity(), 1)

    async def test_reload_resets_quantity(self) -> None:
        detail = _detail(FakeCatalogClient([SHOES]))
        await detail.load_product("shoes")
        detail.increment_quantity()
        await detail.load_product("shoes")
        self.assertEqual(detail.quantity, 1)


class TestAddToCart(unittest.IsolatedAsyncioTestCase):
    """ProductDetailViewModel.add_to_cart."""

    async def test_adds_selected_quantity(self) -> None:
        cart = CartStore()
        detail = _detail(FakeCatalogClient([SHOES]), cart)
        await detail.load_product("shoes")
        detail.increment_quantity()
        detail.increment_quantity()
        self.assertEqual(detail.add_to_cart(), 3)
        self.assertEqual(cart.get_cart_count(), 3)
        self.assertEqual(len(cart), 1)

    async def test_each_unit_notifies(self) -> None:
        """Units are added one at a time, in order."""
        cart = CartStore()
        seen: list[int] = []
        cart.subscribe(lambda c: seen.append(c.get_cart_count()))
        detail = _detail(FakeCatalogClient([SHOES]), cart)
        await detail.load_product("shoes")
        detail.increment_quantity()
        detail.add_to_cart()
        self.assertEqual(seen, [1, 2])

    async def test_out_of_stock_adds_nothing(self) -> None:
        cart = CartStore()
        detail = _detail(FakeCatalogClient([SOLD_OUT]), cart)
        await detail.load_product("sold-out")
        self.assertEqual(detail.add_to_cart(), 0)
        self.assertTrue(cart.is_empty)

    async def test_nothing_loaded(self) -> None:
        cart = CartStore()
        detail = _detail(FakeCatalogClient([]), cart)
        self.assertEqual(detail.add_to_cart(), 0)
        self.assertTrue(cart.is_empty)


if __name__ == "__main__":
    unittest.main()
