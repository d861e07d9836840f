"""Tests for the purchase flow."""
import asyncio
from decimal import Decimal

import pytest

from gamevault.database.memory import MemoryRepository
from gamevault.errors import (
    InsufficientFunds,
    OrderNotFound,
    OutOfStock,
    ProductNotFound,
    UserNotFound,
)
from gamevault.models import OrderStatus, TransactionType
from gamevault.services import OrderService, WalletService


@pytest.fixture
def orders(store) -> OrderService:
    return OrderService(store)


async def snapshot(store):
    return (
        [p.stock for p in await store.products.list()],
        [u.balance for u in await store.users.list()],
        len(await store.orders.list()),
        len(await store.transactions.list()),
    )


class TestPurchase:
    async def test_buys_last_unit(self, store, orders, make_product, make_user) -> None:
        product = await make_product(stock=1, price=Decimal("10"))
        await make_user("100", Decimal("10"))

        order = await orders.purchase("100", product.id)

        assert order.status == OrderStatus.COMPLETED
        assert order.price == Decimal("10")
        assert order.product_title == product.title
        assert order.delivery_data == "login: steamuser1\npass: hunter2"
        assert (await store.products.get(product.id)).stock == 0
        assert (await store.users.get("100")).balance == Decimal("0")
        assert [o.id for o in await store.orders.list()] == [order.id]

        [tx] = await store.transactions.list()
        assert tx.type == TransactionType.PURCHASE
        assert tx.amount == Decimal("-10")
        assert tx.user_id == "100"
        assert tx.related_order_id == order.id

    async def test_second_buyer_gets_out_of_stock(self, store, orders, make_product,
                                                  make_user) -> None:
        product = await make_product(stock=1)
        await make_user("100", Decimal("10"))
        await make_user("200", Decimal("10"))
        await orders.purchase("100", product.id)
        before = await snapshot(store)

        with pytest.raises(OutOfStock):
            await orders.purchase("200", product.id)
        assert await snapshot(store) == before

    async def test_unknown_product(self, orders, make_user) -> None:
        await make_user("100", Decimal("10"))
        with pytest.raises(ProductNotFound):
            await orders.purchase("100", "missing")

    async def test_stock_checked_before_funds(self, orders, make_product, make_user) -> None:
        product = await make_product(stock=0, price=Decimal("50"))
        await make_user("100", Decimal("0"))
        with pytest.raises(OutOfStock):
            await orders.purchase("100", product.id)

    async def test_insufficient_funds_changes_nothing(self, store, orders, make_product,
                                                      make_user) -> None:
        product = await make_product(stock=3, price=Decimal("10"))
        await make_user("100", Decimal("9.99"))
        before = await snapshot(store)

        with pytest.raises(InsufficientFunds) as exc_info:
            await orders.purchase("100", product.id)

        assert exc_info.value.required == Decimal("10")
        assert exc_info.value.available == Decimal("9.99")
        assert await snapshot(store) == before

    async def test_unknown_user(self, store, orders, make_product) -> None:
        product = await make_product(stock=1)
        with pytest.raises(UserNotFound):
            await orders.purchase("nobody", product.id)
        assert (await store.products.get(product.id)).stock == 1

    async def test_exact_balance_is_enough(self, store, orders, make_product, make_user) -> None:
        product = await make_product(stock=2, price=Decimal("1.20"))
        await make_user("100", Decimal("2.40"))
        await orders.purchase("100", product.id)
        await orders.purchase("100", product.id)
        assert (await store.users.get("100")).balance == Decimal("0")
        assert (await store.products.get(product.id)).stock == 0

    async def test_free_product(self, store, orders, make_product, make_user) -> None:
        product = await make_product(price=Decimal("0"))
        await make_user("100")
        order = await orders.purchase("100", product.id)
        assert order.price == Decimal("0")
        assert (await store.products.get(product.id)).stock == 0

    async def test_numeric_user_id(self, orders, make_product, make_user) -> None:
        product = await make_product()
        await make_user("100", Decimal("10"))
        order = await orders.purchase(100, product.id)
        assert order.user_id == "100"


class TestOrderSnapshot:
    async def test_survives_product_edit(self, store, orders, make_product, make_user) -> None:
        product = await make_product(stock=2)
        await make_user("100", Decimal("10"))
        order = await orders.purchase("100", product.id)

        await store.products.update(product.id, {
            "title": "Renamed", "price": Decimal("99"), "auto_delivery_data": "new secret",
        })

        stored = await orders.get_order(order.id)
        assert stored.product_title == "Steam Account (CS2 Prime)"
        assert stored.price == Decimal("10")
        assert stored.delivery_data == "login: steamuser1\npass: hunter2"

    async def test_survives_product_delete(self, store, orders, make_product, make_user) -> None:
        product = await make_product()
        await make_user("100", Decimal("10"))
        order = await orders.purchase("100", product.id)

        await store.products.delete(product.id)

        assert (await orders.get_order(order.id)).product_id == product.id

    async def test_missing_order(self, orders) -> None:
        with pytest.raises(OrderNotFound):
            await orders.get_order("nope")


class TestConcurrency:
    async def test_one_unit_two_buyers(self, store, orders, make_product, make_user) -> None:
        product = await make_product(stock=1)
        await make_user("100", Decimal("20"))
        await make_user("200", Decimal("20"))

        results = await asyncio.gather(
            orders.purchase("100", product.id),
            orders.purchase("200", product.id),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], OutOfStock)
        assert (await store.products.get(product.id)).stock == 0
        assert len(await store.orders.list()) == 1
        balances = sorted(u.balance for u in await store.users.list())
        assert balances == [Decimal("10"), Decimal("20")]

    async def test_balance_covers_one_purchase(self, store, orders, make_product,
                                               make_user) -> None:
        first = await make_product(stock=5, price=Decimal("10"))
        second = await make_product(stock=5, price=Decimal("10"))
        await make_user("100", Decimal("15"))

        results = await asyncio.gather(
            orders.purchase("100", first.id),
            orders.purchase("100", second.id),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientFunds)
        assert (await store.users.get("100")).balance == Decimal("5")


class TestAtomicity:
    async def test_failed_ledger_write_rolls_back(self, store, orders, make_product,
                                                  make_user, monkeypatch) -> None:
        product = await make_product(stock=1)
        await make_user("100", Decimal("10"))
        before = await snapshot(store)
        original_insert = MemoryRepository.insert

        async def failing_insert(self, entity):
            if self.name == "transactions":
                raise RuntimeError("disk on fire")
            return await original_insert(self, entity)

        monkeypatch.setattr(MemoryRepository, "insert", failing_insert)

        with pytest.raises(RuntimeError):
            await orders.purchase("100", product.id)
        assert await snapshot(store) == before

    async def test_cancellation_rolls_back(self, store, orders, make_product, make_user,
                                           monkeypatch) -> None:
        product = await make_product(stock=1)
        await make_user("100", Decimal("10"))
        before = await snapshot(store)
        original_insert = MemoryRepository.insert

        async def cancelled_insert(self, entity):
            if self.name == "orders":
                raise asyncio.CancelledError()
            return await original_insert(self, entity)

        monkeypatch.setattr(MemoryRepository, "insert", cancelled_insert)

        with pytest.raises(asyncio.CancelledError):
            await orders.purchase("100", product.id)
        assert await snapshot(store) == before

    async def test_retry_after_deposit(self, store, orders, make_product, make_user) -> None:
        product = await make_product(stock=1, price=Decimal("10"))
        await make_user("100", Decimal("4"))

        with pytest.raises(InsufficientFunds):
            await orders.purchase("100", product.id)
        await WalletService(store).deposit("100", "6")
        await orders.purchase("100", product.id)

        assert (await store.users.get("100")).balance == Decimal("0")


class TestUserOrders:
    async def test_newest_first_and_scoped_to_user(self, orders, make_product,
                                                   make_user) -> None:
        product = await make_product(stock=5, price=Decimal("1"))
        await make_user("100", Decimal("10"))
        await make_user("200", Decimal("10"))

        first = await orders.purchase("100", product.id)
        await orders.purchase("200", product.id)
        second = await orders.purchase("100", product.id)

        assert [o.id for o in await orders.get_user_orders("100")] == [second.id, first.id]
        assert await orders.get_user_orders("300") == []
