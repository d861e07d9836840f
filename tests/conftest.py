"""Shared test fixtures."""
from decimal import Decimal

import pytest

from gamevault.database import InMemoryStore
from gamevault.models import Product, User


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_product(store):
    async def _make(**overrides) -> Product:
        data = {
            "title": "Steam Account (CS2 Prime)",
            "description": "Prime status enabled",
            "price": Decimal("10"),
            "category": "STEAM",
            "stock": 1,
            "auto_delivery_data": "login: steamuser1\npass: hunter2",
        }
        data.update(overrides)
        return await store.products.insert(data)
    return _make


@pytest.fixture
def make_user(store):
    async def _make(user_id: str = "100", balance=Decimal("0"), **overrides) -> User:
        data = {"id": user_id, "username": "buyer", "balance": balance}
        data.update(overrides)
        return await store.users.insert(data)
    return _make
