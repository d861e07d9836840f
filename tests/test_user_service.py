"""Tests for user registration and admin rights."""
from decimal import Decimal

import pytest

from gamevault.errors import PermissionDenied, UserNotFound
from gamevault.services import UserService


@pytest.fixture
def users(store) -> UserService:
    return UserService(store, admin_ids=[42])


class TestRegister:
    async def test_creates_user_with_zero_balance(self, users) -> None:
        user = await users.register_user(7, username="gamer", first_name="Alex")

        assert user.id == "7"
        assert user.username == "gamer"
        assert user.balance == Decimal("0")
        assert not user.is_admin
        assert user.avatar_url.startswith("https://ui-avatars.com/api/?name=Alex")

    async def test_name_fallbacks(self, users) -> None:
        assert (await users.register_user(1, first_name="Alex")).username == "Alex"
        assert (await users.register_user(2)).username == "User"

    async def test_photo_url_wins(self, users) -> None:
        user = await users.register_user(7, "gamer", photo_url="https://img.example/7.png")
        assert user.avatar_url == "https://img.example/7.png"

    async def test_second_contact_keeps_balance(self, store, users) -> None:
        await users.register_user(7, "gamer")
        await store.users.update("7", {"balance": Decimal("12")})

        user = await users.register_user(7, "renamed")

        assert user.username == "renamed"
        assert user.balance == Decimal("12")
        assert len(await store.users.list()) == 1

    async def test_configured_admin(self, store, users) -> None:
        assert (await users.register_user(42, "boss")).is_admin

        await store.users.insert({"id": "43"})
        promoted = UserService(store, admin_ids=[43])
        assert (await promoted.register_user(43, "late")).is_admin


class TestAdmin:
    async def test_is_admin(self, users) -> None:
        await users.register_user(42, "boss")
        await users.register_user(7, "gamer")
        assert await users.is_admin(42)
        assert not await users.is_admin(7)
        assert not await users.is_admin(999)

    async def test_set_admin_by_admin(self, users) -> None:
        await users.register_user(42, "boss")
        await users.register_user(7, "gamer")

        user = await users.set_admin(42, 7, True)

        assert user.is_admin
        assert await users.is_admin(7)

    async def test_set_admin_by_regular_user(self, users) -> None:
        await users.register_user(7, "gamer")
        await users.register_user(8, "other")
        with pytest.raises(PermissionDenied):
            await users.set_admin(7, 8, True)
        assert not await users.is_admin(8)

    async def test_set_admin_unknown_target(self, users) -> None:
        await users.register_user(42, "boss")
        with pytest.raises(UserNotFound):
            await users.set_admin(42, 999, True)

    async def test_get_user(self, users) -> None:
        await users.register_user(7, "gamer")
        assert (await users.get_user(7)).username == "gamer"
        with pytest.raises(UserNotFound):
            await users.get_user(8)
