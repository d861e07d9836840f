"""Tests for configuration checks."""
from pathlib import Path

import pytest

from gamevault.config import Config
from gamevault.database import InMemoryStore, create_store


class TestValidate:
    def test_missing_token(self, monkeypatch) -> None:
        monkeypatch.setattr(Config, "TELEGRAM_TOKEN", "")
        with pytest.raises(ValueError, match="TELEGRAM_TOKEN"):
            Config.validate()

    def test_unknown_backend(self, monkeypatch) -> None:
        monkeypatch.setattr(Config, "TELEGRAM_TOKEN", "123:abc")
        monkeypatch.setattr(Config, "STORE_BACKEND", "sqlite")
        with pytest.raises(ValueError, match="STORE_BACKEND"):
            Config.validate()

    def test_postgres_needs_url(self, monkeypatch) -> None:
        monkeypatch.setattr(Config, "TELEGRAM_TOKEN", "123:abc")
        monkeypatch.setattr(Config, "STORE_BACKEND", "postgres")
        monkeypatch.setattr(Config, "DATABASE_URL", "")
        with pytest.raises(ValueError, match="DATABASE_URL"):
            Config.validate()

    def test_memory_backend_is_enough(self, monkeypatch) -> None:
        monkeypatch.setattr(Config, "TELEGRAM_TOKEN", "123:abc")
        monkeypatch.setattr(Config, "STORE_BACKEND", "memory")
        Config.validate()


class TestCreateStore:
    def test_memory(self, tmp_path) -> None:
        store = create_store("memory", data_file=tmp_path / "store.json")
        assert isinstance(store, InMemoryStore)
        assert store.path == Path(tmp_path / "store.json")

    def test_postgres(self) -> None:
        from gamevault.database.postgres import PostgresStore
        store = create_store("postgres", database_url="postgresql://localhost/shop")
        assert isinstance(store, PostgresStore)
        assert store.dsn == "postgresql://localhost/shop"

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            create_store("sqlite")
