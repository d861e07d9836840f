# gamevault/database/postgres.py
import asyncpg
from contextlib import asynccontextmanager, contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import StoreUnavailable, ValidationError
from .base import (
    LEDGER_TABLES,
    TABLES,
    EntityData,
    Store,
    StoreSession,
    build_entity,
    check_filters,
    immutable,
    merge_entity,
    not_found,
)

MIGRATIONS_PATH = Path(__file__).parent / "migrations"

STORE_FAULTS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


@contextmanager
def store_errors():
    """Translate driver failures into shop errors"""
    try:
        yield
    except asyncpg.IntegrityConstraintViolationError as e:
        raise ValidationError(f"Constraint violated: {e}") from e
    except STORE_FAULTS as e:
        raise StoreUnavailable(e) from e


def _to_db(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


class PostgresRepository:
    """Repository over one table.

    ``executor`` is an asyncpg pool (each call auto-commits) or a connection
    inside a transaction.
    """

    def __init__(self, name: str, executor):
        self.name = name
        self.model = TABLES[name]
        self.executor = executor

    def _to_entity(self, row) -> BaseModel:
        record = dict(row)
        try:
            return self.model.model_validate(
                {key: record[key] for key in self.model.model_fields if key in record}
            )
        except PydanticValidationError as e:
            raise StoreUnavailable(e, f"Malformed {self.name} row: {record.get('id')}") from e

    async def list(self, **filters: Any) -> List[BaseModel]:
        check_filters(self.model, filters)
        query = f"SELECT * FROM {self.name} WHERE 1=1"
        params = []
        for key, value in filters.items():
            params.append(_to_db(value))
            query += f" AND {key} = ${len(params)}"
        query += " ORDER BY seq DESC"

        with store_errors():
            rows = await self.executor.fetch(query, *params)
        return [self._to_entity(row) for row in rows]

    async def get(self, entity_id: str, for_update: bool = False) -> BaseModel:
        query = f"SELECT * FROM {self.name} WHERE id = $1"
        if for_update:
            query += " FOR UPDATE"

        with store_errors():
            row = await self.executor.fetchrow(query, entity_id)
        if row is None:
            raise not_found(self.name, entity_id)
        return self._to_entity(row)

    async def insert(self, entity: EntityData) -> BaseModel:
        entity = build_entity(self.model, entity)
        data = {key: _to_db(value) for key, value in entity.model_dump().items()}
        columns = ", ".join(data)
        placeholders = ", ".join(f"${i}" for i in range(1, len(data) + 1))
        query = f"INSERT INTO {self.name} ({columns}) VALUES ({placeholders}) RETURNING *"

        try:
            with store_errors():
                row = await self.executor.fetchrow(query, *data.values())
        except ValidationError as e:
            if isinstance(e.__cause__, asyncpg.UniqueViolationError):
                raise ValidationError(
                    f"Duplicate {self.model.__name__} id: {entity.id}"
                ) from e.__cause__
            raise
        return self._to_entity(row)

    async def update(self, entity_id: str, partial: Mapping[str, Any]) -> BaseModel:
        if self.name in LEDGER_TABLES:
            raise immutable(self.name, entity_id)
        current = await self.get(entity_id, for_update=True)
        merged = merge_entity(current, partial)

        # write only the given columns
        columns = dict.fromkeys([key for key in partial if key not in ("id", "created_at")])
        columns["updated_at"] = None
        data = {key: _to_db(getattr(merged, key)) for key in columns}
        assignments = ", ".join(f"{key} = ${i}" for i, key in enumerate(data, start=1))
        query = (
            f"UPDATE {self.name} SET {assignments} "
            f"WHERE id = ${len(data) + 1} RETURNING *"
        )

        with store_errors():
            row = await self.executor.fetchrow(query, *data.values(), entity_id)
        if row is None:
            raise not_found(self.name, entity_id)
        return self._to_entity(row)

    async def delete(self, entity_id: str) -> None:
        if self.name in LEDGER_TABLES:
            raise immutable(self.name, entity_id)
        with store_errors():
            result = await self.executor.execute(
                f"DELETE FROM {self.name} WHERE id = $1", entity_id
            )
        if result != "DELETE 1":
            raise not_found(self.name, entity_id)


class PooledRepository(PostgresRepository):
    """Store-level repository: each update runs in its own transaction
    on one pooled connection, with the row locked from read to write.
    """

    @asynccontextmanager
    async def _locked(self):
        with store_errors():
            async with self.executor.acquire() as conn:
                async with conn.transaction():
                    yield PostgresRepository(self.name, conn)

    async def update(self, entity_id: str, partial: Mapping[str, Any]) -> BaseModel:
        if self.name in LEDGER_TABLES:
            raise immutable(self.name, entity_id)
        async with self._locked() as repo:
            return await repo.update(entity_id, partial)


def _session(executor) -> StoreSession:
    return StoreSession(**{name: PostgresRepository(name, executor) for name in TABLES})


class PostgresStore(Store):
    """Store backed by PostgreSQL through an asyncpg pool"""

    def __init__(self, dsn: str, min_size: int = 2, max_size: int = 10):
        super().__init__()
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.pool: Optional[asyncpg.Pool] = None

    def _bind(self, pool):
        self.pool = pool
        self.products = PooledRepository("products", pool)
        self.users = PooledRepository("users", pool)
        self.orders = PooledRepository("orders", pool)
        self.transactions = PooledRepository("transactions", pool)

    async def connect(self):
        """Open the pool and apply pending migrations"""
        try:
            pool = await asyncpg.create_pool(
                self.dsn,
                min_size=self.min_size,
                max_size=self.max_size
            )
            self._bind(pool)
            await self._run_migrations()
            self.logger.info("Connected to the database")
        except STORE_FAULTS as e:
            self.logger.error(f"Database connection failed: {e}")
            raise StoreUnavailable(e) from e

    async def close(self):
        if self.pool:
            await self.pool.close()
            self.logger.info("Database connection closed")

    @asynccontextmanager
    async def transaction(self):
        if self.pool is None:
            raise StoreUnavailable(detail="Store is not connected")
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    yield _session(conn)
        except STORE_FAULTS as e:
            self.logger.error(f"Database transaction failed: {e}")
            raise StoreUnavailable(e) from e

    async def _run_migrations(self):
        """Apply the .sql files not yet recorded in the migrations table"""
        async with self.pool.acquire() as conn:
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS migrations (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL,
                    applied_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
                )
            """)

            for migration_file in sorted(MIGRATIONS_PATH.glob("*.sql")):
                migration_name = migration_file.name

                is_applied = await conn.fetchval(
                    "SELECT COUNT(*) FROM migrations WHERE name = $1",
                    migration_name
                )
                if is_applied:
                    continue

                async with conn.transaction():
                    await conn.execute(migration_file.read_text(encoding="utf-8"))
                    await conn.execute(
                        "INSERT INTO migrations (name) VALUES ($1)",
                        migration_name
                    )
                self.logger.info(f"Migration {migration_name} applied")
