# gamevault/database/memory.py
import asyncio
import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import aiofiles
import aiofiles.os
from pydantic import BaseModel

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

State = Dict[str, Dict[str, BaseModel]]


class MemoryRepository:
    """Repository over one table of an in-memory state"""

    def __init__(self, name: str, table: Dict[str, BaseModel]):
        self.name = name
        self.model = TABLES[name]
        self.table = table

    async def list(self, **filters: Any) -> List[BaseModel]:
        check_filters(self.model, filters)
        return [
            entity.model_copy()
            for entity in reversed(list(self.table.values()))
            if all(getattr(entity, key) == value for key, value in filters.items())
        ]

    async def get(self, entity_id: str, for_update: bool = False) -> BaseModel:
        # the store lock already serializes writers
        entity = self.table.get(entity_id)
        if entity is None:
            raise not_found(self.name, entity_id)
        return entity.model_copy()

    async def insert(self, entity: EntityData) -> BaseModel:
        entity = build_entity(self.model, entity)
        if entity.id in self.table:
            raise ValidationError(f"Duplicate {self.model.__name__} id: {entity.id}")
        self.table[entity.id] = entity
        return entity.model_copy()

    async def update(self, entity_id: str, partial: Mapping[str, Any]) -> BaseModel:
        if self.name in LEDGER_TABLES:
            raise immutable(self.name, entity_id)
        current = self.table.get(entity_id)
        if current is None:
            raise not_found(self.name, entity_id)
        merged = merge_entity(current, partial)
        self.table[entity_id] = merged
        return merged.model_copy()

    async def delete(self, entity_id: str) -> None:
        if self.name in LEDGER_TABLES:
            raise immutable(self.name, entity_id)
        if entity_id not in self.table:
            raise not_found(self.name, entity_id)
        del self.table[entity_id]


class AutoCommitRepository:
    """Store-level repository: reads see committed state, each write is its own transaction"""

    def __init__(self, store: "InMemoryStore", name: str):
        self.store = store
        self.name = name

    def _committed(self) -> MemoryRepository:
        return MemoryRepository(self.name, self.store._state[self.name])

    async def list(self, **filters: Any) -> List[BaseModel]:
        return await self._committed().list(**filters)

    async def get(self, entity_id: str, for_update: bool = False) -> BaseModel:
        return await self._committed().get(entity_id)

    async def insert(self, entity: EntityData) -> BaseModel:
        async with self.store.transaction() as tx:
            return await getattr(tx, self.name).insert(entity)

    async def update(self, entity_id: str, partial: Mapping[str, Any]) -> BaseModel:
        async with self.store.transaction() as tx:
            return await getattr(tx, self.name).update(entity_id, partial)

    async def delete(self, entity_id: str) -> None:
        async with self.store.transaction() as tx:
            await getattr(tx, self.name).delete(entity_id)


def _session(state: State) -> StoreSession:
    return StoreSession(**{name: MemoryRepository(name, state[name]) for name in TABLES})


class InMemoryStore(Store):
    """In-process store, optionally persisted to a JSON file.

    Transactions are serialized by one lock. A transaction works on a copy
    of the state; the copy is written to disk and then published, so
    readers never see a half-applied change.
    """

    def __init__(self, path: Optional[Path] = None):
        super().__init__()
        self.path = Path(path) if path else None
        self._state: State = {name: {} for name in TABLES}
        self._lock = asyncio.Lock()
        self.products = AutoCommitRepository(self, "products")
        self.users = AutoCommitRepository(self, "users")
        self.orders = AutoCommitRepository(self, "orders")
        self.transactions = AutoCommitRepository(self, "transactions")

    async def connect(self):
        """Load the persisted state, if any"""
        if self.path and self.path.exists():
            await self._load()
            self.logger.info(f"Loaded store from {self.path}")
        else:
            self.logger.info("Started with an empty store")

    async def close(self):
        self.logger.info("Store closed")

    @asynccontextmanager
    async def transaction(self):
        async with self._lock:
            working = {name: dict(table) for name, table in self._state.items()}
            yield _session(working)
            commit = asyncio.ensure_future(self._commit(working))
            try:
                await asyncio.shield(commit)
            except asyncio.CancelledError:
                # a started snapshot write runs to the end before the lock is released
                if not commit.done():
                    await asyncio.wait([commit])
                raise

    async def _commit(self, state: State):
        """Write the snapshot, then publish it.

        Once the file has been replaced the state is published even if the
        call then fails, so memory and disk never disagree.
        """
        if self.path is None:
            self._state = state
            return
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        await self._write_snapshot(state, tmp_path)
        try:
            await aiofiles.os.replace(tmp_path, self.path)
        except BaseException as e:
            if not tmp_path.exists():
                self._state = state
            if isinstance(e, OSError):
                self.logger.error(f"Failed to write store file {self.path}: {e}")
                raise StoreUnavailable(e) from e
            raise
        self._state = state

    async def _load(self):
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                data = json.loads(await f.read())
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Failed to read store file {self.path}: {e}")
            raise StoreUnavailable(e) from e

        state: State = {name: {} for name in TABLES}
        try:
            for name, model in TABLES.items():
                # the file keeps records oldest first
                for record in data.get(name, []):
                    entity = build_entity(model, record)
                    state[name][entity.id] = entity
        except ValidationError as e:
            self.logger.error(f"Corrupt record in {self.path}: {e}")
            raise StoreUnavailable(e) from e
        self._state = state

    async def _write_snapshot(self, state: State, tmp_path: Path):
        payload = {
            name: [entity.model_dump(mode="json") for entity in table.values()]
            for name, table in state.items()
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(payload, ensure_ascii=False, indent=2))
        except OSError as e:
            self.logger.error(f"Failed to write store file {self.path}: {e}")
            raise StoreUnavailable(e) from e
