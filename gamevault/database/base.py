# gamevault/database/base.py
"""Data store contract shared by the in-memory and Postgres stores.

Every store exposes four repositories (products, users, orders,
transactions) with the same list/get/insert/update/delete calls, plus
``transaction()``, which yields a session whose writes commit together.
Orders and transactions are ledgers: they can be inserted and read, never
changed or deleted.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager, Dict, List, Mapping, Optional, Protocol, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import (
    ImmutableRecord,
    NotFound,
    OrderNotFound,
    ProductNotFound,
    UserNotFound,
    ValidationError,
)
from ..models import Order, Product, Transaction, User
from ..models.base import utcnow

EntityData = Union[BaseModel, Mapping[str, Any]]

TABLES: Dict[str, Type[BaseModel]] = {
    "products": Product,
    "users": User,
    "orders": Order,
    "transactions": Transaction,
}

LEDGER_TABLES = frozenset({"orders", "transactions"})


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def not_found(table: str, entity_id: str) -> NotFound:
    if table == "products":
        return ProductNotFound(entity_id)
    if table == "users":
        return UserNotFound(entity_id)
    if table == "orders":
        return OrderNotFound(entity_id)
    return NotFound("Transaction", entity_id)


def immutable(table: str, entity_id: str) -> ImmutableRecord:
    return ImmutableRecord(TABLES[table].__name__, entity_id)


def build_entity(model: Type[BaseModel], data: EntityData) -> BaseModel:
    """Validate insert data and assign an id when it has none"""
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        entity = model.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}: {e}") from e
    if entity.id is None:
        entity = entity.model_copy(update={"id": new_id()})
    return entity


def merge_entity(current: BaseModel, partial: Mapping[str, Any]) -> BaseModel:
    """Apply a partial update and validate the merged record"""
    model = type(current)
    changes = dict(partial)
    unknown = set(changes) - set(model.model_fields)
    if unknown:
        raise ValidationError(f"Unknown {model.__name__} fields: {sorted(unknown)}")
    if "id" in changes and changes["id"] != current.id:
        raise ValidationError(f"{model.__name__} identity cannot change")

    data = current.model_dump()
    data.update(changes)
    data["updated_at"] = utcnow()
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__} update: {e}") from e


def check_filters(model: Type[BaseModel], filters: Mapping[str, Any]):
    unknown = set(filters) - set(model.model_fields)
    if unknown:
        raise ValidationError(f"Unknown {model.__name__} filter fields: {sorted(unknown)}")


class Repository(Protocol):
    """Per-entity operations. ``list`` returns newest records first."""

    async def list(self, **filters: Any) -> List[Any]: ...

    async def get(self, entity_id: str, for_update: bool = False) -> Any: ...

    async def insert(self, entity: EntityData) -> Any: ...

    async def update(self, entity_id: str, partial: Mapping[str, Any]) -> Any: ...

    async def delete(self, entity_id: str) -> None: ...


class StoreSession:
    """The four repositories bound to one unit of work"""

    def __init__(self, products: Repository, users: Repository,
                 orders: Repository, transactions: Repository):
        self.products = products
        self.users = users
        self.orders = orders
        self.transactions = transactions


class Store(ABC):
    """Storage backend. Repository attributes auto-commit each call."""

    products: Repository
    users: Repository
    orders: Repository
    transactions: Repository

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @abstractmethod
    async def connect(self):
        """Open the store"""

    @abstractmethod
    async def close(self):
        """Release the store"""

    @abstractmethod
    def transaction(self) -> AsyncContextManager[StoreSession]:
        """Yield a session whose writes commit together or not at all"""

    async def seed_products(self, products: List[Dict[str, Any]]) -> int:
        """Insert demo products when the catalog is empty"""
        async with self.transaction() as tx:
            if await tx.products.list():
                return 0
            # list() is newest first, so insert the last product first
            for product in reversed(products):
                await tx.products.insert(product)
        self.logger.info(f"Seeded catalog with {len(products)} products")
        return len(products)


def create_store(backend: str, database_url: Optional[str] = None,
                 data_file=None) -> Store:
    """Build the store selected in the configuration"""
    if backend == "postgres":
        from .postgres import PostgresStore
        return PostgresStore(database_url)
    if backend == "memory":
        from .memory import InMemoryStore
        return InMemoryStore(data_file)
    raise ValueError(f"Unknown store backend: {backend}")
