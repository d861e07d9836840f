from .base import Store, StoreSession, create_store
from .memory import InMemoryStore

__all__ = [
    'Store',
    'StoreSession',
    'InMemoryStore',
    'create_store',
]
