"""Process-wide document store selected by ``store_backend``."""

from __future__ import annotations

from fitplan.config import Settings
from fitplan.store.base import DocumentStore, OrderBy, Where
from fitplan.store.result import StoreResult, try_store

__all__ = [
    "DocumentStore",
    "OrderBy",
    "StoreResult",
    "Where",
    "close_store",
    "get_store",
    "init_store",
    "try_store",
]

_store: DocumentStore | None = None


async def init_store(settings: Settings) -> DocumentStore:
    """Create the configured document store."""
    global _store  # noqa: PLW0603
    backend = settings.store_backend.lower()
    if backend == "memory":
        from fitplan.store.memory import MemoryDocumentStore

        _store = MemoryDocumentStore()
    elif backend == "sql":
        from fitplan.database import create_tables, init_db
        from fitplan.store.sql import SqlDocumentStore

        await init_db(settings.database_url)
        await create_tables()
        _store = SqlDocumentStore()
    elif backend == "firestore":
        from fitplan.firebase import init_firebase
        from fitplan.store.firestore import FirestoreDocumentStore

        _store = FirestoreDocumentStore(init_firebase(settings))
    else:
        msg = f"Unknown store backend: {settings.store_backend}"
        raise ValueError(msg)
    return _store


async def close_store() -> None:
    global _store  # noqa: PLW0603
    if _store is not None:
        await _store.close()
        _store = None


def get_store() -> DocumentStore:
    """Get the document store (FastAPI dependency)."""
    if _store is None:
        msg = "Document store not initialized. Call init_store() first."
        raise RuntimeError(msg)
    return _store
