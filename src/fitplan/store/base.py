"""Document store boundary.

A schemaless per-collection document database with equality queries,
ordering and limit. Documents are plain JSON-compatible dicts; reads return
them with the document id under the ``"id"`` key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Where:
    """Equality predicate: ``field == value``."""

    field: str
    value: Any


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


class DocumentStore(ABC):
    """Abstract document store. All failures surface as ``StoreError`` subclasses."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return the document or None if it does not exist."""

    @abstractmethod
    async def set(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        """Create or overwrite a document."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, patch: dict[str, Any]) -> None:
        """Shallow-merge ``patch`` into an existing document.

        Raises:
            NotFound: If the document does not exist.
        """

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""

    @abstractmethod
    async def add(self, collection: str, doc: dict[str, Any]) -> str:
        """Insert a document under a generated id and return the id."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        where: Sequence[Where] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return documents matching every predicate."""

    async def ping(self) -> None:
        """Readiness check. Raises StoreError when the backend is unreachable."""
        await self.query("_health", limit=1)

    async def close(self) -> None:
        return None


def matches(doc: dict[str, Any], where: Sequence[Where]) -> bool:
    return all(doc.get(w.field) == w.value for w in where)


def order_and_limit(
    docs: list[dict[str, Any]],
    order_by: OrderBy | None,
    limit: int | None,
) -> list[dict[str, Any]]:
    """Sort by one field (missing values last) and truncate."""
    if order_by is not None:
        present = [d for d in docs if d.get(order_by.field) is not None]
        missing = [d for d in docs if d.get(order_by.field) is None]
        present.sort(key=lambda d: d[order_by.field], reverse=order_by.descending)
        docs = present + missing
    if limit is not None:
        docs = docs[:limit]
    return docs


def strip_id(doc: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in doc.items() if k != "id"}
