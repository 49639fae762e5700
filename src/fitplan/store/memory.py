"""In-process document store for local development and tests."""

from __future__ import annotations

import copy
import uuid
from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from fitplan.errors import NotFound
from fitplan.store.base import DocumentStore, OrderBy, Where, matches, order_and_limit, strip_id


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store. Documents are deep-copied in and out."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._collections[collection].get(doc_id)
        if doc is None:
            return None
        return {"id": doc_id, **copy.deepcopy(doc)}

    async def set(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        self._collections[collection][doc_id] = copy.deepcopy(strip_id(doc))

    async def update(self, collection: str, doc_id: str, patch: dict[str, Any]) -> None:
        existing = self._collections[collection].get(doc_id)
        if existing is None:
            msg = f"{collection}/{doc_id} not found"
            raise NotFound(msg)
        existing.update(copy.deepcopy(strip_id(patch)))

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collections[collection].pop(doc_id, None)

    async def add(self, collection: str, doc: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        await self.set(collection, doc_id, doc)
        return doc_id

    async def query(
        self,
        collection: str,
        where: Sequence[Where] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        docs = [
            {"id": doc_id, **copy.deepcopy(doc)}
            for doc_id, doc in self._collections[collection].items()
            if matches(doc, where)
        ]
        return order_and_limit(docs, order_by, limit)

    async def ping(self) -> None:
        return None
