"""Firestore-backed document store (firebase-admin async client)."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import firebase_admin
import structlog
from firebase_admin import firestore_async
from google.api_core import exceptions as gexc
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from fitplan.errors import NotFound, PermissionDenied, StoreUnavailable
from fitplan.store.base import DocumentStore, OrderBy, Where, strip_id

logger = structlog.get_logger()


@asynccontextmanager
async def _translate_errors(operation: str, collection: str) -> AsyncIterator[None]:
    """Map google-api-core failures onto the store error taxonomy."""
    try:
        yield
    except gexc.PermissionDenied as exc:
        logger.warning("firestore_permission_denied", operation=operation, collection=collection)
        raise PermissionDenied(str(exc)) from exc
    except gexc.NotFound as exc:
        raise NotFound(str(exc)) from exc
    except gexc.GoogleAPIError as exc:
        logger.warning("firestore_unavailable", operation=operation, collection=collection, error=str(exc))
        raise StoreUnavailable(str(exc)) from exc


class FirestoreDocumentStore(DocumentStore):
    def __init__(self, app: firebase_admin.App) -> None:
        self._client = firestore_async.client(app)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        async with _translate_errors("get", collection):
            snap = await self._client.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return {"id": snap.id, **(snap.to_dict() or {})}

    async def set(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        async with _translate_errors("set", collection):
            await self._client.collection(collection).document(doc_id).set(strip_id(doc))

    async def update(self, collection: str, doc_id: str, patch: dict[str, Any]) -> None:
        async with _translate_errors("update", collection):
            await self._client.collection(collection).document(doc_id).update(strip_id(patch))

    async def delete(self, collection: str, doc_id: str) -> None:
        async with _translate_errors("delete", collection):
            await self._client.collection(collection).document(doc_id).delete()

    async def add(self, collection: str, doc: dict[str, Any]) -> str:
        async with _translate_errors("add", collection):
            _, ref = await self._client.collection(collection).add(strip_id(doc))
        return ref.id

    async def query(
        self,
        collection: str,
        where: Sequence[Where] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        q = self._client.collection(collection)
        for predicate in where:
            q = q.where(filter=FieldFilter(predicate.field, "==", predicate.value))
        if order_by is not None:
            direction = firestore.Query.DESCENDING if order_by.descending else firestore.Query.ASCENDING
            q = q.order_by(order_by.field, direction=direction)
        if limit is not None:
            q = q.limit(limit)

        async with _translate_errors("query", collection):
            return [{"id": snap.id, **(snap.to_dict() or {})} async for snap in q.stream()]

    async def ping(self) -> None:
        async with _translate_errors("ping", "_health"):
            await self._client.collection("_health").document("ping").get()
