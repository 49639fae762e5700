"""SQL-backed document store: one generic ``documents`` table with a JSON body."""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import JSON, DateTime, String, delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from fitplan.database import Base, close_db, get_session_factory
from fitplan.errors import NotFound, StoreUnavailable
from fitplan.store.base import DocumentStore, OrderBy, Where, order_and_limit, strip_id

logger = structlog.get_logger()


class DocumentRow(Base):
    """Maps to the 'documents' table."""

    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(128), primary_key=True)
    doc_id: Mapped[str] = mapped_column("id", String(128), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def _json_equals(element: Any, value: Any) -> Any:  # noqa: ANN401
    """Typed comparison against a JSON sub-element (bool before int)."""
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    if value is None:
        return element.as_string().is_(None)
    return element.as_string() == str(value)


class SqlDocumentStore(DocumentStore):
    """Document store over the async SQLAlchemy engine from ``fitplan.database``.

    Equality filters run in SQL; ordering and limit are applied to the
    filtered rows in Python so that mixed JSON value types sort consistently.
    """

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            factory = get_session_factory()
        except RuntimeError as exc:
            raise StoreUnavailable(str(exc)) from exc
        try:
            async with factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("sql_store_error", error=str(exc))
            raise StoreUnavailable(str(exc)) from exc

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        async with self._session() as session:
            row = await session.get(DocumentRow, (collection, doc_id))
            if row is None:
                return None
            return {"id": row.doc_id, **row.data}

    async def set(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        now = datetime.now(timezone.utc)
        async with self._session() as session:
            row = await session.get(DocumentRow, (collection, doc_id))
            if row is None:
                session.add(DocumentRow(
                    collection=collection,
                    doc_id=doc_id,
                    data=strip_id(doc),
                    created_at=now,
                    updated_at=now,
                ))
            else:
                row.data = strip_id(doc)
                row.updated_at = now
            await session.commit()

    async def update(self, collection: str, doc_id: str, patch: dict[str, Any]) -> None:
        async with self._session() as session:
            row = await session.get(DocumentRow, (collection, doc_id))
            if row is None:
                msg = f"{collection}/{doc_id} not found"
                raise NotFound(msg)
            # Reassign so the JSON column is flagged dirty
            row.data = {**row.data, **strip_id(patch)}
            row.updated_at = datetime.now(timezone.utc)
            await session.commit()

    async def delete(self, collection: str, doc_id: str) -> None:
        async with self._session() as session:
            await session.execute(
                delete(DocumentRow).where(
                    DocumentRow.collection == collection,
                    DocumentRow.doc_id == doc_id,
                )
            )
            await session.commit()

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
        stmt = select(DocumentRow).where(DocumentRow.collection == collection)
        for predicate in where:
            stmt = stmt.where(_json_equals(DocumentRow.data[predicate.field], predicate.value))

        async with self._session() as session:
            result = await session.execute(stmt)
            docs = [{"id": row.doc_id, **row.data} for row in result.scalars()]
        return order_and_limit(docs, order_by, limit)

    async def ping(self) -> None:
        async with self._session() as session:
            await session.execute(text("SELECT 1"))

    async def close(self) -> None:
        await close_db()
