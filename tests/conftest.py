"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable, Sequence
from typing import Any

# Local JWTs and an in-memory store; no Firebase project, database or Redis needed.
os.environ["FITPLAN_AUTH_PROVIDER"] = "jwt"
os.environ["FITPLAN_STORE_BACKEND"] = "memory"
os.environ["FITPLAN_JWT_SECRET"] = "test-secret-not-for-production-use"
os.environ["FITPLAN_LOG_FORMAT"] = "console"
os.environ["FITPLAN_DEEPSEEK_API_KEY"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from fitplan.auth.gateway import JwtAuthGateway, get_auth_gateway  # noqa: E402
from fitplan.auth.jwt import create_access_token  # noqa: E402
from fitplan.config import get_settings  # noqa: E402
from fitplan.errors import GenerationError, PermissionDenied, StoreError, StoreUnavailable  # noqa: E402
from fitplan.generation.client import PLAN_MAX_TOKENS, GenerationClient, get_generation_client  # noqa: E402
from fitplan.store import DocumentStore, OrderBy, Where, get_store  # noqa: E402
from fitplan.store.memory import MemoryDocumentStore  # noqa: E402

get_settings.cache_clear()


class FailingStore(DocumentStore):
    """Every call raises ``error``, like Firestore with locked-down security rules."""

    def __init__(self, error: StoreError | None = None) -> None:
        self.error = error or PermissionDenied("Missing or insufficient permissions.")

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        raise self.error

    async def set(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        raise self.error

    async def update(self, collection: str, doc_id: str, patch: dict[str, Any]) -> None:
        raise self.error

    async def delete(self, collection: str, doc_id: str) -> None:
        raise self.error

    async def add(self, collection: str, doc: dict[str, Any]) -> str:
        raise self.error

    async def query(
        self,
        collection: str,
        where: Sequence[Where] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        raise self.error


class FlakyStore(MemoryDocumentStore):
    """Memory store whose listed operations (optionally per collection) fail."""

    def __init__(self, fail_on: set[str], collections: set[str] | None = None) -> None:
        super().__init__()
        self.fail_on = fail_on
        self.collections = collections

    def _check(self, op: str, collection: str) -> None:
        if op in self.fail_on and (self.collections is None or collection in self.collections):
            msg = f"{op} on {collection} failed"
            raise StoreUnavailable(msg)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        self._check("get", collection)
        return await super().get(collection, doc_id)

    async def set(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        self._check("set", collection)
        await super().set(collection, doc_id, doc)

    async def add(self, collection: str, doc: dict[str, Any]) -> str:
        self._check("add", collection)
        return await super().add(collection, doc)

    async def query(
        self,
        collection: str,
        where: Sequence[Where] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        self._check("query", collection)
        return await super().query(collection, where, order_by, limit)


class FakeGenerator(GenerationClient):
    """Records prompts and returns canned text (or raises ``error``)."""

    def __init__(self, text: str = "Day 1: Squats 3x10", error: GenerationError | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int = PLAN_MAX_TOKENS) -> str:
        self.calls.append({"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def store() -> DocumentStore:
    """Document store behind the API; override per module or class for failure modes."""
    return MemoryDocumentStore()


@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def flaky_store() -> Callable[..., FlakyStore]:
    """Factory: ``flaky_store({"set"}, {"userStats"})``."""
    return FlakyStore


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def token_factory() -> Callable[..., str]:
    """Mint a local access token: ``token_factory("uid", email=..., admin=True)``."""

    def _make(uid: str = "user-1", email: str | None = "athlete@example.com", **claims: Any) -> str:
        return create_access_token(uid, email, **claims)

    return _make


@pytest_asyncio.fixture
async def client(store: DocumentStore, generator: FakeGenerator) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against a fresh app with test doubles injected."""
    from fitplan.main import create_app

    app = create_app()
    gateway = JwtAuthGateway()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_auth_gateway] = lambda: gateway
    app.dependency_overrides[get_generation_client] = lambda: generator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, token_factory: Callable[..., str]) -> AsyncClient:
    """Client authenticated as ``user-1``."""
    client.headers["Authorization"] = f"Bearer {token_factory('user-1')}"
    return client


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, token_factory: Callable[..., str]) -> AsyncClient:
    """Client authenticated as an admin."""
    client.headers["Authorization"] = f"Bearer {token_factory('admin-1', 'admin@example.com', admin=True)}"
    return client
