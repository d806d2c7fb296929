"""
Shared fixtures for DocSearch tests.

- An in-memory SQLite database (aiosqlite + StaticPool) with all tables created
- Two users, ``alice`` and ``bob``, and their identities
- A ``DocumentService`` bound to a fresh ``QueryCache``
- An httpx ``AsyncClient`` talking to the FastAPI app over ASGI
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import docsearch.db.models  # noqa: F401
from docsearch.core.cache import QueryCache
from docsearch.core.db import Base, get_db
from docsearch.db.repositories.user_repository import UserRepository
from docsearch.domains.documents.schemas import DocumentCreate
from docsearch.domains.documents.services import DocumentService
from docsearch.domains.identity.entities import User
from docsearch.main import create_app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def cache():
    return QueryCache(ttl_seconds=60)


async def _make_user(session, email: str) -> User:
    # Хеш пароля в этих тестах не проверяется
    user = User(uuid=uuid.uuid4(), email=email, password_hash="unused")
    return await UserRepository(session).create(user)


@pytest_asyncio.fixture
async def alice(session):
    return (await _make_user(session, "alice@example.com")).identity


@pytest_asyncio.fixture
async def bob(session):
    return (await _make_user(session, "bob@example.com")).identity


@pytest.fixture
def service(session, cache):
    return DocumentService(session, cache)


@pytest.fixture
def make_document(service):
    async def _make(identity, title="Untitled", content="Some content", category="General", tags=None):
        data = DocumentCreate(title=title, content=content, category=category, tags=tags or [])
        return await service.create_document(identity, data)

    return _make


@pytest.fixture
def app(session_factory):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def register_and_login(client):
    async def _login(email: str, password: str = "Secret123") -> dict:
        response = await client.post("/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        response = await client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
