"""
Pytest configuration and fixtures for SimpleBiz tests.
"""
import asyncio
import copy
import os
import uuid
from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy import JSON
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"

# IMPORTANT: Patch PostgreSQL types for SQLite compatibility
# Must be done before importing any models
import sqlalchemy.dialects.postgresql as pg_dialect
from sqlalchemy.types import TypeDecorator, CHAR
import uuid as uuid_module

# Custom UUID type that works with SQLite
class SQLiteUUID(TypeDecorator):
    """SQLite-compatible UUID type."""
    impl = CHAR(36)
    cache_ok = True

    def __init__(self, *args, **kwargs):
        super().__init__()

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return uuid_module.UUID(value)
        return value

pg_dialect.JSONB = JSON
pg_dialect.UUID = SQLiteUUID

from simplebiz.content.errors import DocumentNotFound, TransportFailure, VersionConflict
from simplebiz.core.deps import get_storage
from simplebiz.core.security import create_access_token
from simplebiz.database import get_db
from simplebiz.integrations.storage import LocalStorageClient
from simplebiz.models.base import Base
from simplebiz.models.profile import Profile


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def profile(db_session: AsyncSession) -> Profile:
    """A registered business profile without a website yet."""
    profile = Profile(
        id=uuid.UUID("00000000-0000-0000-0000-000000000001"),
        email="owner@acme.example.com",
        password_hash="$2b$12$test_hash_for_testing_only",
        business_name="Acme Plumbing",
        contact_phone="0400 000 000",
        address="1 Pipe St, Sydney",
    )
    db_session.add(profile)
    await db_session.flush()
    return profile


@pytest_asyncio.fixture(scope="function")
async def other_profile(db_session: AsyncSession) -> Profile:
    """A second, unrelated profile."""
    profile = Profile(
        id=uuid.UUID("00000000-0000-0000-0000-000000000002"),
        email="hello@bolt.example.com",
        password_hash="$2b$12$test_hash_for_testing_only",
        business_name="Bolt Electrical",
    )
    db_session.add(profile)
    await db_session.flush()
    return profile


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def storage(tmp_path) -> LocalStorageClient:
    """Local filesystem storage rooted in a temporary directory."""
    return LocalStorageClient(
        base_path=str(tmp_path / "storage"),
        base_url="http://files.test",
    )


@pytest.fixture(scope="function")
def app(db_session: AsyncSession, storage: LocalStorageClient) -> FastAPI:
    """Create test FastAPI application."""
    from simplebiz.main import app as main_app

    async def override_get_db():
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db
    main_app.dependency_overrides[get_storage] = lambda: storage

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Authentication Fixtures
# ============================================================================

@pytest.fixture
def auth_headers(profile: Profile) -> dict:
    """Authentication headers for the default profile."""
    token = create_access_token(data={"sub": str(profile.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_profile: Profile) -> dict:
    """Authentication headers for the second profile."""
    token = create_access_token(data={"sub": str(other_profile.id)})
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# Document Store Fixtures
# ============================================================================

class InMemoryDocumentStore:
    """Document store double that copies values in and out like a remote backend."""

    def __init__(self, documents: dict[Any, dict] | None = None):
        self.documents = {key: copy.deepcopy(doc) for key, doc in (documents or {}).items()}
        self.versions = {key: 1 for key in self.documents}
        self.fetch_calls = 0
        self.writes: list[tuple[Any, dict]] = []
        self.fail_next_write: Exception | None = None

    async def fetch(self, website_id):
        self.fetch_calls += 1
        if website_id not in self.documents:
            raise DocumentNotFound(website_id)
        return copy.deepcopy(self.documents[website_id])

    async def fetch_versioned(self, website_id):
        content = await self.fetch(website_id)
        return content, self.versions[website_id]

    async def write(self, website_id, content, expected_version=None):
        if self.fail_next_write is not None:
            error, self.fail_next_write = self.fail_next_write, None
            raise error
        if website_id not in self.documents:
            raise DocumentNotFound(website_id)
        if expected_version is not None and self.versions[website_id] != expected_version:
            raise VersionConflict(expected_version, self.versions[website_id])
        self.documents[website_id] = copy.deepcopy(content)
        self.versions[website_id] += 1
        self.writes.append((website_id, copy.deepcopy(content)))
        return copy.deepcopy(content)


@pytest.fixture
def acme_document() -> dict:
    """Sparse stored document, as written by an older builder version."""
    return {
        "businessName": "Acme",
        "services": ["Plumbing"],
        "theme": {"primaryColor": "#111111", "overlayOpacity": 0},
    }


@pytest.fixture
def memory_store(acme_document) -> InMemoryDocumentStore:
    """In-memory store holding the Acme document under id ``site-1``."""
    return InMemoryDocumentStore({"site-1": acme_document})


@pytest.fixture
def transport_failure() -> TransportFailure:
    return TransportFailure("backend unreachable")


class GatedDocumentStore(InMemoryDocumentStore):
    """Holds back writes that rename the business until ``release`` is set."""

    def __init__(self, documents: dict[Any, dict] | None = None):
        super().__init__(documents)
        self.release = asyncio.Event()

    async def write(self, website_id, content, expected_version=None):
        if content.get("businessName") == "Acme Holdings":
            await self.release.wait()
        return await super().write(website_id, content, expected_version=expected_version)


@pytest.fixture
def gated_store(acme_document) -> GatedDocumentStore:
    return GatedDocumentStore({"site-1": acme_document})
