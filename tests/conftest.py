"""Pytest configuration and shared fixtures.

Provides an in-memory database, a seeded store and helpers for building
link webhook bodies.
"""

import os

# Settings are cached on first use, so the test environment must be set
# before any application module is imported.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "ERROR")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BASE_URL", "https://taaskly.test/")

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from db.base import Base
from db.models import Community, Document, Folder, Task, User
from db.repositories import Store
from db.session import get_db
from links import LinkContext, LinkHandlers
from main import create_app

BASE_URL = "https://taaskly.test/"
COMMUNITY_ID = 1


@pytest_asyncio.fixture
async def async_engine():
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(async_engine) -> AsyncSession:
    """Create a database session for testing."""
    async_session = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def store(session) -> Store:
    return Store(session)


@pytest.fixture
def link_context() -> LinkContext:
    return LinkContext(base_url=BASE_URL)


@pytest.fixture
def handlers(store, link_context) -> LinkHandlers:
    return LinkHandlers(store, link_context, collection_limit=5)


# --- Test Data ---


def at(minutes: int) -> datetime:
    """Deterministic creation time, ``minutes`` after a fixed origin."""
    return datetime(2026, 1, 1, 9, 0, tzinfo=UTC) + timedelta(minutes=minutes)


@dataclass
class Seed:
    """Records created by the ``seed`` fixture."""

    community: Community
    alice: User  # linked, owns most content
    bob: User  # linked
    carol: User  # local account without a platform identity
    public_folder: Folder
    private_folder: Folder
    public_doc: Document
    private_doc: Document
    task: Task
    completed_task: Task


@pytest_asyncio.fixture
async def seed(session: AsyncSession) -> Seed:
    """Create a community, three users, and some folders, documents and tasks."""
    community = Community(id=COMMUNITY_ID, name="Acme")
    alice = User(username="alice", workplace_id="wp-alice", community_id=COMMUNITY_ID)
    bob = User(username="bob", workplace_id="wp-bob", community_id=COMMUNITY_ID)
    carol = User(username="carol")
    session.add_all([community, alice, bob, carol])
    await session.flush()

    public_folder = Folder(name="Specs", privacy="public", owner=alice, created_at=at(1))
    private_folder = Folder(name="Drafts", privacy="private", owner=alice, created_at=at(2))
    session.add_all([public_folder, private_folder])
    await session.flush()

    public_doc = Document(
        name="Roadmap",
        content="Q1 goals. " * 40,
        privacy="public",
        owner=alice,
        folder=public_folder,
        created_at=at(3),
    )
    private_doc = Document(
        name="Salaries",
        content="confidential",
        privacy="private",
        owner=alice,
        folder=public_folder,
        created_at=at(4),
    )
    task = Task(title="Ship preview", priority="high", completed=False, owner=alice, created_at=at(5))
    completed_task = Task(title="Write docs", priority=None, completed=True, owner=carol, created_at=at(6))
    session.add_all([public_doc, private_doc, task, completed_task])
    await session.commit()

    return Seed(
        community=community,
        alice=alice,
        bob=bob,
        carol=carol,
        public_folder=public_folder,
        private_folder=private_folder,
        public_doc=public_doc,
        private_doc=private_doc,
        task=task,
        completed_task=completed_task,
    )


# --- Webhook Bodies ---


def change_value(
    link: str | None = None,
    user_id: str = "wp-alice",
    community_id: str = str(COMMUNITY_ID),
    payload: str | None = None,
) -> dict[str, Any]:
    value: dict[str, Any] = {"community": {"id": community_id}, "user": {"id": user_id}}
    if link is not None:
        value["link"] = link
    if payload is not None:
        value["payload"] = payload
    return value


def envelope(field: str, value: dict[str, Any], topic: str = "link") -> dict[str, Any]:
    """Build a webhook body holding a single change."""
    return {
        "object": topic,
        "entry": [{"id": "0", "time": 1700000000, "changes": [{"field": field, "value": value}]}],
    }


@pytest_asyncio.fixture
async def client(session):
    """HTTP client for the app, sharing the test session."""
    app = create_app()

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
