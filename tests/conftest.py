"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

# Set test environment before importing app modules
os.environ["DATABASE_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["JWT_SECRET_KEY"] = "test-secret"

from clipgraph.db.base import Base  # noqa: E402
from clipgraph.db import models  # noqa: E402,F401
from clipgraph.db.dao import UserDAO, VideoDAO, FollowDAO, CounterDAO  # noqa: E402

NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
async def engine():
    """In-memory SQLite engine shared by every connection of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite does not emit BEGIN itself, which breaks SAVEPOINT handling
    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """File-backed SQLite engine for tests that run several sessions at once.

    Each transaction takes the write lock when it begins; concurrent
    transactions wait on the busy timeout.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'graph.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(file_engine):
    """Independent sessions against the file-backed engine."""
    return async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(engine):
    """Database session for a single test."""
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


class GraphFactory:
    """Builds users, videos and follow edges directly through the DAOs."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._seq = 0

    async def user(self, user_id=None, username=None, is_private=False, created_at=None):
        self._seq += 1
        username = username or f"user{self._seq}"
        return await UserDAO.create(
            self.session, username, is_private=is_private, user_id=user_id,
            created_at=created_at or NOW,
        )

    async def video(
        self,
        owner,
        caption=None,
        created_at=None,
        is_private=False,
        review_status="APPROVED",
        video_id=None,
        **counts
    ):
        video = await VideoDAO.create(
            self.session,
            user_id=owner.id,
            caption=caption,
            video_url="https://cdn.example.com/v.mp4",
            is_private=is_private,
            review_status=review_status,
            video_id=video_id,
            created_at=created_at or NOW,
        )
        for counter, value in counts.items():
            setattr(video, counter, value)
        await self.session.flush()
        return video

    async def follow(self, follower, following):
        await FollowDAO.create(self.session, follower.id, following.id)
        await CounterDAO.increment(self.session, "user", follower.id, "following_count")
        await CounterDAO.increment(self.session, "user", following.id, "followers_count")


@pytest.fixture
def factory(session):
    return GraphFactory(session)


@pytest.fixture
def now():
    return NOW


def hours_ago(hours: float) -> datetime:
    return NOW - timedelta(hours=hours)
