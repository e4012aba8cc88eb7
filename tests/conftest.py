"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from burrito.config import BurritoConfig
from burrito.database.models import Base
from burrito.engine.emojis import EmojiRegistry, build_registry


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all Burrito tables.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used in ``run_db``).
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Provide a session that rolls back after each test."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def registry() -> EmojiRegistry:
    return build_registry(":burrito:, :taco:", ":rottenburrito:")


@pytest.fixture
def cfg() -> BurritoConfig:
    return BurritoConfig(
        daily_cap=5,
        emoji_inc=":burrito:, :taco:",
        emoji_dec=":rottenburrito:",
        in_channel_notification=True,
        dm_notification=True,
        scoreboard_url="https://burrito.example.com",
        bot_name="heyburrito",
    )
