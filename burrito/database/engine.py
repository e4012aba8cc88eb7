"""
burrito.database.engine — Ledger Database Access
=================================================

Engine construction from ``DATABASE_URL``, a commit-or-rollback session
scope, and :func:`run_db`, which moves a blocking ledger query off the
Socket Mode event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from burrito.database.models import Base

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def create_db_engine(url: str | None = None) -> Engine:
    """Build a SQLAlchemy :class:`Engine` from *url* or ``DATABASE_URL``.

    The pool is small; a burrito bot sees a handful of messages a minute.

    Raises
    ------
    RuntimeError
        If neither *url* nor ``DATABASE_URL`` is set.
    """
    url = url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not set.  "
            "Copy .env.example → .env and set a valid database URL."
        )

    engine = create_engine(url, pool_pre_ping=True, pool_recycle=3600)
    logger.info("Database engine created → %s", engine.url.host or engine.url.database)
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create ``burrito_transactions`` if it is missing.

    Deployed databases are migrated with ``alembic upgrade head``; this only
    bootstraps a fresh SQLite file or a test engine.
    """
    Base.metadata.create_all(engine)
    logger.info("Burrito ledger table ready")


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------
@contextmanager
def get_session(engine: Engine):
    """One unit of ledger work: commit when the block exits, roll back if it raises."""
    with Session(engine) as session, session.begin():
        yield session


# ---------------------------------------------------------------------------
# Async bridge
# ---------------------------------------------------------------------------
async def run_db(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Await *func* on a worker thread.

    ``BurritoStore`` wraps each of the sync queries in
    :mod:`burrito.services.store_service` with this, e.g.
    ``await run_db(count_given_today, engine, giver_id)``.
    """
    return await asyncio.to_thread(func, *args, **kwargs)
