"""
tests/test_database_engine.py — Engine, Session Scope and Async Bridge Tests
=============================================================================
"""

from __future__ import annotations

import asyncio
import threading

import pytest
from sqlalchemy import func, inspect, select

from burrito.database.engine import create_db_engine, get_session, init_db, run_db
from burrito.database.models import BurritoTransaction


def run_async(coro):
    """Run an async coroutine to completion."""
    return asyncio.run(coro)


def _count(engine) -> int:
    with get_session(engine) as session:
        return session.scalar(select(func.count()).select_from(BurritoTransaction))


class TestCreateEngine:
    def test_missing_url_raises(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            create_db_engine()

    def test_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        engine = create_db_engine()
        assert engine.url.drivername == "sqlite"
        engine.dispose()

    def test_init_db_creates_ledger_table(self):
        engine = create_db_engine("sqlite://")
        init_db(engine)
        assert "burrito_transactions" in inspect(engine).get_table_names()
        engine.dispose()


class TestGetSession:
    def test_commits_on_success(self, db_engine):
        with get_session(db_engine) as session:
            session.add(BurritoTransaction(giver_id="UGIVER01", recipient_id="UALICE01", value=1))

        assert _count(db_engine) == 1

    def test_rolls_back_on_error(self, db_engine):
        with pytest.raises(ConnectionError):
            with get_session(db_engine) as session:
                session.add(
                    BurritoTransaction(giver_id="UGIVER01", recipient_id="UALICE01", value=1)
                )
                session.flush()
                raise ConnectionError("db down")

        assert _count(db_engine) == 0


class TestRunDb:
    def test_runs_off_the_event_loop_thread(self):
        def which_thread(tag: str) -> tuple[str, int]:
            return tag, threading.get_ident()

        tag, ident = run_async(run_db(which_thread, tag="ledger"))

        assert tag == "ledger"
        assert ident != threading.get_ident()

    def test_exceptions_propagate(self):
        def boom() -> None:
            raise ConnectionError("db down")

        with pytest.raises(ConnectionError):
            run_async(run_db(boom))
