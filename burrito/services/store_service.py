"""
burrito.services.store_service — Burrito Ledger Reads & Writes
===============================================================

Synchronous query functions over ``burrito_transactions`` plus
:class:`BurritoStore`, the async facade the distribution engine talks to.
Every facade method ships its query to a worker thread via
:func:`~burrito.database.engine.run_db`.

"Today" is the current UTC calendar day.

Known limitation: :meth:`BurritoStore.count_given_today` followed by
:meth:`BurritoStore.record_increment` is a read-then-write, not an atomic
check-and-increment.  Two messages from the same giver racing each other
can both pass the cap check.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, time
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from burrito.database.engine import get_session, run_db
from burrito.database.models import BurritoTransaction

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def start_of_day(now: datetime | None = None) -> datetime:
    """Midnight UTC of the day containing *now*."""
    now = (now or datetime.now(UTC)).astimezone(UTC)
    return datetime.combine(now.date(), time.min, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Sync query functions (run via run_db)
# ---------------------------------------------------------------------------
def count_given_today(engine: Engine, giver_id: str, now: datetime | None = None) -> int:
    """Number of burritos *giver_id* has given since midnight UTC.

    Take-aways are not counted.
    """
    with get_session(engine) as session:
        return session.scalar(
            select(func.count())
            .select_from(BurritoTransaction)
            .where(
                BurritoTransaction.giver_id == giver_id,
                BurritoTransaction.value > 0,
                BurritoTransaction.given_at >= start_of_day(now),
            )
        ) or 0


def record_transaction(
    engine: Engine,
    *,
    recipient_id: str,
    giver_id: str,
    value: int,
    given_at: datetime | None = None,
) -> BurritoTransaction:
    """Append one ledger row and return it (detached)."""
    tx = BurritoTransaction(
        giver_id=giver_id,
        recipient_id=recipient_id,
        value=value,
        given_at=given_at or datetime.now(UTC),
    )
    with get_session(engine) as session:
        session.add(tx)
        session.flush()
        session.refresh(tx)
        session.expunge(tx)
    logger.debug("Recorded %r", tx)
    return tx


# ---------------------------------------------------------------------------
# Async facade
# ---------------------------------------------------------------------------
class BurritoStore:
    """The store API consumed by :class:`~burrito.services.distribution_service.DistributionEngine`.

    Errors from the database propagate to the caller unchanged.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    async def count_given_today(self, giver_id: str) -> int:
        return await run_db(count_given_today, self.engine, giver_id)

    async def record_increment(self, recipient_id: str, giver_id: str) -> None:
        await run_db(
            record_transaction, self.engine,
            recipient_id=recipient_id, giver_id=giver_id, value=1,
        )
        logger.info("%s gave a burrito to %s", giver_id, recipient_id)

    async def record_decrement(self, recipient_id: str, giver_id: str) -> None:
        await run_db(
            record_transaction, self.engine,
            recipient_id=recipient_id, giver_id=giver_id, value=-1,
        )
        logger.info("%s took a burrito away from %s", giver_id, recipient_id)

