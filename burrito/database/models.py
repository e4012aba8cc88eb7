"""
burrito.database.models — SQLAlchemy 2.0 Data Models
=====================================================

Tables:
- burrito_transactions — Append-only ledger; one row per burrito given
  (``value = +1``) or taken away (``value = -1``).

Scores and daily counts are derived from the ledger, never stored.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Integer, SmallInteger, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Burrito ORM models."""


# ---------------------------------------------------------------------------
# BurritoTransaction — the ledger
# ---------------------------------------------------------------------------
class BurritoTransaction(Base):
    __tablename__ = "burrito_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    giver_id: Mapped[str] = mapped_column(String(32), nullable=False)  # Slack user ID
    recipient_id: Mapped[str] = mapped_column(String(32), nullable=False)
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # +1 give, -1 take away
    given_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_burrito_tx_giver_given_at", "giver_id", "given_at"),
        Index("ix_burrito_tx_recipient", "recipient_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<BurritoTransaction {self.giver_id}→{self.recipient_id} "
            f"value={self.value:+d}>"
        )
