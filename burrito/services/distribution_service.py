"""
burrito.services.distribution_service — Daily-Cap Enforcement
==============================================================

Applies a batch of updates (everything parsed from one message) for a
single giver, one update at a time, against the store.

Rules:

* Before **every** update the giver's count for today is re-read from the
  store, so the store stays the single source of truth even if another
  message from the same giver is being processed concurrently.
* If the pending updates outnumber what the giver has left today, the
  rest of the batch is rejected as a whole (never truncated) and the giver
  gets a DM explaining the shortfall.
* Take-aways never count toward the cap, but they do count as part of the
  batch size in the shortfall check.
* A store error aborts the remaining updates.  Updates already applied stay
  committed; :class:`DistributionError` carries them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from burrito.constants import SHORTFALL_DM
from burrito.engine.emojis import Effect
from burrito.engine.parser import Update

if TYPE_CHECKING:
    from burrito.services.notification_service import Notifier

logger = logging.getLogger(__name__)


class Store(Protocol):
    async def count_given_today(self, giver_id: str) -> int: ...
    async def record_increment(self, recipient_id: str, giver_id: str) -> None: ...
    async def record_decrement(self, recipient_id: str, giver_id: str) -> None: ...


@dataclass
class DistributionOutcome:
    """Recipients who got a burrito, in application order (duplicates kept)."""

    recipients: list[str] = field(default_factory=list)
    rejected: int = 0  # updates refused by the daily cap


class DistributionError(RuntimeError):
    """The store failed mid-batch.  ``applied`` holds what was committed."""

    def __init__(self, giver: str, applied: DistributionOutcome) -> None:
        super().__init__(
            f"Store error while distributing burritos from {giver} "
            f"({len(applied.recipients)} applied before failure)"
        )
        self.giver = giver
        self.applied = applied


class DistributionEngine:
    """Enforces the per-giver daily cap while applying updates in order."""

    def __init__(self, store: Store, notifier: Notifier, daily_cap: int) -> None:
        self.store = store
        self.notifier = notifier
        self.daily_cap = daily_cap

    async def distribute(self, giver: str, updates: Sequence[Update]) -> DistributionOutcome:
        """Apply *updates* from *giver* and return who received a burrito.

        Raises
        ------
        DistributionError
            If the store fails; chained to the original exception.
        """
        outcome = DistributionOutcome()
        index = 0

        while index < len(updates):
            try:
                given = await self.store.count_given_today(giver)
            except Exception as exc:
                raise DistributionError(giver, outcome) from exc

            remaining = self.daily_cap - given
            pending = len(updates) - index
            logger.info("%s has given %d burritos today", giver, given)

            if pending > remaining:
                outcome.rejected = pending
                logger.info(
                    "User %s is trying to give %d, but has only %d left",
                    giver, pending, remaining,
                )
                await self.notifier.send_to_user(
                    giver,
                    SHORTFALL_DM.format(requested=pending, remaining=max(remaining, 0)),
                )
                break

            if given >= self.daily_cap:
                logger.info("Daily cap of %d reached for %s", self.daily_cap, giver)
                break

            update = updates[index]
            try:
                if update.effect is Effect.INCREMENT:
                    await self.store.record_increment(update.recipient, giver)
                    outcome.recipients.append(update.recipient)
                else:
                    await self.store.record_decrement(update.recipient, giver)
            except Exception as exc:
                raise DistributionError(giver, outcome) from exc
            index += 1

        return outcome
