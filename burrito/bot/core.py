"""
burrito.bot.core — Socket Mode Listener & Message Pipeline
===========================================================

**Why this file exists:**
This is where a raw Slack event becomes burritos.  :class:`BurritoBot`:

1. Holds the shared config, registry, store, directory and notifier.
2. Acknowledges every Socket Mode envelope immediately, then handles the
   event in its own task so a slow DB round trip never blocks the socket.
3. Runs each ``message`` through the pipeline::

       parse_event → is_eligible → is_bot_mention? → parse_message
                   → DistributionEngine.distribute → notify

Every handler is wrapped so one bad event can't take down the listener.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from slack_sdk.socket_mode.response import SocketModeResponse

from burrito.engine.events import ChannelJoinEvent, MalformedEventError, MessageEvent, parse_event
from burrito.engine.parser import parse_message
from burrito.engine.validator import is_bot_mention, is_eligible
from burrito.services.distribution_service import DistributionEngine, DistributionError

if TYPE_CHECKING:
    from slack_sdk.socket_mode.aiohttp import SocketModeClient
    from slack_sdk.socket_mode.request import SocketModeRequest

    from burrito.config import BurritoConfig
    from burrito.engine.emojis import EmojiRegistry
    from burrito.services.directory_service import SlackDirectory
    from burrito.services.distribution_service import Store
    from burrito.services.notification_service import Notifier

logger = logging.getLogger(__name__)


class BurritoBot:
    """Carries project-wide state and routes Slack events through the pipeline.

    Parameters
    ----------
    cfg:
        The loaded :class:`BurritoConfig`.
    registry:
        Emoji registry built from ``cfg``.
    store:
        Ledger used by the distribution engine.
    directory:
        Source of known bot IDs and our own user ID.
    notifier:
        Outbound Slack messages.
    """

    def __init__(
        self,
        cfg: BurritoConfig,
        registry: EmojiRegistry,
        store: Store,
        directory: SlackDirectory,
        notifier: Notifier,
    ) -> None:
        self.cfg = cfg
        self.registry = registry
        self.directory = directory
        self.notifier = notifier
        self.distributor = DistributionEngine(store, notifier, cfg.daily_cap)
        self._tasks: set[asyncio.Task] = set()

    # -----------------------------------------------------------------------
    # Socket Mode plumbing
    # -----------------------------------------------------------------------
    async def on_socket_request(self, client: SocketModeClient, req: SocketModeRequest) -> None:
        """Ack the envelope, then process ``events_api`` payloads in the background."""
        await client.send_socket_mode_response(SocketModeResponse(envelope_id=req.envelope_id))
        if req.type != "events_api":
            return

        event = (req.payload or {}).get("event") or {}
        task = asyncio.create_task(self.handle_event(event), name="burrito-event")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for in-flight events (used on shutdown)."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    # -----------------------------------------------------------------------
    # Pipeline
    # -----------------------------------------------------------------------
    async def handle_event(self, payload: dict[str, Any]) -> None:
        try:
            await self._handle_event(payload)
        except Exception:
            logger.exception(
                "Error processing %s event in channel %s",
                payload.get("type"), payload.get("channel"),
            )

    async def _handle_event(self, payload: dict[str, Any]) -> None:
        try:
            event = parse_event(payload)
        except MalformedEventError as exc:
            logger.warning("Dropping event: %s", exc)
            return

        if isinstance(event, ChannelJoinEvent):
            logger.info("Joined channel %s", event.channel)
            return
        if not isinstance(event, MessageEvent):
            return

        if not is_eligible(event, self.registry, self.directory.list_known_bot_ids()):
            return

        if is_bot_mention(event, self.directory.resolve_self_id()):
            # Personal stats queries would be answered here.
            logger.debug("Bot mention from %s in %s; no giving", event.user, event.channel)
            return

        result = parse_message(event, self.registry)
        if result is None:
            return

        try:
            outcome = await self.distributor.distribute(result.giver, result.updates)
        except DistributionError as exc:
            logger.exception("Burrito batch from %s aborted", result.giver)
            # Increments before the failure are committed; tell those recipients.
            await self.notifier.notify_receivers(exc.applied.recipients)
            return

        if outcome.rejected:
            logger.info(
                "Rejected %d burritos from %s (over daily cap)", outcome.rejected, result.giver
            )
        if outcome.recipients:
            await self.notifier.notify_channel(event.channel)
            await self.notifier.notify_receivers(outcome.recipients)
