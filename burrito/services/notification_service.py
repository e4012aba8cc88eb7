"""
burrito.services.notification_service — Channel Shout-outs & Recipient DMs
===========================================================================

Best-effort delivery.  A failed send is logged and swallowed here; it never
reaches the store path, and burritos already recorded stay recorded.

Each toggle in :class:`~burrito.config.BurritoConfig` gates one kind of
message:

* ``in_channel_notification`` — one anonymous shout-out in the channel.
* ``dm_notification`` — one DM per **unique** recipient.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from slack_sdk.errors import SlackApiError

from burrito.constants import CHANNEL_SHOUTOUT, RECIPIENT_DM

if TYPE_CHECKING:
    from slack_sdk.web.async_client import AsyncWebClient

    from burrito.config import BurritoConfig
    from burrito.engine.emojis import EmojiRegistry

logger = logging.getLogger(__name__)

DEFAULT_ICON = ":burrito:"


class Notifier:
    """Sends every outbound Slack message the bot produces."""

    def __init__(
        self,
        client: AsyncWebClient,
        cfg: BurritoConfig,
        registry: EmojiRegistry,
    ) -> None:
        self.client = client
        self.cfg = cfg
        self.icon = registry.primary_token or DEFAULT_ICON

    async def send_to_user(self, target: str, text: str) -> bool:
        """Post *text* to a channel or user ID.  Returns True on success."""
        try:
            res = await self.client.chat_postMessage(
                channel=target,
                text=text,
                username=self.cfg.bot_name,
                icon_emoji=self.icon,
            )
        except SlackApiError as exc:
            logger.error(
                "Slack rejected message to %s: %s", target, exc.response.get("error")
            )
            return False
        except Exception:
            logger.exception("Failed to send message to %s", target)
            return False

        if res.get("ok"):
            logger.info("Notified %s", target)
            return True
        logger.warning("chat.postMessage to %s returned ok=false", target)
        return False

    async def notify_channel(self, channel: str) -> None:
        if not self.cfg.in_channel_notification:
            return
        await self.send_to_user(
            channel,
            CHANNEL_SHOUTOUT.format(emoji=self.icon, scoreboard_url=self.cfg.scoreboard_url),
        )

    async def notify_receivers(self, recipients: Iterable[str]) -> None:
        if not self.cfg.dm_notification:
            return
        unique = list(dict.fromkeys(recipients))
        if not unique:
            return
        logger.info("Notifying %d receivers: %s", len(unique), ", ".join(unique))
        text = RECIPIENT_DM.format(scoreboard_url=self.cfg.scoreboard_url)
        for recipient in unique:
            await self.send_to_user(recipient, text)
