"""
burrito.services.directory_service — Workspace Identity Lookups
================================================================

Answers two questions the pipeline needs:

* Which user IDs belong to bots?  (Their messages are never parsed.)
* What is our own user ID?  (Messages mentioning it are bot queries, not
  giving messages.)

Both are loaded once at startup and cached; call :meth:`refresh` to reload.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slack_sdk.web.async_client import AsyncWebClient

logger = logging.getLogger(__name__)

# Slackbot is not flagged is_bot in users.list
SLACKBOT_ID = "USLACKBOT"


class SlackDirectory:
    def __init__(self, client: AsyncWebClient) -> None:
        self.client = client
        self._bot_ids: frozenset[str] = frozenset({SLACKBOT_ID})
        self._self_id: str | None = None

    async def refresh(self) -> None:
        """Reload our own identity and the workspace's bot users."""
        auth = await self.client.auth_test()
        self._self_id = auth.get("user_id")

        bot_ids = {SLACKBOT_ID}
        if self._self_id:
            bot_ids.add(self._self_id)

        cursor: str | None = None
        while True:
            resp = await self.client.users_list(limit=200, cursor=cursor)
            for member in resp.get("members", []):
                if member.get("is_bot") or member.get("is_app_user"):
                    bot_ids.add(member["id"])
            cursor = (resp.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break

        self._bot_ids = frozenset(bot_ids)
        logger.info("Directory loaded: self=%s, %d bot users", self._self_id, len(self._bot_ids))

    def list_known_bot_ids(self) -> frozenset[str]:
        return self._bot_ids

    def resolve_self_id(self) -> str | None:
        return self._self_id
