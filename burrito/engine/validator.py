"""
burrito.engine.validator — Eligibility Gates
=============================================

Cheap checks that run before the parser.  A message is worth parsing only
if a human wrote it and it contains at least one configured token.
"""

from __future__ import annotations

from collections.abc import Collection

from burrito.constants import mention
from burrito.engine.emojis import EmojiRegistry
from burrito.engine.events import MessageEvent

__all__ = ["is_bot_mention", "is_eligible"]


def is_eligible(
    event: MessageEvent,
    registry: EmojiRegistry,
    known_bot_ids: Collection[str],
) -> bool:
    """Return True if *event* should be handed to the parser.

    Rejects bot authors (so two bots can't loop on each other) and
    messages without any registry token.
    """
    if event.bot_id is not None or event.user in known_bot_ids:
        return False
    return registry.contains_token(event.text)


def is_bot_mention(event: MessageEvent, bot_id: str | None) -> bool:
    """True when the message addresses the bot itself rather than a peer."""
    if not bot_id:
        return False
    return mention(bot_id) in event.text or f"<@{bot_id}|" in event.text
