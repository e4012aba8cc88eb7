"""
burrito.engine.parser — Message → Give/Take-Away Intents
=========================================================

Pure function: no Slack I/O, no DB I/O.

Pairing rule: every token occurrence is paired with the nearest user
mention *before* it in the text.  Tokens that appear before any mention
pair with the first mention::

    "<@U1> thanks! :burrito: :burrito: <@U2> :burrito:"
        → inc U1, inc U1, inc U2

    ":burrito: <@U1> for the review"
        → inc U1

A giver can't reward themselves; pairs that land on the giver are dropped.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass

from burrito.constants import USER_MENTION_REGEX
from burrito.engine.emojis import Effect, EmojiRegistry
from burrito.engine.events import MessageEvent

__all__ = ["ParseResult", "Update", "parse_message"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Update:
    effect: Effect
    recipient: str


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Giver plus their updates, in the order the tokens appear."""

    giver: str
    updates: tuple[Update, ...]


def parse_message(event: MessageEvent, registry: EmojiRegistry) -> ParseResult | None:
    """Extract the giver and an ordered list of updates from *event*.

    Returns ``None`` when the message contains no valid (token, mention)
    pair, i.e. it isn't a giving message at all.
    """
    text = event.text
    occurrences = registry.find_tokens(text)
    if not occurrences:
        return None

    mentions = [(m.start(), m.group(1)) for m in USER_MENTION_REGEX.finditer(text)]
    if not mentions:
        return None
    offsets = [offset for offset, _ in mentions]

    updates: list[Update] = []
    for offset, descriptor in occurrences:
        idx = bisect.bisect_right(offsets, offset) - 1
        recipient = mentions[max(idx, 0)][1]
        if recipient == event.user:
            logger.debug("Dropping self-targeted %s from %s", descriptor.token, event.user)
            continue
        updates.append(Update(effect=descriptor.effect, recipient=recipient))

    if not updates:
        return None
    return ParseResult(giver=event.user, updates=tuple(updates))
