"""
burrito.engine.emojis — Emoji Registry
=======================================

Maps the configured emoji tokens (``:burrito:``, ``:taco:`` …) to the
effect they have on the recipient.  Built once at startup from the two
configured lists and read-only afterwards.

Both lists use the same splitting rule: split on ``,``, strip surrounding
whitespace from each piece, drop empty pieces.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

__all__ = ["Effect", "EmojiDescriptor", "EmojiRegistry", "build_registry", "split_tokens"]

logger = logging.getLogger(__name__)


class Effect(enum.StrEnum):
    """What a token does to the recipient's score."""
    INCREMENT = "inc"
    DECREMENT = "dec"


@dataclass(frozen=True, slots=True)
class EmojiDescriptor:
    effect: Effect
    token: str


def split_tokens(raw: str | None) -> list[str]:
    """Split a delimited token list, e.g. ``":taco:, :star:"`` → two tokens."""
    if not raw:
        return []
    return [piece.strip() for piece in raw.split(",") if piece.strip()]


@dataclass(frozen=True)
class EmojiRegistry:
    """Immutable set of recognized tokens.

    ``descriptors`` keeps configuration order: all increment tokens first,
    then decrement tokens.  A token listed under both effects keeps the
    first (increment) meaning.
    """

    descriptors: tuple[EmojiDescriptor, ...] = ()
    _by_token: dict[str, Effect] = field(init=False, repr=False, compare=False)
    _pattern: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_token: dict[str, Effect] = {}
        for d in self.descriptors:
            by_token.setdefault(d.token, d.effect)
        object.__setattr__(self, "_by_token", by_token)

        # Longest first so ":taco::skin-tone-2:" wins over ":taco:"
        ordered = sorted(by_token, key=len, reverse=True)
        pattern = re.compile("|".join(re.escape(t) for t in ordered)) if ordered else None
        object.__setattr__(self, "_pattern", pattern)

    def __len__(self) -> int:
        return len(self._by_token)

    def __iter__(self) -> Iterator[EmojiDescriptor]:
        return iter(self.descriptors)

    @property
    def tokens(self) -> frozenset[str]:
        return frozenset(self._by_token)

    @property
    def primary_token(self) -> str | None:
        """First configured increment token — used as the bot's icon."""
        for d in self.descriptors:
            if d.effect is Effect.INCREMENT:
                return d.token
        return None

    def effect_of(self, token: str) -> Effect | None:
        return self._by_token.get(token)

    def contains_token(self, text: str) -> bool:
        return self._pattern is not None and self._pattern.search(text) is not None

    def find_tokens(self, text: str) -> list[tuple[int, EmojiDescriptor]]:
        """Return ``(offset, descriptor)`` for every token occurrence, left to right."""
        if self._pattern is None:
            return []
        return [
            (m.start(), EmojiDescriptor(effect=self._by_token[m.group(0)], token=m.group(0)))
            for m in self._pattern.finditer(text)
        ]


def build_registry(inc: str | None, dec: str | None) -> EmojiRegistry:
    """Build the registry from the raw increment and decrement lists.

    Missing lists simply contribute nothing; messages using that effect
    will never parse.
    """
    descriptors = [EmojiDescriptor(Effect.INCREMENT, t) for t in split_tokens(inc)]
    descriptors += [EmojiDescriptor(Effect.DECREMENT, t) for t in split_tokens(dec)]

    if not any(d.effect is Effect.INCREMENT for d in descriptors):
        logger.warning("No increment emojis configured (SLACK_EMOJI_INC) — nobody can give burritos")
    if not any(d.effect is Effect.DECREMENT for d in descriptors):
        logger.info("No decrement emojis configured (SLACK_EMOJI_DEC)")

    return EmojiRegistry(descriptors=tuple(descriptors))
