"""
burrito.engine.events — Typed Inbound Slack Events
===================================================

Every Slack ``message`` payload is normalized into one of three variants
before the pipeline touches it:

* :class:`MessageEvent` — a user message: no subtype, or one of the
  human-authored subtypes in :data:`HUMAN_SUBTYPES` (thread broadcasts,
  file shares, /me).  The only variant that can give or take away burritos.
* :class:`ChannelJoinEvent` — ``subtype == "channel_join"``; logged only.
* :class:`IgnoredEvent` — any other subtype (edits, deletions, bot posts …).

Malformed plain messages raise :class:`MalformedEventError` here, at the
boundary, so downstream code never has to check for missing keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

__all__ = [
    "HUMAN_SUBTYPES",
    "ChannelJoinEvent",
    "IgnoredEvent",
    "InboundEvent",
    "MalformedEventError",
    "MessageEvent",
    "parse_event",
]

# Subtypes a person produces by posting; everything else (edits, deletions,
# bot_message …) is not a new message from a human.
HUMAN_SUBTYPES: frozenset[str] = frozenset({"thread_broadcast", "file_share", "me_message"})


class MalformedEventError(ValueError):
    """A ``message`` payload was missing required fields or had the wrong types."""


class _SlackEvent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    channel: str


class MessageEvent(_SlackEvent):
    """A human-looking message posted in a channel or DM."""

    user: str = Field(min_length=1)
    text: str = ""
    ts: str | None = None
    bot_id: str | None = None
    subtype: str | None = None


class ChannelJoinEvent(_SlackEvent):
    user: str | None = None


class IgnoredEvent(_SlackEvent):
    channel: str | None = None  # not every subtype carries one
    subtype: str


InboundEvent = MessageEvent | ChannelJoinEvent | IgnoredEvent


def parse_event(payload: dict[str, Any]) -> InboundEvent | None:
    """Normalize a raw Slack event dict.

    Returns ``None`` for non-``message`` events.

    Raises
    ------
    MalformedEventError
        If a plain message or channel join lacks its required fields.
    """
    if payload.get("type") != "message":
        return None

    subtype = payload.get("subtype")
    try:
        if subtype is None or subtype in HUMAN_SUBTYPES:
            return MessageEvent.model_validate(payload)
        if subtype == "channel_join":
            return ChannelJoinEvent.model_validate(payload)
        return IgnoredEvent.model_validate(payload)
    except ValidationError as exc:
        raise MalformedEventError(
            f"Malformed {subtype or 'message'} event: {exc.error_count()} validation error(s)"
        ) from exc
