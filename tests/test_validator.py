"""
tests/test_validator.py — Eligibility Gate Tests
=================================================
"""

from __future__ import annotations

from burrito.engine.events import MessageEvent
from burrito.engine.validator import is_bot_mention, is_eligible

BOTS = frozenset({"UBOT0001", "USLACKBOT"})


def _msg(text: str, user: str = "UGIVER01", bot_id: str | None = None) -> MessageEvent:
    return MessageEvent(channel="C100", user=user, text=text, bot_id=bot_id)


class TestIsEligible:
    def test_human_message_with_token(self, registry):
        assert is_eligible(_msg("<@UALICE01> :burrito:"), registry, BOTS)

    def test_known_bot_author_rejected(self, registry):
        assert not is_eligible(_msg("<@UALICE01> :burrito:", user="UBOT0001"), registry, BOTS)

    def test_bot_id_payload_rejected(self, registry):
        event = _msg("<@UALICE01> :burrito:", user="UAPP0001", bot_id="B123")
        assert not is_eligible(event, registry, BOTS)

    def test_no_token_rejected(self, registry):
        assert not is_eligible(_msg("<@UALICE01> thanks"), registry, BOTS)

    def test_decrement_token_counts(self, registry):
        assert is_eligible(_msg("<@UALICE01> :rottenburrito:"), registry, BOTS)


class TestIsBotMention:
    def test_mentions_bot(self):
        assert is_bot_mention(_msg("<@UBOT0001> stats"), "UBOT0001")

    def test_labelled_bot_mention(self):
        assert is_bot_mention(_msg("<@UBOT0001|heyburrito> stats"), "UBOT0001")

    def test_peer_mention_is_not_bot_mention(self):
        assert not is_bot_mention(_msg("<@UALICE01> :burrito:"), "UBOT0001")

    def test_unknown_bot_id(self):
        assert not is_bot_mention(_msg("<@UBOT0001> stats"), None)
