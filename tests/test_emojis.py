"""
tests/test_emojis.py — Emoji Registry Tests
============================================
"""

from __future__ import annotations

from burrito.engine.emojis import Effect, EmojiDescriptor, build_registry, split_tokens


class TestSplitTokens:
    def test_comma_space_list(self):
        assert split_tokens(":taco:, :star:") == [":taco:", ":star:"]

    def test_comma_list(self):
        assert split_tokens(":taco:,:star:") == [":taco:", ":star:"]

    def test_blank_pieces_dropped(self):
        assert split_tokens(" :taco: ,, :star:, ") == [":taco:", ":star:"]

    def test_absent_list(self):
        assert split_tokens(None) == []
        assert split_tokens("") == []


class TestBuildRegistry:
    def test_increment_tokens_have_no_whitespace_artifacts(self):
        registry = build_registry(":taco:, :star:", None)
        assert registry.tokens == frozenset({":taco:", ":star:"})
        assert registry.effect_of(":taco:") is Effect.INCREMENT
        assert registry.effect_of(":star:") is Effect.INCREMENT
        assert registry.effect_of(" :star:") is None

    def test_both_lists_use_the_same_rule(self):
        registry = build_registry(":taco:,:star:", ":poop:, :thumbsdown:")
        assert registry.effect_of(":poop:") is Effect.DECREMENT
        assert registry.effect_of(":thumbsdown:") is Effect.DECREMENT
        assert len(registry) == 4

    def test_missing_configuration_is_empty(self):
        registry = build_registry(None, None)
        assert len(registry) == 0
        assert registry.primary_token is None
        assert not registry.contains_token(":burrito: <@U1>")

    def test_primary_token_is_first_increment(self):
        registry = build_registry(":burrito:, :taco:", ":rottenburrito:")
        assert registry.primary_token == ":burrito:"

    def test_token_in_both_lists_keeps_increment(self):
        registry = build_registry(":taco:", ":taco:")
        assert registry.effect_of(":taco:") is Effect.INCREMENT


class TestFindTokens:
    def test_occurrences_in_text_order(self, registry):
        found = registry.find_tokens("a :taco: b :rottenburrito: c :burrito:")
        assert [d.token for _, d in found] == [":taco:", ":rottenburrito:", ":burrito:"]
        assert [offset for offset, _ in found] == sorted(offset for offset, _ in found)

    def test_exact_match_only(self, registry):
        assert registry.find_tokens(":burritos: :tacos:") == []

    def test_repeated_tokens_all_found(self, registry):
        found = registry.find_tokens(":burrito::burrito::burrito:")
        assert found == [
            (0, EmojiDescriptor(Effect.INCREMENT, ":burrito:")),
            (9, EmojiDescriptor(Effect.INCREMENT, ":burrito:")),
            (18, EmojiDescriptor(Effect.INCREMENT, ":burrito:")),
        ]

    def test_longest_token_wins(self):
        registry = build_registry(":taco:, :taco::skin-tone-2:", None)
        found = registry.find_tokens("<@U1> :taco::skin-tone-2:")
        assert [d.token for _, d in found] == [":taco::skin-tone-2:"]
