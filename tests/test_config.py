"""
tests/test_config.py — Configuration Loading Tests
===================================================

Environment vs YAML precedence, boolean parsing, and the fatal daily cap.
"""

from __future__ import annotations

import pytest

from burrito.config import DEFAULT_BOT_NAME, ConfigError, load_config


def _write_yaml(tmp_path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDailyCap:
    def test_reads_cap_from_environment(self, tmp_path):
        cfg = load_config(tmp_path / "missing.yaml", environ={"SLACK_DAILY_CAP": "5"})
        assert cfg.daily_cap == 5

    def test_missing_cap_is_fatal(self, tmp_path):
        with pytest.raises(ConfigError, match="SLACK_DAILY_CAP"):
            load_config(tmp_path / "missing.yaml", environ={})

    def test_non_integer_cap_is_fatal(self, tmp_path):
        with pytest.raises(ConfigError, match="integer"):
            load_config(tmp_path / "missing.yaml", environ={"SLACK_DAILY_CAP": "five"})

    def test_negative_cap_is_fatal(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml", environ={"SLACK_DAILY_CAP": "-1"})


class TestToggles:
    def test_only_true_enables(self, tmp_path):
        cfg = load_config(
            tmp_path / "missing.yaml",
            environ={
                "SLACK_DAILY_CAP": "5",
                "IN_CHANNEL_NOTIFICATION_ENABLED": "true",
                "DM_NOTIFICATION_ENABLED": "yes",
            },
        )
        assert cfg.in_channel_notification is True
        assert cfg.dm_notification is False

    def test_toggles_default_off(self, tmp_path):
        cfg = load_config(tmp_path / "missing.yaml", environ={"SLACK_DAILY_CAP": "5"})
        assert not cfg.in_channel_notification
        assert not cfg.dm_notification
        assert cfg.bot_name == DEFAULT_BOT_NAME


class TestYamlFile:
    def test_yaml_values_used_when_env_absent(self, tmp_path):
        path = _write_yaml(
            tmp_path,
            "daily_cap: 3\n"
            "dm_notification: true\n"
            "scoreboard_url: https://board.example.com\n"
            "emoji_inc:\n  - ':taco:'\n  - ':star:'\n",
        )
        cfg = load_config(path, environ={})
        assert cfg.daily_cap == 3
        assert cfg.dm_notification is True
        assert cfg.scoreboard_url == "https://board.example.com"
        assert cfg.emoji_inc == ":taco:,:star:"

    def test_environment_overrides_yaml(self, tmp_path):
        path = _write_yaml(tmp_path, "daily_cap: 3\nbot_name: yamlbot\n")
        cfg = load_config(path, environ={"SLACK_DAILY_CAP": "10", "BOT_NAME": "envbot"})
        assert cfg.daily_cap == 10
        assert cfg.bot_name == "envbot"

    def test_empty_environment_value_falls_back_to_yaml(self, tmp_path):
        path = _write_yaml(tmp_path, "daily_cap: 3\nscoreboard_url: https://board.example.com\n")
        cfg = load_config(path, environ={"SLACK_DAILY_CAP": "", "SCOREBOARD_URL": ""})
        assert cfg.daily_cap == 3
        assert cfg.scoreboard_url == "https://board.example.com"

    def test_empty_environment_cap_without_yaml_is_fatal(self, tmp_path):
        with pytest.raises(ConfigError, match="not set"):
            load_config(tmp_path / "missing.yaml", environ={"SLACK_DAILY_CAP": ""})

    def test_non_mapping_yaml_rejected(self, tmp_path):
        path = _write_yaml(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path, environ={"SLACK_DAILY_CAP": "5"})

    def test_config_is_frozen(self, tmp_path):
        cfg = load_config(tmp_path / "missing.yaml", environ={"SLACK_DAILY_CAP": "5"})
        with pytest.raises(AttributeError):
            cfg.daily_cap = 99  # type: ignore[misc]
