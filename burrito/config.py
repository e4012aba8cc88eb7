"""
burrito.config — Environment / YAML Configuration Loader
=========================================================

**Why this file exists:**
Every component needs the same handful of knobs (daily cap, notification
toggles, emoji lists, scoreboard URL).  They are read **once** at startup
into an immutable :class:`BurritoConfig` and handed to each component, so
nothing reads ``os.environ`` behind your back at import time.

Values come from two places, environment first:

1. Environment variables (``SLACK_DAILY_CAP``, ``SCOREBOARD_URL`` …),
   usually populated from ``.env`` by :func:`dotenv.load_dotenv`.  An empty
   value (``SCOREBOARD_URL=``) counts as unset.
2. An optional ``config.yaml`` with the same settings under lowercase keys.

Usage::

    from burrito.config import load_config

    cfg = load_config()          # reads ./config.yaml if present
    print(cfg.daily_cap)         # 5
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_BOT_NAME = "heyburrito"


class ConfigError(RuntimeError):
    """Raised when a required setting is missing or malformed.

    The bot cannot run safely without a defined daily cap, so this is fatal
    at startup.
    """


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class BurritoConfig:
    """Immutable configuration shared by every component."""

    # Quota
    daily_cap: int

    # Emoji lists, raw (split by burrito.engine.emojis.build_registry)
    emoji_inc: str = ""
    emoji_dec: str = ""

    # Notifications
    in_channel_notification: bool = False
    dm_notification: bool = False
    scoreboard_url: str = ""

    # Display name used for outgoing messages
    bot_name: str = DEFAULT_BOT_NAME


# env var → YAML key (same name as the BurritoConfig field)
_SETTINGS: dict[str, str] = {
    "SLACK_DAILY_CAP": "daily_cap",
    "SLACK_EMOJI_INC": "emoji_inc",
    "SLACK_EMOJI_DEC": "emoji_dec",
    "IN_CHANNEL_NOTIFICATION_ENABLED": "in_channel_notification",
    "DM_NOTIFICATION_ENABLED": "dm_notification",
    "SCOREBOARD_URL": "scoreboard_url",
    "BOT_NAME": "bot_name",
}


def _as_bool(value: object) -> bool:
    """Only an explicit ``true`` enables a toggle."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _as_token_list(value: object) -> str:
    """YAML may give a list; the environment always gives a delimited string."""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def _as_daily_cap(value: object) -> int:
    if value is None or str(value).strip() == "":
        raise ConfigError(
            "SLACK_DAILY_CAP is not set.  "
            "Set it in .env (or daily_cap in config.yaml) to a whole number."
        )
    try:
        cap = int(str(value).strip())
    except ValueError:
        raise ConfigError(f"SLACK_DAILY_CAP must be an integer, got {value!r}") from None
    if cap < 0:
        raise ConfigError(f"SLACK_DAILY_CAP must not be negative, got {cap}")
    return cap


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return raw


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(
    path: str | Path = "config.yaml",
    environ: Mapping[str, str] | None = None,
) -> BurritoConfig:
    """Build a :class:`BurritoConfig` from the environment and *path*.

    Parameters
    ----------
    path:
        Optional YAML file with lowercase keys (``daily_cap``,
        ``scoreboard_url`` …).  A missing file is not an error.
    environ:
        Mapping to read variables from.  Defaults to ``os.environ``.

    Raises
    ------
    ConfigError
        If the daily cap is missing, not an integer, or negative.
    """
    env = os.environ if environ is None else environ
    raw = _read_yaml(Path(path))

    values: dict[str, object] = {}
    for env_key, field_name in _SETTINGS.items():
        if env.get(env_key) not in (None, ""):
            values[field_name] = env[env_key]
        elif raw.get(field_name) is not None:
            values[field_name] = raw[field_name]

    return BurritoConfig(
        daily_cap=_as_daily_cap(values.get("daily_cap")),
        emoji_inc=_as_token_list(values.get("emoji_inc", "")),
        emoji_dec=_as_token_list(values.get("emoji_dec", "")),
        in_channel_notification=_as_bool(values.get("in_channel_notification", False)),
        dm_notification=_as_bool(values.get("dm_notification", False)),
        scoreboard_url=str(values.get("scoreboard_url", "")),
        bot_name=str(values.get("bot_name") or DEFAULT_BOT_NAME),
    )
