"""
burrito.constants — Shared Constants & Helpers
===============================================

Single source of truth for Slack mention syntax and the user-facing
message templates.  Import from here instead of duplicating strings in
the parser, validator, and notification service.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Slack mention syntax
# ---------------------------------------------------------------------------
# <@U024BE7LH> or <@W024BE7LH|alice>
USER_MENTION_REGEX = re.compile(r"<@([UW][A-Z0-9]+)(?:\|[^>]*)?>")


def mention(user_id: str) -> str:
    """Render *user_id* as a Slack mention."""
    return f"<@{user_id}>"


# ---------------------------------------------------------------------------
# Message templates
# ---------------------------------------------------------------------------
CHANNEL_SHOUTOUT = (
    "Awesome! Someone just got some {emoji} gratitude and love! "
    "Checkout the <{scoreboard_url}|karma board>."
)

RECIPIENT_DM = (
    "Congrats! You've been recognized for doing something great! "
    "Checkout the scoreboard here: {scoreboard_url}"
)

SHORTFALL_DM = (
    "You are trying to give away {requested} burritos, "
    "but you only have {remaining} burritos left today!"
)
