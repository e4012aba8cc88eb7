"""
Burrito — Peer Recognition for Slack
=====================================
Lets members of a workspace hand each other burritos by posting a message
with a recognized emoji and a user mention.  Each giver has a daily cap;
recipients get a DM and the channel gets a short shout-out.

Package layout::

    burrito/
    ├── config.py          # .env / YAML → typed Python config
    ├── constants.py       # Mention syntax + user-facing message templates
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   └── models.py      # BurritoTransaction ledger
    ├── engine/
    │   ├── emojis.py      # Emoji registry (increment / decrement tokens)
    │   ├── events.py      # Typed inbound Slack events
    │   ├── parser.py      # Message → ParseResult (giver + ordered updates)
    │   └── validator.py   # Eligibility + bot-mention gates
    ├── services/
    │   ├── store_service.py        # Daily counts + give/take-away ledger writes
    │   ├── distribution_service.py # Daily-cap enforcement, sequential apply
    │   ├── notification_service.py # Channel shout-out + recipient DMs
    │   └── directory_service.py    # Known bot IDs + our own user ID
    └── bot/
        ├── core.py        # Socket Mode listener + event pipeline
        └── __main__.py    # Entry point
"""

__version__ = "0.1.0"
