"""
burrito.bot.__main__ — Entry point for ``python -m burrito.bot``
================================================================

Wiring:
1. Load .env (secrets).
2. Load configuration (fatal if the daily cap is missing).
3. Build the emoji registry.
4. Create the SQLAlchemy engine and ensure tables exist.
5. Load the workspace directory (bot IDs, our own ID).
6. Create the BurritoBot and attach it to a Socket Mode client.
7. Run until Ctrl+C or SIGTERM.

Run with::

    python -m burrito.bot
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv
from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.web.async_client import AsyncWebClient

from burrito.bot.core import BurritoBot
from burrito.config import BurritoConfig, ConfigError, load_config
from burrito.database.engine import create_db_engine, init_db
from burrito.engine.emojis import build_registry
from burrito.services.directory_service import SlackDirectory
from burrito.services.notification_service import Notifier
from burrito.services.store_service import BurritoStore

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("burrito")


async def run(cfg: BurritoConfig, bot_token: str, app_token: str) -> None:
    # 3. Emoji registry.
    registry = build_registry(cfg.emoji_inc, cfg.emoji_dec)
    logger.info("Recognized emojis: %s", ", ".join(sorted(registry.tokens)) or "(none)")

    # 4. Database.
    engine = create_db_engine()
    init_db(engine)

    # 5. Directory.
    web_client = AsyncWebClient(token=bot_token)
    directory = SlackDirectory(web_client)
    await directory.refresh()

    # 6. Bot.
    bot = BurritoBot(
        cfg=cfg,
        registry=registry,
        store=BurritoStore(engine),
        directory=directory,
        notifier=Notifier(web_client, cfg, registry),
    )
    socket = SocketModeClient(app_token=app_token, web_client=web_client)
    socket.socket_mode_request_listeners.append(bot.on_socket_request)

    # 7. Run.
    logger.info("Listening on slack messages")
    await socket.connect()
    try:
        await asyncio.Event().wait()
    finally:
        await bot.drain()
        await socket.close()
        engine.dispose()


def main() -> None:
    """Bootstrap and run the burrito bot."""

    # 1. Environment variables (secrets).
    load_dotenv()

    bot_token = os.getenv("SLACK_BOT_TOKEN")
    app_token = os.getenv("SLACK_APP_TOKEN")
    if not bot_token or not app_token:
        logger.critical(
            "SLACK_BOT_TOKEN and SLACK_APP_TOKEN must both be set.  "
            "Copy .env.example → .env and paste your tokens."
        )
        sys.exit(1)

    # 2. Configuration.
    try:
        cfg = load_config()
    except ConfigError as exc:
        logger.critical("%s", exc)
        sys.exit(1)
    logger.info("Config loaded — daily cap: %d", cfg.daily_cap)

    try:
        asyncio.run(run(cfg, bot_token, app_token))
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
