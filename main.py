"""
Main entry point for the auto-reply bot.

Loads configuration from environment, loads the rule store and starts the bot.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from discord.errors import LoginFailure, PrivilegedIntentsRequired

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

from bot import AutoReplyBot
from core.config import BotSettings, ConfigError, load_settings
from core.rule_store import RuleStore
from responders.manager import RuleManager

logger = logging.getLogger("autoreply")


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
    logging.getLogger("discord").setLevel(level)
    # Suppress verbose HTTP logs unless LOG_LEVEL is DEBUG
    if level > logging.DEBUG:
        logging.getLogger("discord.http").setLevel(logging.WARNING)


async def run(settings: BotSettings) -> None:
    store = RuleStore(settings.auto_replies_path)
    await store.load()
    manager = RuleManager(store)

    bot = AutoReplyBot(manager, settings)
    try:
        async with bot:
            await bot.start(settings.token)
    except PrivilegedIntentsRequired:
        logger.error(
            "Privileged intents required. Enable the MESSAGE CONTENT intent "
            "in the Discord developer portal."
        )
        raise
    except LoginFailure:
        logger.error(
            "Token is invalid. Reset the bot token in the Discord developer portal "
            "and update DISCORD_BOT_TOKEN in your .env file."
        )
        raise


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging("INFO")
        logger.error("%s", exc)
        return 1

    configure_logging(settings.log_level)
    if not env_path.exists():
        logger.debug(".env file not found at %s", env_path)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Bot shutting down...")
    except (PrivilegedIntentsRequired, LoginFailure):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
