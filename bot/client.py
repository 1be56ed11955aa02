"""
Discord bot client - lean event handling and command registration.

Business logic is delegated to the auto-reply engine and the modules.
"""
from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands

from core.config import BotSettings
from core.constants import CommandName, ReplyMode
from core.help_system import help_system
from modules.auto_responder import (
    handle_auto_reply,
    handle_help_reply_command,
    handle_list_replies_command,
    handle_reply_command,
    setup_auto_responder,
)
from modules.currency import handle_convert_command, setup_currency
from modules.news import handle_analisis_command, setup_news
from responders.engine import AutoReplyEngine
from responders.manager import RuleManager
from services.rss_service import RSS_TOPICS

logger = logging.getLogger("autoreply")


class AutoReplyBot(discord.Client):
    """
    Main Discord bot client.

    Handles:
    - Discord events (on_ready, on_message)
    - Slash command registration

    The rule manager is created once at startup and handed in; the client
    never touches the store directly.
    """

    def __init__(self, manager: RuleManager, settings: BotSettings) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True
        intents.guild_messages = True
        super().__init__(intents=intents)

        self.tree = app_commands.CommandTree(self)
        self.settings = settings
        self.engine = AutoReplyEngine(manager)
        self.ready_once = False

    # ─── Lifecycle ────────────────────────────────────────────────────────────

    async def setup_hook(self) -> None:
        """Called when the bot is starting up."""
        setup_auto_responder()
        setup_news()
        setup_currency()

        self._register_commands()
        synced = await self.tree.sync()
        logger.info("Registered %d slash commands", len(synced))

    async def on_ready(self) -> None:
        if not self.ready_once:
            logger.info("Bot is ready! Logged in as: %s", self.user)
            logger.info("Bot is in %d servers", len(self.guilds))
            self.ready_once = True

    # ─── Message Events ───────────────────────────────────────────────────────

    async def on_message(self, message: discord.Message) -> None:
        """Handle incoming messages."""
        if message.author.bot or message.guild is None:
            return
        try:
            await handle_auto_reply(self.engine, message)
        except Exception as e:
            logger.error("Auto-reply error for message %s: %s", message.id, e)

    # ─── Commands ─────────────────────────────────────────────────────────────

    def _register_commands(self) -> None:
        """Register slash commands."""
        engine = self.engine
        settings = self.settings

        @app_commands.command(name=CommandName.REPLY, description="Set up auto-reply for specific messages")
        @app_commands.describe(
            trigger="The message that will trigger the reply",
            response="The response message to send",
            mode="Choose 'add' to create new rule or 'remove' to delete existing rule",
        )
        @app_commands.choices(mode=[
            app_commands.Choice(name=ReplyMode.ADD, value=ReplyMode.ADD),
            app_commands.Choice(name=ReplyMode.REMOVE, value=ReplyMode.REMOVE),
        ])
        async def reply_cmd(
            interaction: discord.Interaction,
            trigger: str,
            response: Optional[str] = None,
            mode: Optional[app_commands.Choice[str]] = None,
        ) -> None:
            await handle_reply_command(
                engine,
                interaction,
                trigger,
                response,
                mode.value if mode else None,
            )

        @app_commands.command(name=CommandName.LIST_REPLIES, description="List all auto-reply rules for this server")
        async def list_replies_cmd(interaction: discord.Interaction) -> None:
            await handle_list_replies_command(engine, interaction)

        @app_commands.command(name=CommandName.HELP_REPLY, description="Show help information for the auto-reply bot")
        async def help_reply_cmd(interaction: discord.Interaction) -> None:
            await handle_help_reply_command(interaction)

        @app_commands.command(name=CommandName.COMMANDS, description="Show all available bot commands")
        async def commands_cmd(interaction: discord.Interaction) -> None:
            await interaction.response.send_message(embed=help_system.get_help_embed(), ephemeral=True)

        @app_commands.command(name=CommandName.ANALISIS, description="Fetch latest news and analysis from Investing.com")
        @app_commands.describe(topic="Topic to get news for")
        @app_commands.choices(topic=[
            app_commands.Choice(name=key.title(), value=key) for key in RSS_TOPICS
        ])
        async def analisis_cmd(
            interaction: discord.Interaction,
            topic: app_commands.Choice[str],
        ) -> None:
            await handle_analisis_command(
                interaction,
                topic.value,
                allowed_guild_id=settings.analisis_guild_id,
                allowed_channel_id=settings.analisis_channel_id,
            )

        @app_commands.command(name=CommandName.CONVERT, description="Convert currency amounts between different currencies")
        @app_commands.describe(
            amount_and_currencies="Amount and currencies to convert (e.g., '$500 idr', '1000jpy usd', '100eur gbp')",
        )
        async def convert_cmd(
            interaction: discord.Interaction,
            amount_and_currencies: str,
        ) -> None:
            await handle_convert_command(
                interaction,
                amount_and_currencies,
                api_key=settings.exchangerate_api_key,
            )

        for command in (
            reply_cmd,
            list_replies_cmd,
            help_reply_cmd,
            commands_cmd,
            analisis_cmd,
            convert_cmd,
        ):
            self.tree.add_command(command)
