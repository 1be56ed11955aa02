"""
Auto-responder module.

discord.py glue for the auto-reply system: answers guild messages that match
a stored trigger and implements ``/reply``, ``/list_replies`` and
``/help_reply``.
"""
from __future__ import annotations

import logging
from typing import Optional

import discord

from core.constants import (
    COLOR_LIST,
    COLOR_SUCCESS,
    EMBED_FIELD_NAME_MAX,
    EMBED_FIELD_VALUE_MAX,
    EMBED_MAX_FIELDS,
    EMBED_TOTAL_MAX,
    ReplyMode,
)
from core.help_system import help_system
from core.types import OutcomeKind, RuleOutcome, Visibility
from core.utils import truncate
from responders.delivery import send_auto_reply
from responders.engine import MSG_GUILD_ONLY, AutoReplyEngine, MessageEvent, ReplyCommand

logger = logging.getLogger("autoreply.responder")

MODULE_NAME = "Auto-Reply"
RESPONSE_PREVIEW_CHARS = 100
UNSAVED_WARNING = "The change could not be saved to disk and will be lost on restart."


def setup_auto_responder() -> None:
    """Register help information for the auto-reply module."""
    help_system.register_module(
        name=MODULE_NAME,
        description="Smart auto-reply system for Discord servers",
        commands=[
            ("reply [trigger] [response]", "Set up a new auto-reply rule for this server. When someone sends a message containing the trigger word, the bot will automatically respond."),
            ("reply [trigger] mode:remove", "Remove an existing auto-reply rule for the specified trigger in this server."),
            ("list_replies", "Show all active auto-reply rules for this server."),
            ("help_reply", "Help for the auto-reply system"),
        ],
        notes=[
            (
                "ℹ️ How it works:",
                "• Triggers are case-insensitive and match whole words only\n"
                "• Only the first matching rule replies to a message\n"
                "• Anyone can create new rules\n"
                "• Only the original author can modify/delete their rules\n"
                "• Rules are server-specific",
            ),
            (
                "⚠️ Note:",
                "• Commands only work in servers, not in DMs\n"
                "• The bot needs 'Send Messages' permission in channels where you want auto-replies to work",
            ),
        ],
        footer="Use /reply to set up smart auto-replies for this server! Only you can modify rules you create.",
    )


def _guild_key(guild_id: Optional[int]) -> Optional[str]:
    return str(guild_id) if guild_id else None


# ─── Messages ─────────────────────────────────────────────────────────────────


async def handle_auto_reply(engine: AutoReplyEngine, message: discord.Message) -> bool:
    """Reply to ``message`` if it matches a rule. Returns True if a reply was sent."""
    event = MessageEvent(
        text=message.content or "",
        guild_id=_guild_key(message.guild.id if message.guild else None),
        author_is_bot=message.author.bot,
    )
    rule = engine.reply_for(event)
    if rule is None:
        return False
    logger.debug("Message %s matched trigger %r", message.id, rule.trigger)
    return await send_auto_reply(message, rule)


# ─── Slash commands ───────────────────────────────────────────────────────────


def build_success_embed(trigger: str, response: str) -> discord.Embed:
    embed = discord.Embed(
        title="✅ Auto-Reply Set Up Successfully!",
        description=truncate(f"**Trigger:** {trigger}\n**Response:** {response}", 4096),
        color=COLOR_SUCCESS,
    )
    embed.set_footer(
        text="The bot will now automatically reply when someone sends the trigger message. "
        "Only you can modify this auto-reply."
    )
    return embed


async def send_outcome(
    interaction: discord.Interaction,
    outcome: RuleOutcome,
    *,
    show_rule: bool = False,
) -> None:
    """Render a rule outcome. Ownership conflicts are public, the rest ephemeral."""
    ephemeral = outcome.visibility is Visibility.PRIVATE

    if outcome.kind is OutcomeKind.OWNERSHIP_CONFLICT:
        await interaction.response.send_message(
            outcome.message,
            ephemeral=ephemeral,
            allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
        )
        return

    if outcome.ok and show_rule and outcome.rule is not None:
        embed = build_success_embed(outcome.rule.trigger, outcome.rule.response)
        if not outcome.persisted:
            embed.add_field(name="⚠️ Not saved", value=UNSAVED_WARNING, inline=False)
        await interaction.response.send_message(
            embed=embed,
            ephemeral=ephemeral,
        )
        return

    text = f"✅ {outcome.message}" if outcome.ok else f"❌ {outcome.message}"
    if outcome.ok and not outcome.persisted:
        text += f"\n⚠️ {UNSAVED_WARNING}"
    await interaction.response.send_message(
        text,
        ephemeral=ephemeral,
        allowed_mentions=discord.AllowedMentions.none(),
    )


async def handle_reply_command(
    engine: AutoReplyEngine,
    interaction: discord.Interaction,
    trigger: str,
    response: Optional[str] = None,
    mode: Optional[str] = None,
) -> RuleOutcome:
    command = ReplyCommand(
        trigger=trigger,
        user_id=str(interaction.user.id),
        guild_id=_guild_key(interaction.guild_id),
        response=response,
        mode=mode,
    )
    outcome = await engine.run_reply_command(command)
    await send_outcome(
        interaction,
        outcome,
        show_rule=(mode or ReplyMode.ADD).strip().lower() == ReplyMode.ADD,
    )
    return outcome


def build_rules_embed(engine: AutoReplyEngine, guild_id: str) -> Optional[discord.Embed]:
    rules = engine.manager.list_rules(guild_id)
    if not rules:
        return None

    embed = discord.Embed(
        title="📋 Server Auto-Reply Rules",
        description="Active rules for this server",
        color=COLOR_LIST,
    )
    # Room for the longest footer this list can get
    budget = EMBED_TOTAL_MAX - len(f"Total rules: {len(rules)} (showing first {len(rules)})")
    shown = 0
    for rule in rules[:EMBED_MAX_FIELDS]:
        author_info = f" (by <@{rule.author_id}>)" if rule.author_id else ""
        preview = rule.response
        if len(preview) > RESPONSE_PREVIEW_CHARS:
            preview = preview[:RESPONSE_PREVIEW_CHARS] + "..."
        name = truncate(f"Trigger: {rule.trigger}", EMBED_FIELD_NAME_MAX)
        value = truncate(f"Response: {preview}{author_info}", EMBED_FIELD_VALUE_MAX)
        if len(embed) + len(name) + len(value) > budget:
            break
        embed.add_field(name=name, value=value, inline=False)
        shown += 1

    footer = f"Total rules: {len(rules)}"
    if shown < len(rules):
        footer += f" (showing first {shown})"
    embed.set_footer(text=footer)
    return embed


async def handle_list_replies_command(
    engine: AutoReplyEngine,
    interaction: discord.Interaction,
) -> None:
    guild_id = _guild_key(interaction.guild_id)
    if guild_id is None:
        await interaction.response.send_message(f"❌ {MSG_GUILD_ONLY}", ephemeral=True)
        return

    embed = build_rules_embed(engine, guild_id)
    if embed is None:
        await interaction.response.send_message(
            "📝 No auto-reply rules set up for this server.",
            ephemeral=True,
        )
        return
    await interaction.response.send_message(
        embed=embed,
        ephemeral=True,
        allowed_mentions=discord.AllowedMentions.none(),
    )


async def handle_help_reply_command(interaction: discord.Interaction) -> None:
    embed = help_system.get_module_embed(MODULE_NAME)
    if embed is None:
        await interaction.response.send_message("Help not available.", ephemeral=True)
        return
    embed.title = "🤖 Auto-Reply Bot Help"
    await interaction.response.send_message(embed=embed, ephemeral=True)
