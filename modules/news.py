"""
News module - ``/analisis`` command backed by Investing.com RSS feeds.
"""
from __future__ import annotations

import logging
from typing import Optional

import discord

from core.constants import COLOR_NEWS, EMBED_FIELD_NAME_MAX, EMBED_FIELD_VALUE_MAX
from core.help_system import help_system
from core.utils import truncate, utcnow
from services.rss_service import (
    MAX_ITEMS,
    RSS_TOPICS,
    Feed,
    FeedError,
    clean_description,
    fetch_feed,
    resolve_topic,
)

logger = logging.getLogger("autoreply.news")

MODULE_NAME = "News & Analysis"


def setup_news() -> None:
    """Register help information for the news module."""
    help_system.register_module(
        name=MODULE_NAME,
        description="Latest financial news from Investing.com",
        commands=[
            ("analisis [topic]", "Get latest financial news (e.g. `/analisis ringkasan pasar`)"),
        ],
    )


def check_restriction(
    guild_id: Optional[int],
    channel_id: Optional[int],
    allowed_guild_id: Optional[int],
    allowed_channel_id: Optional[int],
) -> Optional[str]:
    """Return a refusal message when ``/analisis`` may not run here."""
    if allowed_guild_id is not None and guild_id != allowed_guild_id:
        return (
            "❌ The `/analisis` command is only available in specific servers. "
            "This command is restricted to authorized servers only."
        )
    if allowed_channel_id is not None and channel_id != allowed_channel_id:
        return (
            "❌ The `/analisis` command can only be used in the designated channel. "
            "Please use it in the correct channel."
        )
    return None


def build_news_embed(topic_key: str, feed: Feed) -> discord.Embed:
    embed = discord.Embed(
        title=truncate(f"📰 {topic_key.capitalize()} - {feed.title}", EMBED_FIELD_NAME_MAX),
        description="Latest news from Investing.com",
        color=COLOR_NEWS,
        timestamp=utcnow(),
    )
    embed.set_footer(text="Source: Investing.com")

    for item in feed.items[:MAX_ITEMS]:
        read_more = f"\n\n[Read More]({item.link})"
        body = truncate(clean_description(item.description), EMBED_FIELD_VALUE_MAX - len(read_more))
        embed.add_field(
            name=truncate(item.title or "Untitled", EMBED_FIELD_NAME_MAX),
            value=f"{body}{read_more}",
            inline=False,
        )
    return embed


async def handle_analisis_command(
    interaction: discord.Interaction,
    topic: str,
    *,
    allowed_guild_id: Optional[int] = None,
    allowed_channel_id: Optional[int] = None,
) -> None:
    refusal = check_restriction(
        interaction.guild_id,
        interaction.channel_id,
        allowed_guild_id,
        allowed_channel_id,
    )
    if refusal:
        await interaction.response.send_message(refusal, ephemeral=True)
        return

    resolved = resolve_topic(topic or "")
    if resolved is None:
        available = "\n• ".join(RSS_TOPICS)
        await interaction.response.send_message(
            f"❌ Topic not found! Available topics:\n• {available}",
            ephemeral=True,
        )
        return
    topic_key, url = resolved

    await interaction.response.defer(thinking=True)

    try:
        feed = await fetch_feed(url)
    except FeedError as exc:
        logger.warning("News fetch for %r failed: %s", topic_key, exc)
        await interaction.followup.send(f"❌ Failed to fetch RSS feed: {exc}", ephemeral=True)
        return

    if not feed.items:
        await interaction.followup.send("📰 No news articles found for this topic.", ephemeral=True)
        return

    await interaction.followup.send(embed=build_news_embed(topic_key, feed))
