"""
Response delivery for auto-replies.

Replies to the triggering message, falling back to a plain channel message
when the reply cannot be sent (e.g. the original was deleted).
"""
from __future__ import annotations

import logging

import discord

from core.types import Rule

logger = logging.getLogger("autoreply.responder")


async def send_auto_reply(message: discord.Message, rule: Rule) -> bool:
    """Send ``rule.response`` for ``message``. Returns True if anything was sent."""
    allowed_mentions = discord.AllowedMentions.none()
    try:
        await message.reply(
            rule.response,
            mention_author=False,
            allowed_mentions=allowed_mentions,
        )
        return True
    except discord.HTTPException as exc:
        logger.warning(
            "Reply for trigger %r failed in channel %s: %s; sending plain message",
            rule.trigger,
            message.channel.id,
            exc,
        )

    try:
        await message.channel.send(rule.response, allowed_mentions=allowed_mentions)
        return True
    except discord.HTTPException as exc:
        logger.error(
            "Failed to send auto-reply for trigger %r in channel %s: %s",
            rule.trigger,
            message.channel.id,
            exc,
        )
        return False
