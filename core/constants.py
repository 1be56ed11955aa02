"""
Shared constants.

Using constants instead of string literals provides:
- IDE autocomplete
- Typo protection (caught at import time)
- Single source of truth for names
"""
from __future__ import annotations


class EnvKey:
    """Environment variables read at startup."""

    TOKEN = "DISCORD_BOT_TOKEN"
    TOKEN_FALLBACK = "BOT_TOKEN"
    AUTO_REPLIES_PATH = "AUTO_REPLIES_PATH"
    LOG_LEVEL = "LOG_LEVEL"
    EXCHANGERATE_API_KEY = "EXCHANGERATE_API_KEY"
    ANALISIS_GUILD_ID = "ANALISIS_GUILD_ID"
    ANALISIS_CHANNEL_ID = "ANALISIS_CHANNEL_ID"


class CommandName:
    """Slash command names."""

    REPLY = "reply"
    LIST_REPLIES = "list_replies"
    HELP_REPLY = "help_reply"
    COMMANDS = "commands"
    ANALISIS = "analisis"
    CONVERT = "convert"


class ReplyMode:
    """Values accepted by the ``mode`` option of ``/reply``."""

    ADD = "add"
    REMOVE = "remove"


# Characters stripped from both ends of each message token before matching.
TOKEN_PUNCTUATION = ".,!?;:\"'()[]{}*"

DEFAULT_AUTO_REPLIES_FILE = "auto_replies.json"

# Embed colours
COLOR_SUCCESS = 0x00FF00
COLOR_LIST = 0x3498DB
COLOR_HELP = 0x9B59B6
COLOR_NEWS = 0x1F8B4C
COLOR_CURRENCY = 0x2ECC71

# Discord embed limits
EMBED_MAX_FIELDS = 25
EMBED_FIELD_NAME_MAX = 256
EMBED_FIELD_VALUE_MAX = 1024
EMBED_TOTAL_MAX = 6000
