"""
Auto-reply engine - platform-independent event handling.

Translates inbound message events and ``/reply`` invocations into Rule
Manager calls. The discord.py glue in ``modules.auto_responder`` builds
these events from gateway objects and renders the results.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.constants import ReplyMode
from core.types import OutcomeKind, Rule, RuleOutcome

from .manager import MSG_EMPTY_RESPONSE, RuleManager

logger = logging.getLogger("autoreply.responder")

MSG_GUILD_ONLY = "Auto-reply commands only work in servers, not in DMs!"


@dataclass
class MessageEvent:
    text: str
    guild_id: Optional[str]
    author_is_bot: bool = False


@dataclass
class ReplyCommand:
    trigger: str
    user_id: str
    guild_id: Optional[str]
    response: Optional[str] = None
    mode: Optional[str] = None


class AutoReplyEngine:
    """Decides what to send for messages and ``/reply`` invocations."""

    def __init__(self, manager: RuleManager) -> None:
        self.manager = manager

    def reply_for(self, event: MessageEvent) -> Optional[Rule]:
        """At most one rule to answer ``event`` with."""
        if event.author_is_bot or not event.guild_id:
            return None
        # Content is empty when the message-content intent is missing.
        if not (event.text or "").strip():
            return None
        return self.manager.match(event.guild_id, event.text)

    async def run_reply_command(self, command: ReplyCommand) -> RuleOutcome:
        if not command.guild_id:
            return RuleOutcome(OutcomeKind.VALIDATION_ERROR, MSG_GUILD_ONLY)

        mode = (command.mode or ReplyMode.ADD).strip().lower()
        if mode == ReplyMode.REMOVE:
            return await self.manager.remove(command.guild_id, command.trigger, command.user_id)
        if mode != ReplyMode.ADD:
            return RuleOutcome(
                OutcomeKind.VALIDATION_ERROR,
                f"Unknown mode `{command.mode}`. Use `add` or `remove`.",
            )

        if not command.response:
            return RuleOutcome(OutcomeKind.VALIDATION_ERROR, MSG_EMPTY_RESPONSE)
        return await self.manager.add_or_update(
            command.guild_id,
            command.trigger,
            command.response,
            command.user_id,
        )
