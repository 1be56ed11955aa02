"""
Rule manager - the only code path that mutates the rule store.

Every mutation runs check, mutate and save under one lock so two commands
racing on the same trigger cannot lose an update.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.rule_store import RuleStore, StoreError
from core.types import OutcomeKind, Rule, RuleOutcome
from core.utils import normalize_trigger

from .matching import find_matching_rule, trigger_words

logger = logging.getLogger("autoreply.manager")

MSG_CREATED = "Auto-reply created successfully!"
MSG_UPDATED = "Auto-reply updated successfully!"
MSG_REMOVED = "Auto-reply removed successfully!"
MSG_NOT_FOUND = "No auto-reply found for that trigger."
MSG_EMPTY_TRIGGER = "Please provide a trigger!"
MSG_EMPTY_RESPONSE = "Please provide a response message!"
MSG_UNMATCHABLE_TRIGGER = "Trigger words can't be made of punctuation only!"


def ownership_conflict_message(author_id: str) -> str:
    return f"<@{author_id}> you can't change this auto-reply, it belongs to someone else."


class RuleManager:
    """Adds, updates and removes rules while enforcing authorship."""

    def __init__(self, store: RuleStore) -> None:
        self.store = store
        self._lock = asyncio.Lock()

    # ─── Queries ──────────────────────────────────────────────────────────────

    def list_rules(self, guild_id: str) -> tuple[Rule, ...]:
        return self.store.rules_for(guild_id)

    def match(self, guild_id: str, text: str) -> Optional[Rule]:
        """First rule in ``guild_id`` whose trigger matches ``text``."""
        return find_matching_rule(text, self.store.rules_for(guild_id))

    # ─── Mutations ────────────────────────────────────────────────────────────

    async def add_or_update(
        self,
        guild_id: str,
        trigger: str,
        response: str,
        author_id: str,
    ) -> RuleOutcome:
        trigger = normalize_trigger(trigger)
        if not trigger:
            return RuleOutcome(OutcomeKind.VALIDATION_ERROR, MSG_EMPTY_TRIGGER)
        if not all(trigger_words(trigger)):
            return RuleOutcome(OutcomeKind.VALIDATION_ERROR, MSG_UNMATCHABLE_TRIGGER)
        if not response or not response.strip():
            return RuleOutcome(OutcomeKind.VALIDATION_ERROR, MSG_EMPTY_RESPONSE)

        async with self._lock:
            existing = self.store.find(guild_id, trigger)
            if existing is not None:
                if existing.is_owned_by_other(author_id):
                    logger.info(
                        "Guild %s: user %s tried to change %r owned by %s",
                        guild_id, author_id, existing.trigger, existing.author_id,
                    )
                    return RuleOutcome(
                        OutcomeKind.OWNERSHIP_CONFLICT,
                        ownership_conflict_message(author_id),
                        rule=existing,
                    )
                existing.response = response
                existing.author_id = author_id
                rule = existing
                message = MSG_UPDATED
            else:
                rule = Rule(trigger=trigger, response=response, author_id=author_id)
                self.store.append(guild_id, rule)
                message = MSG_CREATED

            persisted = await self._save()
            logger.info(
                "Guild %s: %s auto-reply %r by %s",
                guild_id,
                "updated" if existing is not None else "created",
                trigger,
                author_id or "<unowned>",
            )
            return RuleOutcome(OutcomeKind.SUCCESS, message, rule=rule, persisted=persisted)

    async def remove(self, guild_id: str, trigger: str, author_id: str) -> RuleOutcome:
        trigger = normalize_trigger(trigger)
        if not trigger:
            return RuleOutcome(OutcomeKind.VALIDATION_ERROR, MSG_EMPTY_TRIGGER)

        async with self._lock:
            existing = self.store.find(guild_id, trigger)
            if existing is None:
                return RuleOutcome(OutcomeKind.NOT_FOUND, MSG_NOT_FOUND)
            if existing.is_owned_by_other(author_id):
                logger.info(
                    "Guild %s: user %s tried to remove %r owned by %s",
                    guild_id, author_id, existing.trigger, existing.author_id,
                )
                return RuleOutcome(
                    OutcomeKind.OWNERSHIP_CONFLICT,
                    ownership_conflict_message(author_id),
                    rule=existing,
                )

            self.store.delete(guild_id, existing)
            persisted = await self._save()
            logger.info("Guild %s: removed auto-reply %r", guild_id, existing.trigger)
            return RuleOutcome(OutcomeKind.SUCCESS, MSG_REMOVED, rule=existing, persisted=persisted)

    async def _save(self) -> bool:
        try:
            await self.store.save()
        except StoreError as exc:
            logger.error("Failed to save auto-replies: %s", exc)
            return False
        return True
