"""
Rule storage - persistent storage for per-guild auto-reply rules.

The whole store is kept in memory as ``guild_id -> [Rule]`` and rewritten to
a single JSON document after every mutation. The document is read once at
startup.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .io_utils import read_json, write_json_atomic
from .types import Rule
from .utils import normalize_trigger

logger = logging.getLogger("autoreply.store")


class StoreError(RuntimeError):
    pass


def _parse_rule(raw: Any, guild_id: str, index: int) -> Rule:
    if not isinstance(raw, dict):
        raise StoreError(f"rule {index} in guild {guild_id} is not an object")
    trigger = raw.get("trigger")
    response = raw.get("response")
    author_id = raw.get("author_id", "")
    if not isinstance(trigger, str) or not trigger.strip():
        raise StoreError(f"rule {index} in guild {guild_id} has no trigger")
    if not isinstance(response, str):
        raise StoreError(f"rule {index} in guild {guild_id} has no response")
    if author_id is None:
        author_id = ""
    if not isinstance(author_id, str):
        raise StoreError(f"rule {index} in guild {guild_id} has a non-string author_id")
    return Rule(trigger=normalize_trigger(trigger), response=response, author_id=author_id)


def parse_document(data: Any) -> Dict[str, List[Rule]]:
    """Validate a loaded document and build the in-memory mapping."""
    if not isinstance(data, dict):
        raise StoreError("top level must be an object of guild ID to rule list")

    rules: Dict[str, List[Rule]] = {}
    for guild_id, raw_rules in data.items():
        if not isinstance(raw_rules, list):
            raise StoreError(f"rules for guild {guild_id} must be a list")
        seen: set[str] = set()
        parsed: List[Rule] = []
        for index, raw in enumerate(raw_rules):
            rule = _parse_rule(raw, guild_id, index)
            if rule.trigger in seen:
                logger.warning(
                    "Guild %s has duplicate trigger %r; keeping the first one",
                    guild_id,
                    rule.trigger,
                )
                continue
            seen.add(rule.trigger)
            parsed.append(rule)
        if parsed:
            rules[str(guild_id)] = parsed
    return rules


class RuleStore:
    """In-memory rule set backed by a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._rules: Dict[str, List[Rule]] = {}

    # ─── Persistence ──────────────────────────────────────────────────────────

    async def load(self) -> Optional[StoreError]:
        """
        Load rules from disk, replacing the in-memory state.

        A missing file yields an empty store. An unreadable or malformed file
        also yields an empty store; the problem is logged and returned rather
        than raised so startup can continue.
        """
        self._rules = {}
        try:
            data = await read_json(self.path, default=None)
        except (OSError, ValueError, RecursionError) as exc:
            error = StoreError(f"could not read {self.path}: {exc}")
            logger.warning("Ignoring auto-replies file: %s", error)
            return error

        if data is None:
            logger.info("No auto-replies file at %s; starting empty", self.path)
            return None

        try:
            self._rules = parse_document(data)
        except StoreError as exc:
            logger.warning("Ignoring malformed auto-replies file %s: %s", self.path, exc)
            return exc

        logger.info(
            "Loaded %d auto-reply rules across %d servers",
            self.rule_count,
            self.scope_count,
        )
        return None

    def to_document(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            guild_id: [rule.to_dict() for rule in rules]
            for guild_id, rules in self._rules.items()
        }

    async def save(self) -> None:
        """Rewrite the whole store. Raises ``StoreError`` on failure."""
        try:
            await write_json_atomic(self.path, self.to_document())
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(f"could not write {self.path}: {exc}") from exc

    # ─── Queries ──────────────────────────────────────────────────────────────

    def rules_for(self, guild_id: str) -> tuple[Rule, ...]:
        """Snapshot of a guild's rules in insertion order."""
        return tuple(self._rules.get(guild_id, ()))

    def find(self, guild_id: str, trigger: str) -> Optional[Rule]:
        needle = normalize_trigger(trigger)
        for rule in self._rules.get(guild_id, ()):
            if normalize_trigger(rule.trigger) == needle:
                return rule
        return None

    @property
    def scope_count(self) -> int:
        return len(self._rules)

    @property
    def rule_count(self) -> int:
        return sum(len(rules) for rules in self._rules.values())

    # ─── Mutations (Rule Manager only) ────────────────────────────────────────

    def append(self, guild_id: str, rule: Rule) -> None:
        self._rules.setdefault(guild_id, []).append(rule)

    def delete(self, guild_id: str, rule: Rule) -> None:
        rules = self._rules.get(guild_id)
        if not rules:
            return
        self._rules[guild_id] = [item for item in rules if item is not rule]
        if not self._rules[guild_id]:
            del self._rules[guild_id]
