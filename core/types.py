"""
Type definitions and dataclasses for the auto-reply bot.

Using dataclasses instead of raw dicts provides:
- Type safety and IDE autocomplete
- Self-documenting code
- Easier refactoring
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


@dataclass
class Rule:
    """A single auto-reply rule."""
    trigger: str
    response: str
    author_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "trigger": self.trigger,
            "response": self.response,
        }
        if self.author_id:
            data["author_id"] = self.author_id
        return data

    def is_owned_by_other(self, author_id: str) -> bool:
        """True when the rule has an author and it is not ``author_id``."""
        return bool(self.author_id) and self.author_id != author_id


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    OWNERSHIP_CONFLICT = "ownership_conflict"
    NOT_FOUND = "not_found"


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass
class RuleOutcome:
    """
    Result of a rule management operation.

    ``persisted`` is False when the in-memory change stands but writing the
    store to disk failed.
    """
    kind: OutcomeKind
    message: str
    rule: Optional[Rule] = None
    persisted: bool = True

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def visibility(self) -> Visibility:
        if self.kind is OutcomeKind.OWNERSHIP_CONFLICT:
            return Visibility.PUBLIC
        return Visibility.PRIVATE
