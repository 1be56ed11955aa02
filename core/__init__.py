"""
Core utilities and infrastructure for the auto-reply bot.

This package contains:
- config: Environment settings loading and validation
- constants: Command names, env keys and limits
- help_system: Help embed registry
- io_utils: File I/O helpers
- rule_store: Persistent per-guild rule storage
- types: Dataclasses and enums
- utils: General utilities
"""
from .constants import CommandName, EnvKey, ReplyMode
from .rule_store import RuleStore, StoreError
from .types import OutcomeKind, Rule, RuleOutcome, Visibility

__all__ = [
    # Constants
    "CommandName",
    "EnvKey",
    "ReplyMode",
    # Storage
    "RuleStore",
    "StoreError",
    # Types
    "OutcomeKind",
    "Rule",
    "RuleOutcome",
    "Visibility",
]
