"""
Trigger matching logic for auto-replies.

Triggers match whole words only: ``go`` matches "let's go!" but not
"I'm going home". Multi-word triggers match a contiguous run of words.
"""
from __future__ import annotations

from typing import Iterable, Optional

from core.constants import TOKEN_PUNCTUATION
from core.types import Rule


def clean_token(token: str) -> str:
    """Strip surrounding punctuation from a single word."""
    return token.strip(TOKEN_PUNCTUATION)


def trigger_words(trigger: str) -> list[str]:
    """Case-folded, punctuation-stripped words of a trigger."""
    return [clean_token(word) for word in trigger.casefold().split()]


def tokenize(text: str) -> list[str]:
    """Case-fold ``text`` and split it into punctuation-stripped words."""
    return [clean_token(word) for word in text.strip().casefold().split()]


def _contains_run(tokens: list[str], words: list[str]) -> bool:
    size = len(words)
    for start in range(len(tokens) - size + 1):
        if tokens[start:start + size] == words:
            return True
    return False


def matches(text: str, trigger: str) -> bool:
    """
    Check whether ``trigger`` appears in ``text`` as a whole word.

    Both sides are case-folded. Empty text and empty triggers never match.
    """
    words = trigger_words(trigger)
    if not words or not all(words):
        return False
    tokens = tokenize(text)
    if not tokens:
        return False
    if len(words) == 1:
        return words[0] in tokens
    return _contains_run(tokens, words)


def find_matching_rule(text: str, rules: Iterable[Rule]) -> Optional[Rule]:
    """Return the first rule whose trigger matches ``text``."""
    if not text.strip():
        return None
    for rule in rules:
        if matches(text, rule.trigger):
            return rule
    return None
