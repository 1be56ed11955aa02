"""
Auto-reply system - split into focused modules.

This package matches messages against stored rules and manages those rules.
"""
from .delivery import send_auto_reply
from .engine import AutoReplyEngine, MessageEvent, ReplyCommand
from .manager import RuleManager
from .matching import find_matching_rule, matches

__all__ = [
    "AutoReplyEngine",
    "MessageEvent",
    "ReplyCommand",
    "RuleManager",
    "find_matching_rule",
    "matches",
    "send_auto_reply",
]
