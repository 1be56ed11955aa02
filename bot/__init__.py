"""Bot package - Discord client and command registration."""
from .client import AutoReplyBot

__all__ = ["AutoReplyBot"]
