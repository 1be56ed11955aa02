"""
Services package - clients for the external HTTP collaborators.
"""
from .currency_service import (
    ConversionRequest,
    ConversionResult,
    CurrencyError,
    convert_currency,
    parse_currency_input,
)
from .rss_service import Feed, FeedError, FeedItem, fetch_feed, resolve_topic

__all__ = [
    "ConversionRequest",
    "ConversionResult",
    "CurrencyError",
    "convert_currency",
    "parse_currency_input",
    "Feed",
    "FeedError",
    "FeedItem",
    "fetch_feed",
    "resolve_topic",
]
