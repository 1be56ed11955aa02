"""
RSS service - fetches and parses Investing.com news feeds for ``/analisis``.
"""
from __future__ import annotations

import asyncio
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Optional

import aiohttp

logger = logging.getLogger("autoreply.news")

FETCH_TIMEOUT_SECONDS = 10
MAX_ITEMS = 5
DESCRIPTION_MAX_CHARS = 200

_MARKETS_FEED = "https://id.investing.com/rss/news_25.rss"

# Insertion order decides which key wins when several are contained in a topic.
RSS_TOPICS: dict[str, str] = {
    "ringkasan pasar": _MARKETS_FEED,
    "analisis teknikal": _MARKETS_FEED,
    "analisis fundamental": _MARKETS_FEED,
    "opini": _MARKETS_FEED,
    "ide investasi": _MARKETS_FEED,
    "mata uang kripto": "https://id.investing.com/rss/news_301.rss",
    "forex": "https://id.investing.com/rss/news_1.rss",
    "saham": _MARKETS_FEED,
    "komoditas": "https://id.investing.com/rss/news_49.rss",
    "berita": "https://id.investing.com/rss/news.rss",
    "breaking news": "https://id.investing.com/rss/news.rss",
}


class FeedError(RuntimeError):
    pass


@dataclass
class FeedItem:
    title: str
    link: str
    description: str = ""
    pub_date: str = ""


@dataclass
class Feed:
    title: str
    description: str = ""
    items: list[FeedItem] = field(default_factory=list)


def resolve_topic(topic: str) -> Optional[tuple[str, str]]:
    """
    Map a requested topic to ``(topic_key, feed_url)``.

    An exact key wins; otherwise the first key contained in the request.
    """
    wanted = topic.strip().lower()
    if not wanted:
        return None
    if wanted in RSS_TOPICS:
        return wanted, RSS_TOPICS[wanted]
    for key, url in RSS_TOPICS.items():
        if key in wanted:
            return key, url
    return None


def _child_text(node: ET.Element, tag: str) -> str:
    child = node.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def parse_feed(body: str) -> Feed:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise FeedError(f"failed to parse XML: {exc}") from exc

    channel = root.find("channel")
    if root.tag != "rss" or channel is None:
        raise FeedError("failed to parse XML: not an RSS 2.0 document")

    items = [
        FeedItem(
            title=_child_text(item, "title"),
            link=_child_text(item, "link"),
            description=_child_text(item, "description"),
            pub_date=_child_text(item, "pubDate"),
        )
        for item in channel.findall("item")
    ]
    return Feed(
        title=_child_text(channel, "title"),
        description=_child_text(channel, "description"),
        items=items,
    )


def clean_description(text: str, max_len: int = DESCRIPTION_MAX_CHARS) -> str:
    """Remove the markup the feed embeds in item descriptions."""
    for token, replacement in (
        ("<![CDATA[", ""),
        ("]]>", ""),
        ("<p>", ""),
        ("</p>", ""),
        ("<br>", "\n"),
        ("<br/>", "\n"),
        ("<br />", "\n"),
    ):
        text = text.replace(token, replacement)
    text = text.strip()
    if len(text) > max_len:
        text = text[:max_len] + "..."
    return text


async def fetch_feed(url: str, session: Optional[aiohttp.ClientSession] = None) -> Feed:
    """Download and parse an RSS feed. Raises ``FeedError`` on any failure."""
    owns_session = session is None
    if session is None:
        session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=FETCH_TIMEOUT_SECONDS)
        )
    try:
        async with session.get(url) as resp:
            if resp.status != 200:
                raise FeedError(f"HTTP error: {resp.status}")
            body = await resp.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.warning("Fetching %s failed: %s", url, exc)
        raise FeedError(f"failed to fetch RSS feed: {exc}") from exc
    finally:
        if owns_session:
            await session.close()

    return parse_feed(body)
