"""
Currency service - parses ``/convert`` input and fetches exchange rates.

Rates come from exchangerate-api.com (v6 ``latest`` endpoint).
"""
from __future__ import annotations

import asyncio
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

from core.utils import utcnow

logger = logging.getLogger("autoreply.currency")

API_URL = "https://v6.exchangerate-api.com/v6/{api_key}/latest/{base}"
FETCH_TIMEOUT_SECONDS = 10

# Leading symbol or code -> ISO currency code
_PREFIXES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("$",), "usd"),
    (("€", "eur"), "eur"),
    (("£", "gbp"), "gbp"),
    (("¥", "jpy"), "jpy"),
)
_AMOUNT_SUFFIX_RE = re.compile(r"^(\d+(?:\.\d+)?)(.*?)$")

USAGE_EXAMPLES = (
    "**Examples:**\n"
    "• `/convert $500 idr`\n"
    "• `/convert 1000jpy usd`\n"
    "• `/convert 100eur gbp`"
)


class CurrencyError(ValueError):
    pass


@dataclass
class ConversionRequest:
    amount: float
    source: str
    target: str


@dataclass
class ConversionResult:
    amount: float
    source: str
    target: str
    rate: float
    result: float
    timestamp: int


def _strip_prefixes(text: str, prefixes: tuple[str, ...]) -> str:
    for prefix in prefixes:
        if text.startswith(prefix):
            text = text[len(prefix):]
    return text


def parse_currency_input(text: str) -> ConversionRequest:
    """
    Parse input like ``$500 idr`` or ``500jpy idr``.

    Raises ``CurrencyError`` with a user-facing message on bad input.
    """
    parts = text.strip().lower().split()
    if len(parts) != 2:
        raise CurrencyError("Invalid format. Use format like '$500 idr' or '500jpy idr'")

    source_part, target = parts
    source: Optional[str] = None
    amount_text = ""

    for prefixes, code in _PREFIXES:
        if source_part.startswith(prefixes):
            source = code
            amount_text = _strip_prefixes(source_part, prefixes)
            break

    if source is None:
        match = _AMOUNT_SUFFIX_RE.match(source_part)
        if not match:
            raise CurrencyError("Invalid amount format")
        amount_text = match.group(1)
        source = match.group(2).strip()
        if not source:
            raise CurrencyError("Source currency not specified")

    try:
        amount = float(amount_text)
    except ValueError:
        raise CurrencyError(f"Invalid amount: {amount_text}") from None
    if not math.isfinite(amount):
        raise CurrencyError(f"Invalid amount: {amount_text}")
    if amount <= 0:
        raise CurrencyError("Amount must be positive")

    return ConversionRequest(amount=amount, source=source, target=target)


def extract_rate(payload: Any, target: str) -> float:
    """Pull the ``target`` rate out of an API response body."""
    if not isinstance(payload, dict) or payload.get("result") != "success":
        raise CurrencyError(f"API request failed: {payload}")
    rates = payload.get("conversion_rates")
    if not isinstance(rates, dict):
        raise CurrencyError("Invalid response format: conversion_rates not found")
    rate = rates.get(target)
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        raise CurrencyError(f"Currency {target} not found")
    return float(rate)


async def convert_currency(
    request: ConversionRequest,
    api_key: str,
    session: Optional[aiohttp.ClientSession] = None,
) -> ConversionResult:
    """Convert using live rates. Raises ``CurrencyError`` on any failure."""
    source = request.source.upper()
    target = request.target.upper()
    url = API_URL.format(api_key=api_key, base=source)

    owns_session = session is None
    if session is None:
        session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=FETCH_TIMEOUT_SECONDS)
        )
    try:
        async with session.get(url) as resp:
            if resp.status != 200:
                raise CurrencyError(f"HTTP error: {resp.status}")
            payload = await resp.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.warning("Fetching rates for %s failed: %s", source, exc)
        raise CurrencyError(f"Failed to fetch exchange rates: {exc}") from exc
    except ValueError as exc:
        if isinstance(exc, CurrencyError):
            raise
        raise CurrencyError(f"Failed to parse JSON: {exc}") from exc
    finally:
        if owns_session:
            await session.close()

    rate = extract_rate(payload, target)
    return ConversionResult(
        amount=request.amount,
        source=source,
        target=target,
        rate=rate,
        result=request.amount * rate,
        timestamp=int(utcnow().timestamp()),
    )
