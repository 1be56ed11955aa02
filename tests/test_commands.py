"""
Tests for the /analisis and /convert command glue.
"""

from unittest.mock import AsyncMock

import pytest

from modules import currency as currency_module
from modules import news as news_module
from services.currency_service import ConversionResult, CurrencyError
from services.rss_service import Feed, FeedError, FeedItem


def test_check_restriction():
    check = news_module.check_restriction

    assert check(1, 2, None, None) is None
    assert check(1, 2, 1, 2) is None
    assert "specific servers" in check(9, 2, 1, None)
    assert "designated channel" in check(1, 9, 1, 2)


def test_build_news_embed_limits_items():
    items = [FeedItem(f"title {n}", f"https://x/{n}", "<p>body</p>") for n in range(8)]

    embed = news_module.build_news_embed("forex", Feed("Forex News", items=items))

    assert embed.title == "📰 Forex - Forex News"
    assert len(embed.fields) == 5
    assert embed.fields[0].value == "body\n\n[Read More](https://x/0)"


@pytest.mark.asyncio
async def test_analisis_restricted(interaction):
    await news_module.handle_analisis_command(interaction, "forex", allowed_guild_id=1)

    args, kwargs = interaction.response.send_message.call_args
    assert args[0].startswith("❌")
    assert kwargs["ephemeral"] is True
    interaction.response.defer.assert_not_awaited()


@pytest.mark.asyncio
async def test_analisis_unknown_topic(interaction):
    await news_module.handle_analisis_command(interaction, "cuaca")

    args, _ = interaction.response.send_message.call_args
    assert "Topic not found" in args[0]
    assert "• forex" in args[0]


@pytest.mark.asyncio
async def test_analisis_sends_embed(interaction, monkeypatch):
    feed = Feed("Forex News", items=[FeedItem("t", "https://x/1", "d")])
    monkeypatch.setattr(news_module, "fetch_feed", AsyncMock(return_value=feed))

    await news_module.handle_analisis_command(interaction, "forex")

    interaction.response.defer.assert_awaited_once_with(thinking=True)
    embed = interaction.followup.send.call_args.kwargs["embed"]
    assert embed.fields[0].name == "t"


@pytest.mark.asyncio
async def test_analisis_fetch_failure(interaction, monkeypatch):
    monkeypatch.setattr(news_module, "fetch_feed", AsyncMock(side_effect=FeedError("HTTP error: 500")))

    await news_module.handle_analisis_command(interaction, "forex")

    args, kwargs = interaction.followup.send.call_args
    assert "HTTP error: 500" in args[0]
    assert kwargs["ephemeral"] is True


@pytest.mark.asyncio
async def test_analisis_empty_feed(interaction, monkeypatch):
    monkeypatch.setattr(news_module, "fetch_feed", AsyncMock(return_value=Feed("Empty")))

    await news_module.handle_analisis_command(interaction, "forex")

    args, _ = interaction.followup.send.call_args
    assert "No news articles" in args[0]


@pytest.mark.asyncio
async def test_convert_bad_input(interaction):
    await currency_module.handle_convert_command(interaction, "hello", api_key="KEY")

    args, kwargs = interaction.response.send_message.call_args
    assert "Invalid format" in args[0]
    assert kwargs["ephemeral"] is True


@pytest.mark.asyncio
async def test_convert_sends_embed(interaction, monkeypatch):
    result = ConversionResult(500.0, "USD", "IDR", 15000.0, 7_500_000.0, 0)
    monkeypatch.setattr(currency_module, "convert_currency", AsyncMock(return_value=result))

    await currency_module.handle_convert_command(interaction, "$500 idr", api_key="KEY")

    embed = interaction.followup.send.call_args.kwargs["embed"]
    assert embed.fields[0].value == "500.00 USD"
    assert embed.fields[1].value == "7500000.00 IDR"
    assert embed.fields[2].value == "1 USD = 15000.0000 IDR"


@pytest.mark.asyncio
async def test_convert_api_failure(interaction, monkeypatch):
    monkeypatch.setattr(
        currency_module, "convert_currency", AsyncMock(side_effect=CurrencyError("Currency XYZ not found"))
    )

    await currency_module.handle_convert_command(interaction, "$5 xyz", api_key="KEY")

    args, kwargs = interaction.followup.send.call_args
    assert "Currency XYZ not found" in args[0]
    assert kwargs["ephemeral"] is True
