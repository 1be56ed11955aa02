"""
Currency module - ``/convert`` command.
"""
from __future__ import annotations

import logging

import discord

from core.constants import COLOR_CURRENCY
from core.help_system import help_system
from core.utils import utcnow
from services.currency_service import (
    USAGE_EXAMPLES,
    ConversionResult,
    CurrencyError,
    convert_currency,
    parse_currency_input,
)

logger = logging.getLogger("autoreply.currency")

MODULE_NAME = "Currency"


def setup_currency() -> None:
    """Register help information for the currency module."""
    help_system.register_module(
        name=MODULE_NAME,
        description="Currency conversion with live exchange rates",
        commands=[
            ("convert $500 idr", "Convert $500 to Indonesian Rupiah"),
            ("convert 1000jpy usd", "Convert 1000 Japanese Yen to USD"),
        ],
    )


def build_conversion_embed(result: ConversionResult) -> discord.Embed:
    embed = discord.Embed(
        title="💱 Currency Conversion",
        color=COLOR_CURRENCY,
        timestamp=utcnow(),
    )
    embed.add_field(name="From", value=f"{result.amount:.2f} {result.source}", inline=True)
    embed.add_field(name="To", value=f"{result.result:.2f} {result.target}", inline=True)
    embed.add_field(
        name="Exchange Rate",
        value=f"1 {result.source} = {result.rate:.4f} {result.target}",
        inline=False,
    )
    embed.set_footer(text="Exchange rates provided by exchangerate-api.com")
    return embed


async def handle_convert_command(
    interaction: discord.Interaction,
    text: str,
    *,
    api_key: str,
) -> None:
    if not (text or "").strip():
        await interaction.response.send_message(
            f"❌ Please provide the conversion details.\n\n{USAGE_EXAMPLES}",
            ephemeral=True,
        )
        return

    try:
        request = parse_currency_input(text)
    except CurrencyError as exc:
        await interaction.response.send_message(f"❌ {exc}\n\n{USAGE_EXAMPLES}", ephemeral=True)
        return

    await interaction.response.defer(thinking=True)

    try:
        result = await convert_currency(request, api_key)
    except CurrencyError as exc:
        logger.warning("Conversion %s -> %s failed: %s", request.source, request.target, exc)
        await interaction.followup.send(f"❌ Failed to convert currency: {exc}", ephemeral=True)
        return

    await interaction.followup.send(embed=build_conversion_embed(result))
