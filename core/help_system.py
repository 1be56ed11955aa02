"""
Help system - centralized help registration and display.

Each module registers its commands with the help system, which then builds
the ``/help_reply`` and ``/commands`` embeds.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import discord

from .constants import COLOR_HELP, COLOR_LIST, EMBED_FIELD_VALUE_MAX


def _chunk_lines(lines: list[str], limit: int = EMBED_FIELD_VALUE_MAX) -> list[str]:
    """Group lines into chunks that fit in one embed field."""
    chunks: list[str] = []
    current: list[str] = []
    current_len = 0
    for line in lines:
        line_len = len(line) + (1 if current else 0)
        if current and current_len + line_len > limit:
            chunks.append("\n".join(current))
            current = [line]
            current_len = len(line)
        else:
            current.append(line)
            current_len += line_len
    if current:
        chunks.append("\n".join(current))
    return chunks


@dataclass
class ModuleHelp:
    """Help information for a single module."""

    name: str
    description: str
    commands: list[tuple[str, str]] = field(default_factory=list)
    # (title, body) sections shown only in the detailed embed
    notes: list[tuple[str, str]] = field(default_factory=list)
    footer: str = ""

    def to_embed_field(self) -> dict[str, Any]:
        """Convert to Discord embed field format for the overview."""
        lines = [f"`/{cmd}` - {desc}" for cmd, desc in self.commands]
        return {
            "name": self.name,
            "value": "\n".join(lines) or self.description,
            "inline": False,
        }

    def to_detailed_embed(self) -> discord.Embed:
        """Create a detailed embed for this module with all commands."""
        embed = discord.Embed(
            title=self.name,
            description=self.description,
            color=COLOR_HELP,
        )

        for cmd, desc in self.commands:
            embed.add_field(name=f"`/{cmd}`", value=desc, inline=False)

        for title, body in self.notes:
            for index, chunk in enumerate(_chunk_lines(body.splitlines()), start=1):
                name = title if index == 1 else f"{title} (cont. {index})"
                embed.add_field(name=name, value=chunk, inline=False)

        if self.footer:
            embed.set_footer(text=self.footer)
        return embed


class HelpSystem:
    """
    Central help system that modules can register with.

    Usage:
        help_system.register_module(
            name="Currency",
            description="Currency conversion.",
            commands=[("convert $500 idr", "Convert $500 to rupiah")],
        )
    """

    def __init__(self) -> None:
        self._modules: dict[str, ModuleHelp] = {}
        self._registered_order: list[str] = []

    def register_module(
        self,
        name: str,
        description: str,
        commands: Optional[list[tuple[str, str]]] = None,
        *,
        notes: Optional[list[tuple[str, str]]] = None,
        footer: str = "",
    ) -> None:
        """Register (or replace) a module's help information."""
        if name not in self._modules:
            self._registered_order.append(name)

        self._modules[name] = ModuleHelp(
            name=name,
            description=description,
            commands=commands or [],
            notes=notes or [],
            footer=footer,
        )

    def get_module_embed(self, name: str) -> Optional[discord.Embed]:
        module_help = self._modules.get(name)
        if module_help is None:
            return None
        return module_help.to_detailed_embed()

    def get_help_embed(self, title: str = "🎛️ Bot Commands") -> discord.Embed:
        """Overview of every registered module's commands."""
        embed = discord.Embed(
            title=title,
            description="All available commands for this bot",
            color=COLOR_LIST,
        )
        for module_name in self._registered_order:
            embed.add_field(**self._modules[module_name].to_embed_field())
        embed.set_footer(text="💡 Tip: Use /help_reply for detailed auto-reply instructions")
        return embed


# Global singleton instance
help_system = HelpSystem()
