"""
ServerCog — Minecraft server status via /ping and /dump_ping.

Both commands share the same argument handling: missing server, port and
protocol version fall back to the configured defaults, and `ephemeral`
decides whether the reply is only visible to the caller.

  - /ping       → status embed with coloured MOTD and favicon thumbnail
  - /dump_ping  → the raw status document as a JSON attachment
"""

from __future__ import annotations

import base64
import binascii
import io
import json
from typing import Any

import discord
from discord import app_commands
from discord.ext import commands

from craftbot import protocol
from craftbot.config.logging import get_logger
from craftbot.protocol import PingError, ServerStatus

logger = get_logger(__name__)

FAVICON_FILENAME = "favicon.png"
DUMP_FILENAME = "ping_dump.json"
_FAVICON_PREFIX = "data:image/png;base64,"

# Discord embed limits
_FIELD_LIMIT = 1024
_DESCRIPTION_LIMIT = 4096

ANSI_RESET = "\x1b[0m"
ANSI_COLORS = {
    "white": "\x1b[97m",
    "black": "\x1b[30m",
    "dark_blue": "\x1b[34m",
    "dark_green": "\x1b[32m",
    "dark_aqua": "\x1b[36m",
    "dark_red": "\x1b[31m",
    "dark_purple": "\x1b[35m",
    "gold": "\x1b[33m",
    "gray": "\x1b[37m",
    "dark_gray": "\x1b[90m",
    "blue": "\x1b[94m",
    "green": "\x1b[92m",
    "aqua": "\x1b[96m",
    "red": "\x1b[91m",
    "light_purple": "\x1b[95m",
    "yellow": "\x1b[93m",
    "reset": ANSI_RESET,
}


def _truncate(text: str, limit: int = _FIELD_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def _error_embed(title: str, description: str) -> discord.Embed:
    return discord.Embed(
        title=title,
        description=_truncate(description, _DESCRIPTION_LIMIT),
        color=discord.Color.red(),
    )


def motd_to_ansi(raw: Any) -> str:
    """
    Render a rich text description with ANSI colour codes.

    Only the top-level "extra" parts carry colour: each object part is
    emitted as reset + its colour + its text, string parts verbatim. Without
    "extra" the top-level text (or the bare string) is returned uncoloured.
    """
    if isinstance(raw, dict) and isinstance(raw.get("extra"), list):
        out = []
        for part in raw["extra"]:
            if isinstance(part, dict):
                text = part.get("text")
                color = part.get("color")
                ansi = ANSI_COLORS.get(color, ANSI_RESET) if isinstance(color, str) else ANSI_RESET
                out.append(ANSI_RESET + ansi + (text if isinstance(text, str) else ""))
            elif isinstance(part, str):
                out.append(part)
        out.append(ANSI_RESET)
        return "".join(out)

    if isinstance(raw, dict) and isinstance(raw.get("text"), str):
        return raw["text"]
    if isinstance(raw, str):
        return raw
    return ""


def create_server_embed(status: ServerStatus) -> discord.Embed:
    """Build the /ping reply embed for a status response."""
    fence = "```ansi\n{}\n```"
    motd = _truncate(motd_to_ansi(status.raw_description), _FIELD_LIMIT - len(fence.format("")))
    raw_motd = json.dumps(status.raw_description, ensure_ascii=False)

    embed = discord.Embed(title="Server Status", color=discord.Color.light_grey())
    embed.add_field(
        name="Version",
        value=_truncate(f"{status.version.name} (protocol {status.version.protocol})"),
        inline=False,
    )
    embed.add_field(
        name="Players",
        value=f"{status.players.online}/{status.players.max}",
        inline=False,
    )
    embed.add_field(name="MOTD (ANSI)", value=fence.format(motd), inline=False)
    embed.add_field(name="RAW MOTD", value=_truncate(raw_motd), inline=False)
    return embed


def favicon_file(favicon: str | None) -> discord.File | None:
    """Decode a base64 favicon data URI into an attachment, or None if absent/invalid."""
    if not favicon:
        return None

    data = favicon.removeprefix(_FAVICON_PREFIX)
    try:
        image = base64.b64decode(data, validate=True)
    except binascii.Error as e:
        logger.warning(f"Failed to decode favicon base64: {e}")
        return None

    return discord.File(io.BytesIO(image), filename=FAVICON_FILENAME)


class ServerCog(commands.Cog):
    """Provides the /ping and /dump_ping slash commands."""

    def __init__(self, bot) -> None:
        self.bot = bot

    # ------------------------------------------------------------------
    # Slash commands
    # ------------------------------------------------------------------

    @app_commands.command(name="ping", description="Show the status of a Minecraft server")
    @app_commands.describe(
        server="Server hostname or IP",
        port="Server port",
        protocol_version="Minecraft protocol version",
        ephemeral="Send the response directly to you?",
    )
    async def ping(
        self,
        interaction: discord.Interaction,
        server: str | None = None,
        port: app_commands.Range[int, 1, 65535] | None = None,
        protocol_version: app_commands.Range[int, 0, 2147483647] | None = None,
        ephemeral: bool | None = None,
    ) -> None:
        """
        /ping server:<host> port:<port> protocol_version:<n> ephemeral:<bool>

        Pings the server and replies with version, player count and MOTD.
        The server favicon, if any, is attached as the embed thumbnail.
        """
        ephemeral = bool(ephemeral)
        if not await self._check_access(interaction):
            return

        await interaction.response.defer(ephemeral=ephemeral)

        host = server or self.bot.settings.ping.default_server
        status = await self._ping(interaction, host, port, protocol_version, ephemeral)
        if status is None:
            return

        embed = create_server_embed(status)
        favicon = favicon_file(status.favicon)
        if favicon is None:
            await interaction.followup.send(embed=embed, ephemeral=ephemeral)
            return

        embed.set_thumbnail(url=f"attachment://{FAVICON_FILENAME}")
        await interaction.followup.send(embed=embed, file=favicon, ephemeral=ephemeral)

    @app_commands.command(name="dump_ping", description="Dump a Minecraft server's raw status JSON")
    @app_commands.describe(
        server="Server hostname or IP",
        port="Server port",
        protocol_version="Minecraft protocol version",
        ephemeral="Send the response directly to you?",
    )
    async def dump_ping(
        self,
        interaction: discord.Interaction,
        server: str | None = None,
        port: app_commands.Range[int, 1, 65535] | None = None,
        protocol_version: app_commands.Range[int, 0, 2147483647] | None = None,
        ephemeral: bool | None = None,
    ) -> None:
        """/dump_ping — same arguments as /ping, replies with ping_dump.json."""
        ephemeral = bool(ephemeral)
        if not await self._check_access(interaction):
            return

        await interaction.response.defer(ephemeral=ephemeral)

        host = server or self.bot.settings.ping.default_server
        status = await self._ping(interaction, host, port, protocol_version, ephemeral)
        if status is None:
            return

        dump = discord.File(io.BytesIO(status.to_json().encode("utf-8")), filename=DUMP_FILENAME)
        embed = discord.Embed(
            title="Ping Dump",
            description=_truncate(f"Ping data for server: `{host}`", _DESCRIPTION_LIMIT),
            color=discord.Color(0x00FF00),
        )
        await interaction.followup.send(embed=embed, file=dump, ephemeral=ephemeral)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    async def _check_access(self, interaction: discord.Interaction) -> bool:
        """Send an ephemeral refusal and return False if the caller may not ping here."""
        if not self.bot.is_allowed_channel(interaction.channel_id):
            await interaction.response.send_message(
                "I'm not configured to respond in this channel.", ephemeral=True
            )
            return False
        if not self.bot.can_ping(interaction.user.id):
            await interaction.response.send_message(
                "You are not allowed to use ping functionality!", ephemeral=True
            )
            return False
        return True

    async def _ping(
        self,
        interaction: discord.Interaction,
        host: str,
        port: int | None,
        protocol_version: int | None,
        ephemeral: bool,
    ) -> ServerStatus | None:
        """
        Ping host with configured defaults for missing arguments.

        On failure an error embed is sent as the follow-up and None is
        returned, so the command callback never raises.
        """
        ping_settings = self.bot.settings.ping
        try:
            return await protocol.ping(
                host,
                port or ping_settings.default_port,
                protocol_version if protocol_version is not None else ping_settings.protocol_version,
                resolver=self.bot.resolver,
                connect_timeout=ping_settings.connect_timeout,
            )
        except PingError as e:
            logger.warning(f"Ping to {host!r} failed: {type(e).__name__}: {e}")
            embed = _error_embed("Failed to ping server", f"`{host}`: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error pinging {host!r}: {e}")
            embed = _error_embed("Error", "Something went wrong. Please try again.")

        await interaction.followup.send(embed=embed, ephemeral=ephemeral)
        return None
