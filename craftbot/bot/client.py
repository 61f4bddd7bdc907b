"""
CraftBot — discord.py bot client.

Manages the bot lifecycle:
- Builds the shared HostResolver once at startup
- Loads command cogs (ServerCog)
- Syncs slash commands (guild-local for dev, global for production)
"""

from __future__ import annotations

import discord
from discord.ext import commands

from craftbot.config.logging import get_logger
from craftbot.config.settings import Settings
from craftbot.protocol import HostResolver

logger = get_logger(__name__)


class CraftBot(commands.Bot):
    """
    Discord bot for Minecraft server status lookups.

    Holds shared application state (settings, DNS resolver) and exposes it
    to cogs.

    Args:
        settings: Full application settings (bot token, ping defaults, etc.)
    """

    def __init__(self, settings: Settings) -> None:
        super().__init__(
            command_prefix=settings.bot.command_prefix,
            intents=discord.Intents.default(),
        )
        self.settings = settings
        self.resolver: HostResolver | None = None

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        Initializes the resolver, loads cogs, and syncs slash commands.
        """
        self.resolver = HostResolver(timeout=self.settings.ping.dns_timeout)
        logger.info("DNS resolver ready")

        from craftbot.bot.cogs.server import ServerCog
        await self.add_cog(ServerCog(self))
        logger.info("Cogs loaded")

        try:
            if self.settings.bot.dev_guild_id:
                guild = discord.Object(id=self.settings.bot.dev_guild_id)
                self.tree.copy_global_to(guild=guild)
                await self.tree.sync(guild=guild)
                logger.info(f"Slash commands synced to dev guild {self.settings.bot.dev_guild_id} (instant)")
            else:
                await self.tree.sync()
                logger.info("Slash commands synced globally (may take up to 1 hour to propagate)")
        except discord.errors.Forbidden:
            logger.warning(
                "Could not sync slash commands (403 Forbidden). "
                "Re-invite the bot using an OAuth2 URL that includes both 'bot' "
                "and 'applications.commands' scopes."
            )
        except discord.HTTPException as e:
            logger.warning(f"Slash command sync failed: {e}. The bot will still start.")

    async def on_ready(self) -> None:
        logger.info(f"Logged in as {self.user} (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    def is_allowed_channel(self, channel_id: int) -> bool:
        """
        Return True if the bot should respond in this channel.

        If `allowed_channel_ids` is empty (the default), the bot responds everywhere.
        If it's non-empty, the bot only responds in the listed channel IDs.
        """
        allowed = self.settings.bot.allowed_channel_ids
        return not allowed or channel_id in allowed

    def can_ping(self, user_id: int) -> bool:
        """Return True if the user may run ping commands (always, unless the whitelist is active)."""
        ping_settings = self.settings.ping
        return not ping_settings.whitelist_active or user_id in ping_settings.whitelist
