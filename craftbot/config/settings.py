"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    name: str = Field(default="CraftBot", description="Bot display name")
    command_prefix: str = Field(default="!", description="Command prefix for bot commands")
    token: str = Field(default="", description="Discord bot token")
    allowed_channel_ids: list[int] = Field(
        default_factory=list,
        description="If non-empty, bot only responds in these channel IDs. "
                    "Set via BOT__ALLOWED_CHANNEL_IDS='[123456,789012]'",
    )
    dev_guild_id: int | None = Field(
        default=None,
        description="If set, syncs slash commands to this guild instantly (dev mode). "
                    "If None, syncs globally (up to 1 hour propagation).",
    )


class PingSettings(BaseSettings):
    """Server status ping configuration."""

    default_server: str = Field(
        default="2b2t.org", description="Server pinged when /ping is given no address"
    )
    default_port: int = Field(
        default=25565, ge=1, le=65535, description="Port used when no SRV record overrides it"
    )
    protocol_version: int = Field(
        default=770, description="Protocol number sent in the handshake (770 = 1.21.5)"
    )
    connect_timeout: float = Field(
        default=5.0, gt=0, description="Seconds to wait for the TCP connection"
    )
    dns_timeout: float = Field(
        default=5.0, gt=0, description="Seconds to wait for an SRV lookup"
    )
    whitelist_active: bool = Field(
        default=False, description="Restrict /ping and /dump_ping to whitelisted users"
    )
    whitelist: list[int] = Field(
        default_factory=list,
        description="Discord user IDs allowed to ping when the whitelist is active. "
                    "Set via PING_WHITELIST='[123456,789012]'",
    )

    model_config = SettingsConfigDict(env_prefix="PING_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bot: BotSettings = Field(default_factory=BotSettings)
    ping: PingSettings = Field(default_factory=PingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
