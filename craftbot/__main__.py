"""
CraftBot CLI entry point.

Provides command-line interface for running the bot and utility commands.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from craftbot import __version__
from craftbot.config.logging import get_logger, setup_logging
from craftbot.config.settings import load_settings


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="craftbot",
        description="Discord bot for Minecraft server status lookups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"CraftBot {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("run", help="Run the Discord bot")
    subparsers.add_parser("config", help="Show current configuration")

    ping_parser = subparsers.add_parser(
        "ping",
        help="Ping a Minecraft server and print its status",
    )
    ping_parser.add_argument(
        "server",
        nargs="?",
        default=None,
        help="Server hostname or IP (default: PING_DEFAULT_SERVER from config)",
    )
    ping_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port used when no SRV record overrides it (default: PING_DEFAULT_PORT)",
    )
    ping_parser.add_argument(
        "--protocol-version",
        type=int,
        default=None,
        help="Protocol version sent in the handshake (default: PING_PROTOCOL_VERSION)",
    )
    ping_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full status document as JSON",
    )

    return parser


def cmd_config(settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== CraftBot Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Name: {settings.bot.name}")
    logger.info(f"Bot Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"Allowed Channels: {settings.bot.allowed_channel_ids or 'all'}")
    logger.info(f"\nDefault Server: {settings.ping.default_server}:{settings.ping.default_port}")
    logger.info(f"Protocol Version: {settings.ping.protocol_version}")
    logger.info(f"Connect Timeout: {settings.ping.connect_timeout}s")
    logger.info(f"DNS Timeout: {settings.ping.dns_timeout}s")
    logger.info(f"Ping Whitelist: {'active' if settings.ping.whitelist_active else 'inactive'}")

    return 0


def cmd_run(settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    if not settings.bot.token:
        logger.error(
            "Discord bot token not set. Add BOT__TOKEN=<your-token> to your .env file."
        )
        return 1

    from craftbot.bot import CraftBot

    bot = CraftBot(settings)
    logger.info(f"Starting {settings.bot.name}...")
    # log_handler=None: disable discord.py's default logging setup and use ours
    bot.run(settings.bot.token, log_handler=None)
    return 0


async def cmd_ping(args, settings) -> int:
    """
    Ping a server from the terminal.

    Args:
        args: Parsed command-line arguments
        settings: Application settings

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from craftbot.protocol import HostResolver, PingError, ping

    logger = get_logger(__name__)
    server = args.server or settings.ping.default_server
    port = args.port or settings.ping.default_port
    protocol_version = (
        args.protocol_version if args.protocol_version is not None
        else settings.ping.protocol_version
    )

    try:
        status = await ping(
            server,
            port,
            protocol_version,
            resolver=HostResolver(timeout=settings.ping.dns_timeout),
            connect_timeout=settings.ping.connect_timeout,
        )
    except PingError as e:
        logger.error(f"Failed to ping {server}: {type(e).__name__}: {e}")
        return 1

    if args.json:
        print(status.to_json())
        return 0

    print(f"\n=== {server} ===")
    print(f"Version:  {status.version.name} (protocol {status.version.protocol})")
    print(f"Players:  {status.players.online}/{status.players.max}")
    if status.players.sample:
        print(f"Sample:   {', '.join(p.name for p in status.players.sample)}")
    print(f"MOTD:     {status.description}")
    print(f"Favicon:  {'yes' if status.favicon else 'no'}")
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    # Execute command
    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "ping":
        return asyncio.run(cmd_ping(args, settings))
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
