"""
Tests for CraftBot.is_allowed_channel() and CraftBot.can_ping().

We test the pure access-check methods in isolation — no Discord
connection required.
"""

from unittest.mock import MagicMock

from craftbot.bot.client import CraftBot
from craftbot.config.settings import BotSettings, PingSettings, Settings


def _make_bot(
    allowed_channel_ids: list[int] | None = None,
    whitelist_active: bool = False,
    whitelist: list[int] | None = None,
) -> CraftBot:
    """Create a CraftBot with the given access restrictions."""
    settings = MagicMock(spec=Settings)
    settings.bot = MagicMock(spec=BotSettings)
    settings.bot.command_prefix = "!"
    settings.bot.allowed_channel_ids = allowed_channel_ids or []
    settings.ping = MagicMock(spec=PingSettings)
    settings.ping.whitelist_active = whitelist_active
    settings.ping.whitelist = whitelist or []
    # Skip discord internals so __init__ doesn't require a real connection
    bot = CraftBot.__new__(CraftBot)
    bot.settings = settings
    return bot


class TestBotChannelRestriction:
    def test_empty_list_allows_all_channels(self):
        """When allowed_channel_ids is empty the bot responds everywhere."""
        bot = _make_bot([])
        assert bot.is_allowed_channel(111) is True
        assert bot.is_allowed_channel(999999) is True

    def test_listed_channel_is_allowed(self):
        bot = _make_bot([111, 222, 333])
        assert bot.is_allowed_channel(111) is True
        assert bot.is_allowed_channel(333) is True

    def test_unlisted_channel_is_blocked(self):
        """A channel ID not in the list returns False when the list is non-empty."""
        bot = _make_bot([111, 222])
        assert bot.is_allowed_channel(999) is False


class TestPingWhitelist:
    def test_inactive_whitelist_allows_everyone(self):
        bot = _make_bot(whitelist_active=False, whitelist=[1])
        assert bot.can_ping(42) is True

    def test_active_whitelist_allows_listed_user(self):
        bot = _make_bot(whitelist_active=True, whitelist=[42])
        assert bot.can_ping(42) is True

    def test_active_whitelist_blocks_other_users(self):
        bot = _make_bot(whitelist_active=True, whitelist=[42])
        assert bot.can_ping(7) is False
