"""
Discord Bot Layer.

Slash command handling and reply formatting for the CraftBot bot.
"""

from craftbot.bot.client import CraftBot

__all__ = ["CraftBot"]
