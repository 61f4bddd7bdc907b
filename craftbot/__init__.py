"""
CraftBot - Discord bot for Minecraft server status lookups.

This package provides a from-scratch async client for the server list ping
protocol and the Discord slash commands built on top of it.
"""

__version__ = "0.1.0"
