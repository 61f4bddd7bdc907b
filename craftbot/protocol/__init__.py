"""
Server Status Protocol Client.

A minimal async client for the Minecraft server list ping: handshake,
status request, status response. Only `ping` is meant to be called from
the rest of the application; the codecs are exposed for tests and tooling.

    resolver = HostResolver()                       # once, at startup
    status = await ping("mc.example.com", 25565, 770, resolver=resolver)
    print(status.version.name, status.players.online, status.description)
"""

from craftbot.protocol.client import ping
from craftbot.protocol.errors import (
    ConnectFailed,
    ConnectTimeout,
    EncodingError,
    HostResolutionFailed,
    InvalidEncoding,
    JsonError,
    PingError,
    ProtocolError,
    SrvResolutionFailed,
    StringTooLong,
    UnexpectedEof,
    VarIntTooLong,
)
from craftbot.protocol.models import PlayerSample, Players, ServerStatus, Version, flatten_text
from craftbot.protocol.resolver import Endpoint, HostResolver

__all__ = [
    "ping",
    "HostResolver",
    "Endpoint",
    "ServerStatus",
    "Version",
    "Players",
    "PlayerSample",
    "flatten_text",
    "PingError",
    "SrvResolutionFailed",
    "HostResolutionFailed",
    "ConnectFailed",
    "ConnectTimeout",
    "ProtocolError",
    "EncodingError",
    "VarIntTooLong",
    "StringTooLong",
    "UnexpectedEof",
    "InvalidEncoding",
    "JsonError",
]
