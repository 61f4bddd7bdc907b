"""
Packet framing for the status handshake.

Every packet on the wire is:

    VarInt length | VarInt packet id | payload

where length counts the packet id and payload bytes. Only the three packets
needed for a status ping are implemented: handshake and status request
(client to server) and status response (server to client).
"""

from __future__ import annotations

import asyncio
from typing import Callable

from craftbot.config.logging import get_logger
from craftbot.protocol.errors import ProtocolError
from craftbot.protocol.primitives import write_u16
from craftbot.protocol.strings import read_string, write_string
from craftbot.protocol.varint import (
    encode_varint,
    read_varint,
    read_varint_from_stream,
    write_varint,
)

logger = get_logger(__name__)

HANDSHAKE_PACKET_ID = 0x00
STATUS_REQUEST_PACKET_ID = 0x00
STATUS_RESPONSE_PACKET_ID = 0x00

NEXT_STATE_STATUS = 1

# Largest length a 3-byte VarInt can express; the protocol's packet size cap.
MAX_PACKET_LENGTH = 2097151


def build_packet(
    packet_id: int,
    payload_writer: Callable[[bytearray], None] | None = None,
) -> bytes:
    """
    Build a length-prefixed packet.

    Args:
        packet_id: Packet id written as the first VarInt of the body
        payload_writer: Callback that appends the payload to the body buffer

    Returns:
        The complete frame, ready to write to the socket
    """
    body = bytearray()
    write_varint(body, packet_id)
    if payload_writer is not None:
        payload_writer(body)
    return encode_varint(len(body)) + bytes(body)


def create_handshake_packet(
    protocol_version: int,
    server_address: str,
    server_port: int,
    next_state: int = NEXT_STATE_STATUS,
) -> bytes:
    def payload(buffer: bytearray) -> None:
        write_varint(buffer, protocol_version)
        write_string(buffer, server_address)
        write_u16(buffer, server_port)
        write_varint(buffer, next_state)

    return build_packet(HANDSHAKE_PACKET_ID, payload)


def create_status_request() -> bytes:
    return build_packet(STATUS_REQUEST_PACKET_ID)


async def read_packet(reader: asyncio.StreamReader) -> bytes:
    """
    Read one length-prefixed frame from the stream and return its body.

    Raises:
        ProtocolError: If the length prefix is not a plausible packet size
        asyncio.IncompleteReadError: If the peer closes before the frame ends
    """
    length = await read_varint_from_stream(reader)
    if length <= 0 or length > MAX_PACKET_LENGTH:
        raise ProtocolError(f"Malformed packet length prefix: {length}")

    logger.debug(f"Reading {length}-byte response frame")
    return await reader.readexactly(length)


def parse_status_response(frame: bytes) -> str:
    """
    Extract the JSON payload from a status response frame body.

    Raises:
        ProtocolError: If the packet id is not the status response id
        EncodingError: If the payload string is truncated or not UTF-8
    """
    packet_id, offset = read_varint(frame, 0)
    if packet_id != STATUS_RESPONSE_PACKET_ID:
        raise ProtocolError(f"Unexpected response packet id: {packet_id}")

    payload, _ = read_string(frame, offset)
    return payload
