"""
VarInt and VarLong codecs.

Integers are written least-significant group first, 7 data bits per byte,
with the high bit set on every byte except the last. Negative values are
encoded through their two's-complement bit pattern, so -1 always takes the
maximum number of bytes (5 for VarInt, 10 for VarLong).

Buffer decoding comes in two flavours: read_* takes an explicit offset and
returns the value together with the offset just past it, decode_* reads a
single value from the start of the buffer.
"""

from __future__ import annotations

import asyncio

from craftbot.protocol.errors import UnexpectedEof, VarIntTooLong

SEGMENT_BITS = 0x7F
CONTINUE_BIT = 0x80

VARINT_MAX_BYTES = 5
VARLONG_MAX_BYTES = 10


def _encode(value: int, bits: int) -> bytes:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= value <= high:
        raise ValueError(f"{value} does not fit in a signed {bits}-bit integer")

    value &= (1 << bits) - 1
    out = bytearray()
    while value & ~SEGMENT_BITS:
        out.append((value & SEGMENT_BITS) | CONTINUE_BIT)
        value >>= 7
    out.append(value)
    return bytes(out)


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


def _read(data: bytes, offset: int, bits: int, max_bytes: int) -> tuple[int, int]:
    result = 0
    for position in range(max_bytes):
        if offset >= len(data):
            raise UnexpectedEof(f"buffer ended inside a VarInt at offset {offset}")
        byte = data[offset]
        offset += 1
        result |= (byte & SEGMENT_BITS) << (7 * position)
        if not byte & CONTINUE_BIT:
            return _to_signed(result, bits), offset
    raise VarIntTooLong(f"VarInt longer than {max_bytes} bytes")


def encode_varint(value: int) -> bytes:
    """Encode a signed 32-bit integer as a VarInt."""
    return _encode(value, 32)


def encode_varlong(value: int) -> bytes:
    """Encode a signed 64-bit integer as a VarLong."""
    return _encode(value, 64)


def write_varint(buffer: bytearray, value: int) -> None:
    buffer.extend(encode_varint(value))


def write_varlong(buffer: bytearray, value: int) -> None:
    buffer.extend(encode_varlong(value))


def read_varint(data: bytes, offset: int) -> tuple[int, int]:
    """
    Read a VarInt from data starting at offset.

    Returns:
        (value, offset just past the last consumed byte)

    Raises:
        UnexpectedEof: If the buffer ends before the terminating byte
        VarIntTooLong: If more than 5 bytes carry the continuation bit
    """
    return _read(data, offset, 32, VARINT_MAX_BYTES)


def read_varlong(data: bytes, offset: int) -> tuple[int, int]:
    """Read a VarLong from data starting at offset. See read_varint."""
    return _read(data, offset, 64, VARLONG_MAX_BYTES)


def decode_varint(data: bytes) -> int:
    return read_varint(data, 0)[0]


def decode_varlong(data: bytes) -> int:
    return read_varlong(data, 0)[0]


async def read_varint_from_stream(reader: asyncio.StreamReader) -> int:
    """
    Read a VarInt one byte at a time from an asyncio stream.

    Raises:
        asyncio.IncompleteReadError: If the peer closes mid-VarInt
        VarIntTooLong: If more than 5 bytes carry the continuation bit
    """
    result = 0
    for position in range(VARINT_MAX_BYTES):
        byte = (await reader.readexactly(1))[0]
        result |= (byte & SEGMENT_BITS) << (7 * position)
        if not byte & CONTINUE_BIT:
            return _to_signed(result, 32)
    raise VarIntTooLong(f"VarInt longer than {VARINT_MAX_BYTES} bytes")
