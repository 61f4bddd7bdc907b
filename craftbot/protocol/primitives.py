"""Fixed-width big-endian primitives."""

import struct

_U16 = struct.Struct(">H")


def encode_u16(value: int) -> bytes:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{value} does not fit in an unsigned 16-bit integer")
    return _U16.pack(value)


def write_u16(buffer: bytearray, value: int) -> None:
    """Append value to buffer as a big-endian unsigned short (port numbers)."""
    buffer.extend(encode_u16(value))
