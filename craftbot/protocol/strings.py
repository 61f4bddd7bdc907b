"""
Length-prefixed string codec.

On the way out the prefix is the string's length in UTF-16 code units, which
is what the protocol's length ceiling is defined in. On the way in the prefix
is treated as a byte count into the buffer.
"""

from __future__ import annotations

from craftbot.protocol.errors import (
    EncodingError,
    InvalidEncoding,
    StringTooLong,
    UnexpectedEof,
)
from craftbot.protocol.varint import encode_varint, read_varint

MAX_STRING_LENGTH = 32767


def utf16_length(value: str) -> int:
    """Number of UTF-16 code units in value (astral characters count twice)."""
    return sum(2 if ord(char) > 0xFFFF else 1 for char in value)


def encode_string(value: str) -> bytes:
    """
    Encode value as a VarInt UTF-16 length followed by its UTF-8 bytes.

    Raises:
        StringTooLong: If the UTF-16 length exceeds 32767
    """
    length = utf16_length(value)
    if length > MAX_STRING_LENGTH:
        raise StringTooLong(
            f"string is {length} UTF-16 units long, maximum is {MAX_STRING_LENGTH}"
        )
    return encode_varint(length) + value.encode("utf-8")


def write_string(buffer: bytearray, value: str) -> None:
    buffer.extend(encode_string(value))


def read_string(data: bytes, offset: int) -> tuple[str, int]:
    """
    Read a length-prefixed UTF-8 string from data starting at offset.

    Returns:
        (decoded string, offset just past the string)

    Raises:
        UnexpectedEof: If fewer bytes remain than the prefix declares
        InvalidEncoding: If the bytes are not valid UTF-8
    """
    length, offset = read_varint(data, offset)
    if length < 0:
        raise EncodingError(f"negative string length {length}")

    end = offset + length
    if end > len(data):
        raise UnexpectedEof(
            f"string declares {length} bytes but only {len(data) - offset} remain"
        )

    try:
        return bytes(data[offset:end]).decode("utf-8"), end
    except UnicodeDecodeError as e:
        raise InvalidEncoding(f"string is not valid UTF-8: {e}") from e


def decode_string(data: bytes) -> str:
    return read_string(data, 0)[0]
