"""
Tests for the VarInt/VarLong codec.

Covers:
- Round-trips at signed 32/64-bit boundaries
- Encoded length at the 1/2/3-byte boundaries
- Offset handling for buffer reads
- Over-long and truncated input → typed errors
- Stream decoding from an asyncio.StreamReader
"""

import asyncio

import pytest

from craftbot.protocol.errors import EncodingError, UnexpectedEof, VarIntTooLong
from craftbot.protocol.varint import (
    decode_varint,
    decode_varlong,
    encode_varint,
    encode_varlong,
    read_varint,
    read_varint_from_stream,
    read_varlong,
    write_varint,
)

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def _reader(data: bytes, eof: bool = True) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    if eof:
        reader.feed_eof()
    return reader


class TestVarIntRoundTrip:
    @pytest.mark.parametrize(
        "value", [0, 1, -1, 127, 128, 255, 25565, 2097151, INT32_MIN, INT32_MAX]
    )
    def test_varint_round_trip(self, value):
        assert decode_varint(encode_varint(value)) == value

    @pytest.mark.parametrize(
        "value", [0, 1, -1, INT32_MIN, INT32_MAX, INT64_MIN, INT64_MAX]
    )
    def test_varlong_round_trip(self, value):
        assert decode_varlong(encode_varlong(value)) == value


class TestVarIntEncoding:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, b"\x00"),
            (1, b"\x01"),
            (127, b"\x7f"),
            (128, b"\x80\x01"),
            (255, b"\xff\x01"),
            (25565, b"\xdd\xc7\x01"),
            (2097151, b"\xff\xff\x7f"),
            (INT32_MAX, b"\xff\xff\xff\xff\x07"),
            (-1, b"\xff\xff\xff\xff\x0f"),
            (INT32_MIN, b"\x80\x80\x80\x80\x08"),
        ],
    )
    def test_known_encodings(self, value, expected):
        assert encode_varint(value) == expected

    @pytest.mark.parametrize(
        "value,length", [(0, 1), (127, 1), (128, 2), (16383, 2), (16384, 3)]
    )
    def test_encoded_length_at_boundaries(self, value, length):
        assert len(encode_varint(value)) == length

    def test_negative_varlong_uses_ten_bytes(self):
        assert encode_varlong(-1) == b"\xff" * 9 + b"\x01"

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            encode_varint(INT32_MAX + 1)
        with pytest.raises(ValueError):
            encode_varlong(INT64_MIN - 1)

    def test_write_appends_to_buffer(self):
        buffer = bytearray(b"\xaa")
        write_varint(buffer, 300)
        assert buffer == bytearray(b"\xaa\xac\x02")


class TestVarIntBufferDecoding:
    def test_read_advances_offset_past_value(self):
        data = b"\x05" + encode_varint(300) + b"\x09"
        value, offset = read_varint(data, 1)
        assert value == 300
        assert offset == 3
        assert read_varint(data, offset) == (9, 4)

    def test_too_long_varint_raises(self):
        with pytest.raises(VarIntTooLong):
            decode_varint(b"\x80\x80\x80\x80\x80\x01")

    def test_too_long_varlong_raises(self):
        with pytest.raises(VarIntTooLong):
            read_varlong(b"\x80" * 10 + b"\x01", 0)

    def test_truncated_varint_raises_eof(self):
        with pytest.raises(UnexpectedEof):
            decode_varint(b"\x80\x80")

    def test_empty_buffer_raises_eof(self):
        with pytest.raises(UnexpectedEof):
            decode_varint(b"")

    def test_errors_are_encoding_errors(self):
        assert issubclass(VarIntTooLong, EncodingError)
        assert issubclass(UnexpectedEof, EncodingError)


class TestVarIntStreamDecoding:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, 127, 128, 25565, -1, INT32_MIN, INT32_MAX])
    async def test_stream_round_trip(self, value):
        reader = _reader(encode_varint(value) + b"rest")
        assert await read_varint_from_stream(reader) == value
        assert await reader.read() == b"rest"

    @pytest.mark.asyncio
    async def test_stream_too_long_raises(self):
        reader = _reader(b"\xff" * 6)
        with pytest.raises(VarIntTooLong):
            await read_varint_from_stream(reader)

    @pytest.mark.asyncio
    async def test_stream_closed_mid_varint(self):
        reader = _reader(b"\x80")
        with pytest.raises(asyncio.IncompleteReadError):
            await read_varint_from_stream(reader)

    @pytest.mark.asyncio
    async def test_stream_waits_for_next_byte(self):
        reader = _reader(b"\x80", eof=False)
        task = asyncio.create_task(read_varint_from_stream(reader))
        await asyncio.sleep(0)
        assert not task.done()

        reader.feed_data(b"\x01")
        assert await task == 128
