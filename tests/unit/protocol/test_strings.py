"""
Tests for the length-prefixed string codec and fixed-width primitives.
"""

import pytest

from craftbot.protocol.errors import InvalidEncoding, StringTooLong, UnexpectedEof
from craftbot.protocol.primitives import encode_u16, write_u16
from craftbot.protocol.strings import (
    MAX_STRING_LENGTH,
    decode_string,
    encode_string,
    read_string,
    utf16_length,
    write_string,
)
from craftbot.protocol.varint import decode_varint, encode_varint


class TestUtf16Length:
    def test_ascii(self):
        assert utf16_length("example.com") == 11

    def test_bmp_characters_count_once(self):
        assert utf16_length("héllo") == 5
        assert utf16_length("日本") == 2

    def test_astral_characters_count_twice(self):
        assert utf16_length("😀") == 2
        assert utf16_length("a😀b") == 4


class TestEncodeString:
    def test_prefix_is_utf16_length_not_byte_length(self):
        encoded = encode_string("😀")
        assert decode_varint(encoded) == 2
        assert encoded[1:] == "😀".encode("utf-8")

    def test_ascii_layout(self):
        assert encode_string("abc") == b"\x03abc"

    def test_empty_string(self):
        assert encode_string("") == b"\x00"

    def test_max_length_accepted(self):
        encoded = encode_string("a" * MAX_STRING_LENGTH)
        assert decode_varint(encoded) == MAX_STRING_LENGTH

    def test_too_long_raises(self):
        with pytest.raises(StringTooLong):
            encode_string("a" * (MAX_STRING_LENGTH + 1))

    def test_astral_characters_count_towards_limit(self):
        with pytest.raises(StringTooLong):
            encode_string("😀" * (MAX_STRING_LENGTH // 2 + 1))

    def test_write_appends_to_buffer(self):
        buffer = bytearray(b"\x01")
        write_string(buffer, "hi")
        assert buffer == bytearray(b"\x01\x02hi")


class TestReadString:
    @pytest.mark.parametrize("value", ["", "hello", "example.com", "§aGreen §r text"])
    def test_round_trip(self, value):
        assert decode_string(encode_string(value)) == value

    def test_read_at_offset_returns_new_offset(self):
        data = b"\xff" + encode_varint(3) + b"abc" + b"\x00"
        value, offset = read_string(data, 1)
        assert value == "abc"
        assert offset == 5

    def test_length_is_a_byte_count(self):
        raw = "é".encode("utf-8")
        assert decode_string(encode_varint(len(raw)) + raw) == "é"

    def test_truncated_buffer_raises_eof(self):
        with pytest.raises(UnexpectedEof):
            decode_string(encode_varint(10) + b"short")

    def test_invalid_utf8_raises(self):
        with pytest.raises(InvalidEncoding):
            decode_string(b"\x02\xc3\x28")


class TestU16:
    def test_big_endian(self):
        assert encode_u16(25565) == b"\x63\xdd"

    def test_write_appends(self):
        buffer = bytearray()
        write_u16(buffer, 1)
        assert buffer == bytearray(b"\x00\x01")

    @pytest.mark.parametrize("value", [-1, 65536])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValueError):
            encode_u16(value)
