"""Tests for the boundary functions."""

import json
import logging

import pytest

from gbln_core import (
    AssignmentError,
    CodecError,
    ErrorCode,
    GblnCodec,
    InvalidKeyError,
    ParseError,
    SerialiseError,
    UnsupportedTypeError,
    VObject,
    VU64,
    decode_to_dynamic,
    encode_from_dynamic,
    from_dynamic,
    parse,
    parse_value,
    roundtrip,
    to_dynamic,
    to_string,
    to_string_pretty,
)


class JsonCodec:
    """Stand-in codec backed by the json module."""

    def decode(self, text):
        return from_dynamic(json.loads(text))

    def encode(self, value):
        return json.dumps(to_dynamic(value))

    def encode_pretty(self, value):
        return json.dumps(to_dynamic(value), indent=2)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def test_parse_simple_object():
    assert parse("user{id<u32>(123)name<s64>(Alice)}") == {
        "user": {"id": 123, "name": "Alice"},
    }

def test_parse_error_prefix():
    with pytest.raises(ParseError) as exc_info:
        parse("user{id<u32>(123)")
    err = exc_info.value
    assert str(err).startswith("Parse error: ")
    assert "end of input" in str(err)
    assert err.code == ErrorCode.UNEXPECTED_EOF
    assert isinstance(err.__cause__, CodecError)

def test_parse_error_carries_codec_message():
    with pytest.raises(ParseError) as exc_info:
        parse("x<i8>(999)")
    assert str(exc_info.value) == "Parse error: 999 out of range [-128, 127] at line 1, column 6"

def test_parse_value_keeps_variants():
    assert parse_value("x<u64>(5)") == VObject({"x": VU64(5)})

def test_decode_mapping_factory_rejection():
    class Locked(dict):
        def __setitem__(self, key, value):
            raise TypeError("locked")

    with pytest.raises(AssignmentError):
        decode_to_dynamic("a<u8>(1)", mapping_factory=Locked)

def test_decode_with_custom_codec():
    assert parse('{"a": [1, 2.5]}', codec=JsonCodec()) == {"a": [1, 2.5]}

def test_decode_custom_codec_value_error():
    with pytest.raises(ParseError) as exc_info:
        parse("{bad", codec=JsonCodec())
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

def test_decode_failure_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="gbln_core.bridge")
    with pytest.raises(ParseError):
        parse("x{")
    assert "decode failed" in caplog.text


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def test_to_string_narrows_numbers():
    data = {"user": {"id": 123, "name": "Alice"}}
    assert to_string(data) == "user{id<u8>(123)name<s64>(Alice)}"

def test_to_string_pretty():
    data = {"config": {"port": 8080, "debug": True}}
    assert to_string_pretty(data) == "config{\n  port<u16>(8080)\n  debug<b>(t)\n}"

def test_encode_pretty_flag_matches_short_name():
    data = {"a": [1, "x"]}
    assert encode_from_dynamic(data, pretty=True) == to_string_pretty(data)
    assert encode_from_dynamic(data) == to_string(data)

def test_encode_with_configured_indent():
    text = encode_from_dynamic({"a": {"b": 1}}, pretty=True, codec=GblnCodec(indent=4))
    assert text == "a{\n    b<u8>(1)\n}"

def test_encode_tagged_values_bypass_inference():
    assert to_string({"id": VU64(5)}) == "id<u64>(5)"

def test_encode_invalid_key():
    with pytest.raises(InvalidKeyError):
        to_string({1: "a"})

def test_encode_unsupported_type():
    with pytest.raises(UnsupportedTypeError) as exc_info:
        to_string({"a": object()})
    assert isinstance(exc_info.value, SerialiseError)

def test_encode_codec_failure_is_serialise_error():
    with pytest.raises(SerialiseError) as exc_info:
        to_string({"bad key": 1})
    assert str(exc_info.value).startswith("Serialise error: ")
    assert exc_info.value.code == ErrorCode.INVALID_SYNTAX

def test_encode_huge_int_as_infinite_float():
    assert to_string({"n": 10 ** 400}) == "n<f64>(inf)"
    assert to_string({"n": -(10 ** 400)}) == "n<f64>(-inf)"

def test_encode_with_custom_codec():
    assert to_string({"a": [1, None]}, codec=JsonCodec()) == '{"a": [1, null]}'


# ---------------------------------------------------------------------------
# roundtrip
# ---------------------------------------------------------------------------

def test_roundtrip():
    text = "data{x<i32>(42)y<s32>(test)}"
    output = roundtrip(text)
    assert output == "data{x<u8>(42)y<s64>(test)}"
    assert parse(output) == parse(text)
