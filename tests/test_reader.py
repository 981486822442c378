"""Tests for the Reader layer."""

import pytest

from gbln_core.errors import CodecError, ErrorCode, ValidationError
from gbln_core.reader import is_known_hint, payload_to_value, read
from gbln_core.values import (
    Null,
    VArray,
    VBool,
    VF32,
    VF64,
    VI8,
    VI32,
    VObject,
    VStr,
    VU8,
    VU16,
    VU32,
)


# ---------------------------------------------------------------------------
# Hints / payloads
# ---------------------------------------------------------------------------

def test_known_hints():
    for hint in ("i8", "u64", "f32", "b", "n", "s1", "s1024"):
        assert is_known_hint(hint)

def test_unknown_hints():
    for hint in ("", "s", "s0", "u7", "x8", "str"):
        assert not is_known_hint(hint)

def test_payload_int_strips_whitespace():
    assert payload_to_value("u16", " 42 ") == VU16(42)

def test_payload_bool_spellings():
    assert payload_to_value("b", "t") == VBool(True)
    assert payload_to_value("b", "true") == VBool(True)
    assert payload_to_value("b", "f") == VBool(False)

def test_payload_null():
    assert payload_to_value("n", "") is Null
    assert payload_to_value("n", "null") is Null

def test_payload_string_keeps_spaces():
    assert payload_to_value("s16", " a b ") == VStr(" a b ")

def test_payload_mismatch():
    with pytest.raises(ValidationError) as exc_info:
        payload_to_value("u8", "abc")
    assert exc_info.value.code == ErrorCode.TYPE_MISMATCH


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def test_read_simple_object():
    value = read("user{id<u32>(123)name<s64>(Alice)}")
    assert value == VObject({
        "user": VObject({"id": VU32(123), "name": VStr("Alice")}),
    })

def test_read_typed_array():
    value = read("tags<s16>[rust python golang]")
    assert value == VObject({
        "tags": VArray([VStr("rust"), VStr("python"), VStr("golang")]),
    })

def test_read_parenthesised_atoms():
    value = read("t<s64>[(hello world) () (a\\)b)]")
    assert value.entries["t"].items == (VStr("hello world"), VStr(""), VStr("a)b"))

def test_read_mixed_array():
    value = read("items[<u8>(1)<s64>(a){x<u8>(2)}<u8>[3 4]]")
    assert value == VObject({
        "items": VArray([
            VU8(1),
            VStr("a"),
            VObject({"x": VU8(2)}),
            VArray([VU8(3), VU8(4)]),
        ]),
    })

def test_read_integer_bounds():
    value = read("n{i8<i8>(-128)u8<u8>(255)i32<i32>(-2147483648)}")
    assert value.entries["n"] == VObject({
        "i8": VI8(-128),
        "u8": VU8(255),
        "i32": VI32(-2147483648),
    })

def test_read_floats():
    value = read("f{pi<f32>(3.14159)e<f64>(2.71828)}")
    assert value.entries["f"].entries["pi"] == VF32(3.14159)
    assert value.entries["f"].entries["e"] == VF64(2.71828)

def test_read_bool_and_null():
    value = read("flags{on<b>(t)off<b>(f)none<n>()}")
    assert value.entries["flags"] == VObject({
        "on": VBool(True),
        "off": VBool(False),
        "none": Null,
    })

def test_read_whitespace_between_tokens():
    value = read("a {\n  b <u8> (1)\n  c[ <u8>(2) ]\n}\n")
    assert value == VObject({"a": VObject({"b": VU8(1), "c": VArray([VU8(2)])})})

def test_read_escaped_payload():
    assert read("s<s64>(a\\)b\\\\c)") == VObject({"s": VStr("a)b\\c")})

def test_read_empty_document():
    assert read("") == VObject({})
    assert read("  \n") == VObject({})

def test_read_anonymous_root():
    assert read("<u8>(5)") == VU8(5)
    assert read("[<u8>(1)]") == VArray([VU8(1)])
    assert read("{a<u8>(1)}") == VObject({"a": VU8(1)})

def test_read_empty_containers():
    assert read("a[]b{}") == VObject({"a": VArray([]), "b": VObject({})})


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def _error(text: str) -> CodecError:
    with pytest.raises(CodecError) as exc_info:
        read(text)
    return exc_info.value

def test_error_duplicate_key_position():
    err = _error("a<u8>(1)\na<u8>(2)")
    assert err.code == ErrorCode.DUPLICATE_KEY
    assert (err.line, err.column) == (2, 1)
    assert str(err) == "duplicate key 'a' at line 2, column 1"

def test_error_int_out_of_range():
    err = _error("x<i8>(999)")
    assert err.code == ErrorCode.INT_OUT_OF_RANGE
    assert "999 out of range [-128, 127]" in str(err)
    assert isinstance(err.__cause__, ValidationError)

def test_error_string_too_long():
    assert _error("x<s2>(abc)").code == ErrorCode.STRING_TOO_LONG

def test_error_invalid_hint():
    assert _error("x<q9>(1)").code == ErrorCode.INVALID_TYPE_HINT
    assert _error("x<s0>(a)").code == ErrorCode.INVALID_TYPE_HINT

def test_error_unterminated_payload():
    assert _error("x<s8>(abc").code == ErrorCode.UNTERMINATED_STRING

def test_error_unexpected_eof():
    assert _error("x{").code == ErrorCode.UNEXPECTED_EOF
    assert _error("x").code == ErrorCode.UNEXPECTED_EOF
    assert _error("x<u8>[1 2").code == ErrorCode.UNEXPECTED_EOF

def test_error_type_mismatch():
    assert _error("x<u8>(abc)").code == ErrorCode.TYPE_MISMATCH
    assert _error("x<b>(maybe)").code == ErrorCode.TYPE_MISMATCH

def test_error_trailing_input():
    assert _error("<u8>(1) extra").code == ErrorCode.UNEXPECTED_TOKEN

def test_error_unexpected_char():
    err = _error("x}")
    assert err.code == ErrorCode.UNEXPECTED_CHAR
    assert (err.line, err.column) == (1, 2)
