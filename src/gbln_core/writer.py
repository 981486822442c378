"""Writer layer: renders tagged values as compact or pretty GBLN text."""

from __future__ import annotations

import math
import re

from .errors import CodecError, ErrorCode
from .values import (
    FLOAT_TYPES,
    SCALAR_TYPES,
    Value,
    VArray,
    VBool,
    VF32,
    VI8,
    VI16,
    VI32,
    VI64,
    VObject,
    VStr,
    VU8,
    VU16,
    VU32,
    VU64,
    _NullType,
    round_f32,
)


_KEY_RE = re.compile(r"[^\s{}\[\]()<>\\]+")
_ESCAPE_RE = re.compile(r"([\\()])")

_INT_HINTS = {
    VI8: "i8",
    VI16: "i16",
    VI32: "i32",
    VI64: "i64",
    VU8: "u8",
    VU16: "u16",
    VU32: "u32",
    VU64: "u64",
}


# ---------------------------------------------------------------------------
# Hints and payloads
# ---------------------------------------------------------------------------

def string_hint(length: int) -> str:
    """Smallest of s64/s256/s1024 that holds *length* chars, else s<length>."""
    for limit in (64, 256, 1024):
        if length <= limit:
            return f"s{limit}"
    return f"s{length}"


def hint_for(value: Value) -> str:
    """Return the type hint of a scalar value."""
    if isinstance(value, VStr):
        return string_hint(len(value.value))
    if isinstance(value, VBool):
        return "b"
    if isinstance(value, _NullType):
        return "n"
    if isinstance(value, VF32):
        return "f32"
    if isinstance(value, FLOAT_TYPES):
        return "f64"
    return _INT_HINTS[type(value)]


def _format_f32(number: float) -> str:
    # Shortest text that reads back as the same single-precision float
    for digits in range(1, 10):
        text = f"{number:.{digits}g}"
        if round_f32(float(text)) == number:
            return text
    return repr(number)


def payload_text(value: Value) -> str:
    """Return the unescaped payload of a scalar value."""
    if isinstance(value, VStr):
        return value.value
    if isinstance(value, VBool):
        return "t" if value.value else "f"
    if isinstance(value, _NullType):
        return ""
    if isinstance(value, VF32) and math.isfinite(value.value):
        return _format_f32(value.value)
    return repr(value.value) if isinstance(value, FLOAT_TYPES) else str(value.value)


def _escape(text: str) -> str:
    return _ESCAPE_RE.sub(r"\\\1", text)


def _atom(value: Value) -> str:
    text = payload_text(value)
    if _KEY_RE.fullmatch(text):
        return text
    return f"({_escape(text)})"


def _check_key(key: str) -> str:
    if not _KEY_RE.fullmatch(key):
        raise CodecError(f"key cannot be written: {key!r}", ErrorCode.INVALID_SYNTAX)
    return key


def _array_hint(items: tuple[Value, ...]) -> str | None:
    """Hint shared by every item, or None if the array is mixed."""
    if not items or not all(isinstance(item, SCALAR_TYPES) for item in items):
        return None
    first = type(items[0])
    if any(type(item) is not first for item in items):
        return None
    if first is VStr:
        return string_hint(max(len(item.value) for item in items))
    return hint_for(items[0])


# ---------------------------------------------------------------------------
# Compact
# ---------------------------------------------------------------------------

def _compact(value: Value) -> str:
    if isinstance(value, VObject):
        return "{" + _compact_members(value) + "}"
    if isinstance(value, VArray):
        hint = _array_hint(value.items)
        if hint is not None:
            return f"<{hint}>[" + " ".join(_atom(item) for item in value.items) + "]"
        return "[" + "".join(_compact(item) for item in value.items) + "]"
    return f"<{hint_for(value)}>({_escape(payload_text(value))})"


def _compact_members(obj: VObject) -> str:
    return "".join(_check_key(key) + _compact(item) for key, item in obj.entries.items())


def write(value: Value) -> str:
    """Render *value* as compact GBLN text.

    A root VObject is written as bare members::

        VObject({"user": VObject({"id": VU8(123)})})  →  user{id<u8>(123)}
    """
    if isinstance(value, VObject):
        return _compact_members(value)
    return _compact(value)


# ---------------------------------------------------------------------------
# Pretty
# ---------------------------------------------------------------------------

def _pretty(value: Value, depth: int, indent: int) -> str:
    pad = " " * (indent * depth)
    if isinstance(value, VObject):
        if not value.entries:
            return "{}"
        lines = _pretty_members(value, depth + 1, indent)
        return "{\n" + "\n".join(lines) + "\n" + pad + "}"
    if isinstance(value, VArray):
        if not value.items or _array_hint(value.items) is not None:
            return _compact(value)
        inner = " " * (indent * (depth + 1))
        lines = [inner + _pretty(item, depth + 1, indent) for item in value.items]
        return "[\n" + "\n".join(lines) + "\n" + pad + "]"
    return _compact(value)


def _pretty_members(obj: VObject, depth: int, indent: int) -> list[str]:
    pad = " " * (indent * depth)
    return [
        pad + _check_key(key) + _pretty(item, depth, indent)
        for key, item in obj.entries.items()
    ]


def write_pretty(value: Value, indent: int = 2) -> str:
    """Render *value* as GBLN text with one member per line.

    Example::

        user{
          id<u8>(123)
          name<s64>(Alice)
        }
    """
    if isinstance(value, VObject):
        return "\n".join(_pretty_members(value, 0, indent))
    return _pretty(value, 0, indent)
