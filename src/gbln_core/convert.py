"""Conversion between tagged GBLN values and native Python values.

Outbound (``to_dynamic``) is total over the tagged model.  Inbound
(``from_dynamic``) has no schema to go on, so every number is narrowed
locally by ``narrow_number``: integral values become the smallest
unsigned (``>= 0``) or signed (``< 0``) kind that holds them, everything
else becomes ``VF64``.

64-bit integers leave as ``float``.  Magnitudes above 2**53 do not
survive the trip back.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterator, Mapping, MutableMapping, Sequence
from contextlib import contextmanager
from typing import Callable

from .errors import (
    AssignmentError,
    CircularReferenceError,
    ErrorCode,
    InvalidKeyError,
    UnsupportedTypeError,
    ValidationError,
)
from .values import (
    Null,
    Value,
    VALUE_TYPES,
    VArray,
    VBool,
    VF32,
    VF64,
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
)


# ---------------------------------------------------------------------------
# Undefined — the "absent" dynamic value
# ---------------------------------------------------------------------------

class _UndefinedType:
    """Sentinel for a value that is absent rather than null."""

    _instance: _UndefinedType | None = None

    def __new__(cls) -> _UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Undefined"

    def __bool__(self) -> bool:
        return False


Undefined = _UndefinedType()


_UNSIGNED = (VU8, VU16, VU32, VU64)
_SIGNED = (VI8, VI16, VI32, VI64)
_EXACT_INTEGERS = (VI8, VI16, VI32, VU8, VU16, VU32)
_WIDE_INTEGERS = (VI64, VU64)
_TEXT_LIKE = (str, bytes, bytearray, memoryview)


# ---------------------------------------------------------------------------
# Outbound: Value → Python
# ---------------------------------------------------------------------------

def to_dynamic(
    value: Value,
    *,
    mapping_factory: Callable[[], MutableMapping] = dict,
) -> object:
    """Convert a tagged value into plain Python data.

    - VI8..VI32, VU8..VU32 → int
    - VI64, VU64           → float (lossy above 2**53)
    - VF32, VF64           → float
    - VStr / VBool / Null  → str / bool / None
    - VArray               → list
    - VObject              → ``mapping_factory()`` (dict by default)

    Raises AssignmentError if the mapping rejects a key.
    """
    if isinstance(value, _EXACT_INTEGERS):
        return value.value
    if isinstance(value, _WIDE_INTEGERS):
        return float(value.value)
    if isinstance(value, (VF32, VF64, VStr, VBool)):
        return value.value
    if isinstance(value, _NullType):
        return None

    if isinstance(value, VArray):
        return [to_dynamic(item, mapping_factory=mapping_factory) for item in value.items]

    if isinstance(value, VObject):
        obj = mapping_factory()
        for key, item in value.entries.items():
            converted = to_dynamic(item, mapping_factory=mapping_factory)
            try:
                obj[key] = converted
            except (TypeError, ValueError, KeyError) as exc:
                raise AssignmentError(
                    f"Failed to set object property {key!r}: {exc}"
                ) from exc
        return obj

    raise ValidationError(f"Not a GBLN value: {value!r}", ErrorCode.TYPE_MISMATCH)


# ---------------------------------------------------------------------------
# Inbound: Python → Value
# ---------------------------------------------------------------------------

def narrow_number(number: numbers.Real) -> Value:
    """Pick the GBLN kind for a bare number.

    Non-finite or fractional → VF64.  Integral values ≥ 0 take the first of
    u8/u16/u32/u64 that holds them, negative values the first of
    i8/i16/i32/i64.

    Integral values past the u64/i64 range do not saturate into a 64-bit
    kind; they fall back to VF64 (±inf when they overflow a float), so
    u64 max widened to float does not come back as u64.
    """
    if isinstance(number, numbers.Integral):
        return _narrow_integer(int(number))

    try:
        n = float(number)
    except OverflowError:
        return VF64(math.inf if number > 0 else -math.inf)
    if not math.isfinite(n) or not n.is_integer():
        return VF64(n)
    return _narrow_integer(int(n))


def _narrow_integer(n: int) -> Value:
    if n >= 0:
        for cls in _UNSIGNED:
            if n <= cls.maximum:
                return cls(n)
    else:
        for cls in _SIGNED:
            if n >= cls.minimum:
                return cls(n)
    try:
        return VF64(float(n))
    except OverflowError:
        return VF64(math.inf if n > 0 else -math.inf)


def from_dynamic(value: object) -> Value:
    """Convert plain Python data into a tagged value.

    Already-tagged values pass through unchanged, at any depth.

    Raises:
        UnsupportedTypeError: for kinds other than None/bool/number/str/
            sequence/mapping.
        InvalidKeyError: for a mapping key that is not a str.
        CircularReferenceError: for a container that contains itself.
    """
    return _from_dynamic(value, set())


def _from_dynamic(value: object, active: set[int]) -> Value:
    if value is None or value is Undefined:
        return Null
    if isinstance(value, bool):
        return VBool(value)
    if isinstance(value, numbers.Real):
        return narrow_number(value)
    if isinstance(value, str):
        return VStr(value)
    if isinstance(value, VALUE_TYPES):
        return value

    if isinstance(value, Sequence) and not isinstance(value, _TEXT_LIKE):
        with _visiting(value, active):
            return VArray([_from_dynamic(item, active) for item in value])

    if isinstance(value, Mapping):
        with _visiting(value, active):
            entries: dict[str, Value] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise InvalidKeyError(
                        f"Object key must be string, got {key!r}",
                        ErrorCode.TYPE_MISMATCH,
                    )
                entries[key] = _from_dynamic(item, active)
            return VObject(entries)

    raise UnsupportedTypeError(
        f"Unsupported Python type: {value!r}", ErrorCode.TYPE_MISMATCH
    )


@contextmanager
def _visiting(container: object, active: set[int]) -> Iterator[None]:
    """Track the containers on the current path; a repeat is a cycle."""
    ident = id(container)
    if ident in active:
        raise CircularReferenceError("circular reference")
    active.add(ident)
    try:
        yield
    finally:
        active.discard(ident)
