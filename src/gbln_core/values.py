"""Tagged value model for GBLN Core.

Every GBLN value is exactly one of the variants below.  Scalars carry a
single payload of fixed width; ``VArray`` and ``VObject`` own their
children outright.  All variants are immutable.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Iterable, Mapping, Union

from .errors import ErrorCode, ValidationError


# ---------------------------------------------------------------------------
# Kind — variant tag (matches GblnValueType in the C FFI)
# ---------------------------------------------------------------------------

class Kind(IntEnum):
    I8 = 0
    I16 = 1
    I32 = 2
    I64 = 3
    U8 = 4
    U16 = 5
    U32 = 6
    U64 = 7
    F32 = 8
    F64 = 9
    Str = 10
    Bool = 11
    Null = 12
    Object = 13
    Array = 14


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class _IntValue:
    value: int

    kind: ClassVar[Kind]
    minimum: ClassVar[int]
    maximum: ClassVar[int]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"{type(self).__name__} expects an int, got {self.value!r}",
                ErrorCode.TYPE_MISMATCH,
            )
        if not self.minimum <= self.value <= self.maximum:
            raise ValidationError(
                f"{self.value} out of range [{self.minimum}, {self.maximum}]",
                ErrorCode.INT_OUT_OF_RANGE,
            )


class VI8(_IntValue):
    __slots__ = ()
    kind = Kind.I8
    minimum, maximum = -(2 ** 7), 2 ** 7 - 1


class VI16(_IntValue):
    __slots__ = ()
    kind = Kind.I16
    minimum, maximum = -(2 ** 15), 2 ** 15 - 1


class VI32(_IntValue):
    __slots__ = ()
    kind = Kind.I32
    minimum, maximum = -(2 ** 31), 2 ** 31 - 1


class VI64(_IntValue):
    __slots__ = ()
    kind = Kind.I64
    minimum, maximum = -(2 ** 63), 2 ** 63 - 1


class VU8(_IntValue):
    __slots__ = ()
    kind = Kind.U8
    minimum, maximum = 0, 2 ** 8 - 1


class VU16(_IntValue):
    __slots__ = ()
    kind = Kind.U16
    minimum, maximum = 0, 2 ** 16 - 1


class VU32(_IntValue):
    __slots__ = ()
    kind = Kind.U32
    minimum, maximum = 0, 2 ** 32 - 1


class VU64(_IntValue):
    __slots__ = ()
    kind = Kind.U64
    minimum, maximum = 0, 2 ** 64 - 1


# ---------------------------------------------------------------------------
# Floats
# ---------------------------------------------------------------------------

def _require_float(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            f"{name} expects a float, got {value!r}", ErrorCode.TYPE_MISMATCH
        )
    return float(value)


def round_f32(value: float) -> float:
    """Round *value* to the nearest single-precision float."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass(frozen=True, slots=True)
class VF32:
    value: float

    kind: ClassVar[Kind] = Kind.F32

    def __post_init__(self) -> None:
        value = _require_float(self.value, "VF32")
        try:
            rounded = round_f32(value)
        except OverflowError:
            raise ValidationError(
                f"{value} does not fit in f32", ErrorCode.TYPE_MISMATCH
            ) from None
        object.__setattr__(self, "value", rounded)


@dataclass(frozen=True, slots=True)
class VF64:
    value: float

    kind: ClassVar[Kind] = Kind.F64

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _require_float(self.value, "VF64"))


# ---------------------------------------------------------------------------
# Str / Bool / Null
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VStr:
    value: str

    kind: ClassVar[Kind] = Kind.Str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(
                f"VStr expects a str, got {self.value!r}", ErrorCode.TYPE_MISMATCH
            )


@dataclass(frozen=True, slots=True)
class VBool:
    value: bool

    kind: ClassVar[Kind] = Kind.Bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise ValidationError(
                f"VBool expects a bool, got {self.value!r}", ErrorCode.TYPE_MISMATCH
            )


class _NullType:
    """Singleton for the GBLN null value."""

    _instance: "_NullType | None" = None
    kind = Kind.Null

    def __new__(cls) -> "_NullType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False


Null = _NullType()


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VArray:
    items: tuple["Value", ...] = ()

    kind: ClassVar[Kind] = Kind.Array

    def __init__(self, items: Iterable["Value"] = ()) -> None:
        items = tuple(items)
        for item in items:
            _require_value(item)
        object.__setattr__(self, "items", items)


@dataclass(frozen=True, slots=True)
class VObject:
    entries: dict[str, "Value"]

    kind: ClassVar[Kind] = Kind.Object

    def __init__(self, entries: Mapping[str, "Value"] | None = None) -> None:
        copied: dict[str, Value] = {}
        for key, item in (entries or {}).items():
            if not isinstance(key, str):
                raise ValidationError(
                    f"Object key must be string, got {key!r}",
                    ErrorCode.TYPE_MISMATCH,
                )
            copied[key] = _require_value(item)
        object.__setattr__(self, "entries", copied)


# ---------------------------------------------------------------------------
# Value union
# ---------------------------------------------------------------------------

Value = Union[
    VI8, VI16, VI32, VI64, VU8, VU16, VU32, VU64,
    VF32, VF64, VStr, VBool, _NullType, VArray, VObject,
]

INTEGER_TYPES = (VI8, VI16, VI32, VI64, VU8, VU16, VU32, VU64)
FLOAT_TYPES = (VF32, VF64)
SCALAR_TYPES = INTEGER_TYPES + FLOAT_TYPES + (VStr, VBool, _NullType)
VALUE_TYPES = SCALAR_TYPES + (VArray, VObject)


def is_value(obj: object) -> bool:
    """Return True if *obj* is a tagged GBLN value."""
    return isinstance(obj, VALUE_TYPES)


def _require_value(obj: object) -> "Value":
    if not is_value(obj):
        raise ValidationError(
            f"Not a GBLN value: {obj!r}", ErrorCode.TYPE_MISMATCH
        )
    return obj
