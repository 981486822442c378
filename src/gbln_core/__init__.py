"""GBLN Core — bridge between tagged GBLN values and plain Python data."""

from .bridge import (
    decode_to_dynamic,
    encode_from_dynamic,
    parse,
    parse_value,
    roundtrip,
    to_string,
    to_string_pretty,
)
from .codec import DEFAULT_CODEC, Codec, GblnCodec
from .convert import Undefined, from_dynamic, narrow_number, to_dynamic
from .errors import (
    AssignmentError,
    CircularReferenceError,
    CodecError,
    ErrorCode,
    GblnError,
    InvalidKeyError,
    ParseError,
    SerialiseError,
    UnsupportedTypeError,
    ValidationError,
)
from .values import (
    Kind,
    Null,
    Value,
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
)

__all__ = [
    "parse",
    "parse_value",
    "to_string",
    "to_string_pretty",
    "roundtrip",
    "decode_to_dynamic",
    "encode_from_dynamic",
    "from_dynamic",
    "to_dynamic",
    "narrow_number",
    "Undefined",
    "Codec",
    "GblnCodec",
    "DEFAULT_CODEC",
    "Kind",
    "Null",
    "Value",
    "VArray",
    "VBool",
    "VF32",
    "VF64",
    "VI8",
    "VI16",
    "VI32",
    "VI64",
    "VObject",
    "VStr",
    "VU8",
    "VU16",
    "VU32",
    "VU64",
    "GblnError",
    "ParseError",
    "ValidationError",
    "CodecError",
    "SerialiseError",
    "UnsupportedTypeError",
    "InvalidKeyError",
    "CircularReferenceError",
    "AssignmentError",
    "ErrorCode",
]
