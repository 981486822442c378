"""Boundary functions: GBLN text ⇄ plain Python data.

Usage::

    data = parse("user{id<u32>(123)name<s64>(Alice)}")
    # {'user': {'id': 123, 'name': 'Alice'}}

    to_string(data)          # 'user{id<u8>(123)name<s64>(Alice)}'
    to_string_pretty(data)   # one member per line

Errors cross this boundary only as ParseError (decoding) or
SerialiseError and its subclasses (encoding).
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Callable

from .codec import DEFAULT_CODEC, Codec
from .convert import from_dynamic, to_dynamic
from .errors import GblnError, ParseError, SerialiseError
from .values import Value

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def parse_value(text: str, *, codec: Codec | None = None) -> Value:
    """Decode *text* into a tagged value, keeping the exact variants."""
    codec = codec or DEFAULT_CODEC
    try:
        return codec.decode(text)
    except (GblnError, ValueError) as exc:
        logger.debug("decode failed: %s", exc)
        raise ParseError(f"Parse error: {exc}", getattr(exc, "code", None)) from exc


def decode_to_dynamic(
    text: str,
    *,
    codec: Codec | None = None,
    mapping_factory: Callable[[], MutableMapping] = dict,
) -> object:
    """Decode *text* into plain Python data.

    Raises:
        ParseError: the codec rejected the text ("Parse error: ...").
        AssignmentError: *mapping_factory* produced a mapping that
            rejected one of the keys.
    """
    return to_dynamic(parse_value(text, codec=codec), mapping_factory=mapping_factory)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode_from_dynamic(
    value: object,
    pretty: bool = False,
    *,
    codec: Codec | None = None,
) -> str:
    """Encode plain Python data as text.

    Numbers are narrowed to the smallest fitting GBLN kind (see
    ``narrow_number``); pass tagged values to pin a kind explicitly.
    """
    codec = codec or DEFAULT_CODEC
    try:
        tagged = from_dynamic(value)
    except SerialiseError as exc:
        logger.debug("conversion failed: %s", exc)
        raise

    try:
        if pretty:
            return codec.encode_pretty(tagged)
        return codec.encode(tagged)
    except (GblnError, ValueError) as exc:
        logger.debug("encode failed: %s", exc)
        raise SerialiseError(f"Serialise error: {exc}", getattr(exc, "code", None)) from exc


# ---------------------------------------------------------------------------
# Short names
# ---------------------------------------------------------------------------

def parse(text: str, *, codec: Codec | None = None) -> object:
    """Parse GBLN text to plain Python data."""
    return decode_to_dynamic(text, codec=codec)


def to_string(value: object, *, codec: Codec | None = None) -> str:
    """Serialise plain Python data to compact GBLN text."""
    return encode_from_dynamic(value, codec=codec)


def to_string_pretty(value: object, *, codec: Codec | None = None) -> str:
    """Serialise plain Python data to indented GBLN text."""
    return encode_from_dynamic(value, pretty=True, codec=codec)


def roundtrip(text: str, *, codec: Codec | None = None) -> str:
    """Parse *text* and serialise the result back to compact text."""
    return to_string(parse(text, codec=codec), codec=codec)
