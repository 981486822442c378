"""Codec — the text encoder/decoder the bridge delegates to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .reader import read
from .values import Value
from .writer import write, write_pretty


class Codec(Protocol):
    """Anything that turns text into tagged values and back."""

    def decode(self, text: str) -> Value: ...

    def encode(self, value: Value) -> str: ...

    def encode_pretty(self, value: Value) -> str: ...


@dataclass(frozen=True)
class GblnCodec:
    """Default GBLN text codec.

    ``indent`` is the number of spaces per nesting level in pretty output.
    """

    indent: int = 2

    def decode(self, text: str) -> Value:
        return read(text)

    def encode(self, value: Value) -> str:
        return write(value)

    def encode_pretty(self, value: Value) -> str:
        return write_pretty(value, indent=self.indent)


DEFAULT_CODEC = GblnCodec()
