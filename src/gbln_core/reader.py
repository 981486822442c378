"""Reader layer: converts GBLN text into tagged values.

Grammar handled here::

    document := member* | value
    member   := key value
    value    := '{' member* '}'
              | '<' hint '>' '(' payload ')'
              | '<' hint '>' '[' atom* ']'
              | '[' value* ']'

A bare document of members is the root object.
"""

from __future__ import annotations

import re

from .errors import CodecError, ErrorCode, ValidationError
from .values import (
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


_WS_RE = re.compile(r"\s*")
_KEY_RE = re.compile(r"[^\s{}\[\]()<>\\]+")
_HINT_RE = re.compile(r"[a-z]+\d*")
_INT_RE = re.compile(r"[+-]?\d+")
_STR_HINT_RE = re.compile(r"s(\d+)")

_INT_HINTS = {
    "i8": VI8,
    "i16": VI16,
    "i32": VI32,
    "i64": VI64,
    "u8": VU8,
    "u16": VU16,
    "u32": VU32,
    "u64": VU64,
}
_FLOAT_HINTS = {"f32": VF32, "f64": VF64}
_BOOL_PAYLOADS = {"t": True, "true": True, "f": False, "false": False}


# ---------------------------------------------------------------------------
# Hints and payloads
# ---------------------------------------------------------------------------

def is_known_hint(hint: str) -> bool:
    if hint in _INT_HINTS or hint in _FLOAT_HINTS or hint in ("b", "n"):
        return True
    m = _STR_HINT_RE.fullmatch(hint)
    return m is not None and int(m.group(1)) > 0


def payload_to_value(hint: str, payload: str) -> Value:
    """Convert a raw payload to the Value named by *hint*.

    Raises ValidationError when the payload does not fit the hint.
    """
    if hint in _INT_HINTS:
        text = payload.strip()
        if not _INT_RE.fullmatch(text):
            raise ValidationError(
                f"expected integer for <{hint}>, got {payload!r}",
                ErrorCode.TYPE_MISMATCH,
            )
        return _INT_HINTS[hint](int(text))

    if hint in _FLOAT_HINTS:
        try:
            number = float(payload)
        except ValueError:
            raise ValidationError(
                f"expected float for <{hint}>, got {payload!r}",
                ErrorCode.TYPE_MISMATCH,
            ) from None
        return _FLOAT_HINTS[hint](number)

    if hint == "b":
        flag = _BOOL_PAYLOADS.get(payload.strip())
        if flag is None:
            raise ValidationError(
                f"expected t or f for <b>, got {payload!r}", ErrorCode.TYPE_MISMATCH
            )
        return VBool(flag)

    if hint == "n":
        if payload.strip() not in ("", "null"):
            raise ValidationError(
                f"expected empty payload for <n>, got {payload!r}",
                ErrorCode.TYPE_MISMATCH,
            )
        return Null

    limit = int(_STR_HINT_RE.fullmatch(hint).group(1))
    if len(payload) > limit:
        raise ValidationError(
            f"string too long for <{hint}>: {len(payload)} > {limit}",
            ErrorCode.STRING_TOO_LONG,
        )
    return VStr(payload)


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------

class _Reader:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # -- Cursor helpers -------------------------------------------------

    def error(self, message: str, code: ErrorCode, pos: int | None = None) -> CodecError:
        pos = self.pos if pos is None else pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return CodecError(message, code, line, column)

    def skip_ws(self) -> None:
        self.pos = _WS_RE.match(self.text, self.pos).end()

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, ch: str) -> None:
        found = self.peek()
        if found != ch:
            if not found:
                raise self.error(f"expected {ch!r}, got end of input", ErrorCode.UNEXPECTED_EOF)
            raise self.error(f"expected {ch!r}, got {found!r}", ErrorCode.UNEXPECTED_CHAR)
        self.pos += 1

    # -- Grammar --------------------------------------------------------

    def read_document(self) -> Value:
        self.skip_ws()
        if self.peek() in ("<", "{", "["):
            value = self.read_value()
            self.skip_ws()
            if self.pos < len(self.text):
                raise self.error(
                    f"unexpected {self.peek()!r} after value", ErrorCode.UNEXPECTED_TOKEN
                )
            return value
        return VObject(self.read_members(None))

    def read_members(self, closing: str | None) -> dict[str, Value]:
        entries: dict[str, Value] = {}
        while True:
            self.skip_ws()
            ch = self.peek()
            if not ch:
                if closing is None:
                    return entries
                raise self.error(f"expected {closing!r}, got end of input", ErrorCode.UNEXPECTED_EOF)
            if ch == closing:
                self.pos += 1
                return entries

            start = self.pos
            m = _KEY_RE.match(self.text, self.pos)
            if m is None:
                raise self.error(f"expected key, got {ch!r}", ErrorCode.UNEXPECTED_CHAR)
            key = m.group()
            if key in entries:
                raise self.error(f"duplicate key {key!r}", ErrorCode.DUPLICATE_KEY, start)
            self.pos = m.end()
            self.skip_ws()
            entries[key] = self.read_value()

    def read_value(self) -> Value:
        ch = self.peek()
        if ch == "{":
            self.pos += 1
            return VObject(self.read_members("}"))
        if ch == "[":
            self.pos += 1
            return VArray(self.read_elements())
        if ch == "<":
            return self.read_typed()
        if not ch:
            raise self.error("expected value, got end of input", ErrorCode.UNEXPECTED_EOF)
        raise self.error(f"expected value, got {ch!r}", ErrorCode.UNEXPECTED_CHAR)

    def read_elements(self) -> list[Value]:
        items: list[Value] = []
        while True:
            self.skip_ws()
            if self.peek() == "]":
                self.pos += 1
                return items
            items.append(self.read_value())

    def read_typed(self) -> Value:
        self.expect("<")
        start = self.pos
        m = _HINT_RE.match(self.text, self.pos)
        hint = m.group() if m else ""
        if not is_known_hint(hint):
            raise self.error(f"invalid type hint {hint!r}", ErrorCode.INVALID_TYPE_HINT, start)
        self.pos = m.end()
        self.expect(">")
        self.skip_ws()

        ch = self.peek()
        if ch == "(":
            at = self.pos
            return self.convert(hint, self.read_payload(), at)
        if ch == "[":
            self.pos += 1
            return VArray(self.read_atoms(hint))
        if not ch:
            raise self.error("expected '(' or '[', got end of input", ErrorCode.UNEXPECTED_EOF)
        raise self.error(f"expected '(' or '[', got {ch!r}", ErrorCode.UNEXPECTED_TOKEN)

    def read_atoms(self, hint: str) -> list[Value]:
        items: list[Value] = []
        while True:
            self.skip_ws()
            ch = self.peek()
            at = self.pos
            if ch == "]":
                self.pos += 1
                return items
            if ch == "(":
                items.append(self.convert(hint, self.read_payload(), at))
                continue
            m = _KEY_RE.match(self.text, self.pos)
            if m is None:
                if not ch:
                    raise self.error("expected ']', got end of input", ErrorCode.UNEXPECTED_EOF)
                raise self.error(f"unexpected {ch!r} in array", ErrorCode.UNEXPECTED_CHAR)
            self.pos = m.end()
            items.append(self.convert(hint, m.group(), at))

    def read_payload(self) -> str:
        """Read ``(...)``; backslash escapes the next character."""
        start = self.pos
        self.expect("(")
        chars: list[str] = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            self.pos += 1
            if ch == ")":
                return "".join(chars)
            if ch == "\\":
                if self.pos >= len(self.text):
                    break
                ch = self.text[self.pos]
                self.pos += 1
            chars.append(ch)
        raise self.error("unterminated payload", ErrorCode.UNTERMINATED_STRING, start)

    def convert(self, hint: str, payload: str, at: int) -> Value:
        try:
            return payload_to_value(hint, payload)
        except ValidationError as exc:
            raise self.error(exc.message, exc.code, at) from exc


def read(text: str) -> Value:
    """Parse GBLN *text* into a tagged value.

    Raises CodecError (with line/column) on malformed input.
    """
    return _Reader(text).read_document()
