"""Lexical predicates, scanning primitives, and parse errors.

Every grammar in this package works on a complete ``bytes`` slice and
returns ``(remainder, value)``. Failures raise :class:`SipParseError`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

_T = TypeVar("_T")

ParseResult = tuple[bytes, _T]
Parser = Callable[[bytes], ParseResult[_T]]


# --- Errors ---


class SipParseError(ValueError):
    """Raised when input does not match a grammar rule."""

    def __init__(self, message: str, remaining: bytes = b"") -> None:
        super().__init__(message)
        self.remaining = remaining


class MissingTokenError(SipParseError):
    """A mandatory token (scheme, host, URI, ...) was not found."""

    def __init__(self, token: str, remaining: bytes = b"") -> None:
        super().__init__(f"expected {token} at {remaining[:20]!r}", remaining)
        self.token = token


class AlternativeError(SipParseError):
    """None of the alternatives of a grammar choice matched."""


# --- Lexical predicates ---


def is_alphabetic(c: int) -> bool:
    """``A-Z`` or ``a-z``."""
    return 0x41 <= c <= 0x5A or 0x61 <= c <= 0x7A


def is_digit(c: int) -> bool:
    return 0x30 <= c <= 0x39


def is_alphanumeric(c: int) -> bool:
    return is_alphabetic(c) or is_digit(c)


def is_space(c: int) -> bool:
    """Space or horizontal tab."""
    return c in (0x20, 0x09)


def slice_to_string(data: bytes) -> str:
    """Decode a byte slice as UTF-8 text."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SipParseError(f"invalid UTF-8 in {data!r}", data) from exc


# --- Scanning primitives ---


def take_while(data: bytes, pred: Callable[[int], bool]) -> ParseResult[bytes]:
    """Consume the longest prefix whose bytes all satisfy *pred* (may be empty)."""
    i = 0
    while i < len(data) and pred(data[i]):
        i += 1
    return data[i:], data[:i]


def take_while1(
    data: bytes, pred: Callable[[int], bool], token: str
) -> ParseResult[bytes]:
    """Like :func:`take_while`, but at least one byte must match."""
    rest, matched = take_while(data, pred)
    if not matched:
        raise MissingTokenError(token, data)
    return rest, matched


def char(data: bytes, c: str) -> ParseResult[str]:
    """Consume exactly the single character *c*."""
    if data[:1] != c.encode("ascii"):
        raise MissingTokenError(repr(c), data)
    return data[1:], c


def tag(data: bytes, literal: bytes, *, nocase: bool = False) -> ParseResult[bytes]:
    """Consume *literal*, optionally ignoring ASCII case."""
    head = data[: len(literal)]
    matched = head.lower() == literal.lower() if nocase else head == literal
    if not matched:
        raise MissingTokenError(repr(literal.decode("ascii")), data)
    return data[len(literal) :], head


def opt(parser: Parser[_T], data: bytes) -> ParseResult[_T | None]:
    """Apply *parser*; on failure return ``None`` without advancing."""
    try:
        return parser(data)
    except SipParseError:
        return data, None


def alt(*parsers: Parser[_T], name: str = "alternative") -> Parser[_T]:
    """Build a parser that returns the first successful result of *parsers*."""

    def _alt(data: bytes) -> ParseResult[_T]:
        for parser in parsers:
            try:
                return parser(data)
            except SipParseError:
                continue
        raise AlternativeError(f"no {name} matched at {data[:20]!r}", data)

    return _alt
