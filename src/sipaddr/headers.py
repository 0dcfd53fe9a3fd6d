"""Header lines whose values use the named-header or integer grammars."""

from __future__ import annotations

from dataclasses import dataclass

from .named import NamedHeader, parse_named_header
from .parse import (
    MissingTokenError,
    ParseResult,
    SipParseError,
    char,
    is_alphanumeric,
    is_digit,
    is_space,
    opt,
    slice_to_string,
    tag,
    take_while,
    take_while1,
)

# --- Compact header expansion (RFC 3261 §7.3.3) ---

COMPACT_HEADERS: dict[str, str] = {
    "f": "from",
    "m": "contact",
    "t": "to",
}


def expand_compact_header(name: str) -> str:
    """Expand a single-letter compact header name to its full form."""
    return COMPACT_HEADERS.get(name.lower(), name)


_PRETTY_NAMES: dict[str, str] = {
    "contact": "Contact",
    "from": "From",
    "max-forwards": "Max-Forwards",
    "reply-to": "Reply-To",
    "to": "To",
}


def prettify_header_name(name: str) -> str:
    """Return the canonical casing for a known SIP header, or title-case fallback."""
    pretty = _PRETTY_NAMES.get(name.lower())
    if pretty is not None:
        return pretty
    return "-".join(part.capitalize() for part in name.split("-"))


# Headers whose value is a named header value.
NAMED_HEADERS: frozenset[str] = frozenset({"from", "to", "contact", "reply-to"})


@dataclass(frozen=True)
class Header:
    """A single parsed header line."""

    name: str
    value: NamedHeader | int

    def __str__(self) -> str:
        return stringify_header(self)


def _is_name_char(c: int) -> bool:
    return is_alphanumeric(c) or c == 0x2D


def parse_header_name(data: bytes) -> ParseResult[str]:
    """Parse ``Name:`` plus following whitespace, returning the canonical name."""
    data, raw = take_while1(data, _is_name_char, "header-name")
    data, _ = take_while(data, is_space)
    data, _ = char(data, ":")
    data, _ = take_while(data, is_space)
    name = expand_compact_header(slice_to_string(raw))
    return data, prettify_header_name(name)


def _parse_crlf(data: bytes) -> ParseResult[bytes]:
    return tag(data, b"\r\n")


def parse_named_header_line(data: bytes) -> ParseResult[Header]:
    """Parse a From, To, Contact or Reply-To line (long or compact name)."""
    rest, name = parse_header_name(data)
    if name.lower() not in NAMED_HEADERS:
        raise SipParseError(f"{name} does not carry a named header value", data)
    rest, value = parse_named_header(rest)
    rest, _ = opt(_parse_crlf, rest)
    return rest, Header(name, value)


def parse_max_forwards_header(data: bytes) -> ParseResult[Header]:
    """Parse ``Max-Forwards: <int>``."""
    rest, name = parse_header_name(data)
    if name != "Max-Forwards":
        raise MissingTokenError("Max-Forwards", data)
    rest, digits = take_while1(rest, is_digit, "hop count")
    rest, _ = opt(_parse_crlf, rest)
    return rest, Header(name, int(digits))


def stringify_header(header: Header) -> str:
    """Serialize a :class:`Header` as ``Name: value`` (no line terminator)."""
    return f"{header.name}: {header.value}"
