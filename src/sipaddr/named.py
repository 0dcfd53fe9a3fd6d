"""Named header values: the ``[display-name] <uri>;params`` shape of From/To/Contact."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .params import parse_param, parse_params, stringify_params
from .parse import (
    MissingTokenError,
    ParseResult,
    SipParseError,
    alt,
    char,
    is_alphabetic,
    is_space,
    opt,
    slice_to_string,
    take_while,
)
from .uri import Uri, parse_uri, stringify_uri


@dataclass(frozen=True)
class NamedHeader:
    """Header value for From, To, Contact and similar fields."""

    uri: Uri
    display_name: str | None = None
    params: dict[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", dict(self.params))

    @classmethod
    def new(cls, uri: Uri) -> NamedHeader:
        return cls(uri)

    def with_name(self, name: str | None) -> NamedHeader:
        """Return a copy with display name *name* (``None`` removes it)."""
        return replace(self, display_name=name)

    def with_param(self, key: str, value: str) -> NamedHeader:
        params = dict(self.params)
        params[key] = value
        return replace(self, params=params)

    @property
    def tag(self) -> str | None:
        """The ``tag`` parameter, if present."""
        return self.params.get("tag")

    def __str__(self) -> str:
        return stringify_named_header(self)


# --- Display name ---


def parse_quoted_string(data: bytes) -> ParseResult[str]:
    """Parse ``"..."``; the text may contain anything except ``"``."""
    data, _ = char(data, '"')
    data, text = take_while(data, lambda c: c != 0x22)
    data, _ = char(data, '"')
    return data, slice_to_string(text)


def parse_unquoted_string(data: bytes) -> ParseResult[str]:
    """Parse an alphabetic token (possibly empty) terminated by a single space.

    The space is consumed but is not part of the result.
    """
    data, text = take_while(data, is_alphabetic)
    data, _ = char(data, " ")
    return data, slice_to_string(text)


_display_name = alt(parse_quoted_string, parse_unquoted_string, name="display name")


def parse_name(data: bytes) -> ParseResult[str]:
    """Parse a quoted or unquoted display name."""
    return _display_name(data)


# --- Named header value ---


def parse_named_field_value(data: bytes) -> ParseResult[tuple[str | None, Uri]]:
    """Parse ``[display-name] [<]uri[>]`` without trailing parameters."""
    data, name = opt(parse_name, data)
    data, _ = take_while(data, is_space)
    if data[:1] == b"<":
        data = data[1:]
    try:
        data, uri = parse_uri(data)
    except SipParseError as exc:
        raise MissingTokenError("uri", data) from exc
    if data[:1] == b">":
        data = data[1:]
    return data, (name, uri)


def parse_named_field_param(data: bytes) -> ParseResult[tuple[str, str]]:
    """Parse a single header-level ``;key=value`` parameter."""
    return parse_param(data)


def parse_named_field_params(data: bytes) -> ParseResult[dict[str, str]]:
    """Parse as many header-level parameters as the input holds."""
    return parse_params(data)


def parse_named_header(data: bytes) -> ParseResult[NamedHeader]:
    """Parse a complete named header value, returning ``(remainder, header)``."""
    data, (name, uri) = parse_named_field_value(data)
    data, params = parse_named_field_params(data)
    return data, NamedHeader(uri, name, params)


def stringify_named_header(header: NamedHeader) -> str:
    """Serialize a :class:`NamedHeader` back to string form.

    A display name containing a space, or an empty one, is quoted.
    """
    uri_str = stringify_uri(header.uri)
    name = header.display_name
    if name is None:
        s = uri_str
    elif " " in name or not name:
        s = f'"{name}" <{uri_str}>'
    else:
        s = f"{name} <{uri_str}>"
    return s + stringify_params(header.params)
