"""SIP URI model, grammar, and serialization.

Wire form::

    scheme ":" [ user [ ":" password ] "@" ] host [ ":" port ] *( ";" key "=" value )

The host is a tagged value: a dotted-quad literal (:class:`IPv4Host`) is
always tried before a domain name (:class:`DomainHost`), since every
dotted-quad is also a syntactically valid domain label.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from ipaddress import IPv4Address

from .params import Param, parse_uri_params, stringify_params
from .parse import (
    MissingTokenError,
    ParseResult,
    SipParseError,
    char,
    is_alphanumeric,
    is_digit,
    opt,
    slice_to_string,
    take_while,
    take_while1,
)


class Scheme(enum.Enum):
    """URI scheme."""

    SIP = "sip"
    SIPS = "sips"


DEFAULT_SCHEME = Scheme.SIP

_USER_MARKS = frozenset(b"-_.!~*'()+&=$,")
_DOMAIN_MARKS = frozenset(b".-")
_MAX_PORT = 65535


def _is_user_char(c: int) -> bool:
    return is_alphanumeric(c) or c in _USER_MARKS


def _is_domain_char(c: int) -> bool:
    return is_alphanumeric(c) or c in _DOMAIN_MARKS


# --- Dataclasses ---


@dataclass(frozen=True)
class DomainHost:
    """Host given by name, e.g. ``example.com:5060``."""

    name: str
    port: int | None = None

    def __str__(self) -> str:
        if self.port is None:
            return self.name
        return f"{self.name}:{self.port}"


@dataclass(frozen=True)
class IPv4Host:
    """Host given as a dotted-quad literal, e.g. ``10.0.0.1:5060``."""

    address: IPv4Address
    port: int | None = None

    @classmethod
    def from_octets(
        cls, a: int, b: int, c: int, d: int, port: int | None = None
    ) -> IPv4Host:
        return cls(IPv4Address(f"{a}.{b}.{c}.{d}"), port)

    def __str__(self) -> str:
        if self.port is None:
            return str(self.address)
        return f"{self.address}:{self.port}"


Host = DomainHost | IPv4Host


@dataclass(frozen=True)
class UriAuth:
    """``user[:password]`` credentials preceding ``@``."""

    username: str
    password: str | None = None

    def __post_init__(self) -> None:
        if not self.username:
            raise ValueError("username must not be empty")

    def __str__(self) -> str:
        if self.password is None:
            return self.username
        return f"{self.username}:{self.password}"


@dataclass(frozen=True)
class Uri:
    """SIP or SIPS URI (RFC 3261 §19.1).

    Builder methods return a new :class:`Uri`; the receiver is never changed.
    """

    scheme: Scheme
    host: Host
    auth: UriAuth | None = None
    parameters: dict[str, Param] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", dict(self.parameters))

    @classmethod
    def new(cls, host: Host, scheme: Scheme = DEFAULT_SCHEME) -> Uri:
        return cls(scheme, host)

    @classmethod
    def sip(cls, host: Host) -> Uri:
        return cls(Scheme.SIP, host)

    @classmethod
    def sips(cls, host: Host) -> Uri:
        return cls(Scheme.SIPS, host)

    def with_auth(self, auth: UriAuth | None) -> Uri:
        """Return a copy carrying *auth* (``None`` removes credentials)."""
        return replace(self, auth=auth)

    def with_host(self, host: Host) -> Uri:
        return replace(self, host=host)

    def with_parameter(self, param: Param) -> Uri:
        """Return a copy with *param* added, replacing any value for its key."""
        parameters = dict(self.parameters)
        parameters[param.key] = param
        return replace(self, parameters=parameters)

    def __str__(self) -> str:
        return stringify_uri(self)


# --- Parse functions ---


def parse_scheme(data: bytes) -> ParseResult[Scheme]:
    """Parse ``sip:`` or ``sips:`` (any case)."""
    for scheme in (Scheme.SIPS, Scheme.SIP):
        prefix = f"{scheme.value}:".encode("ascii")
        if data[: len(prefix)].lower() == prefix:
            return data[len(prefix) :], scheme
    raise MissingTokenError("scheme", data)


def parse_uri_auth(data: bytes) -> ParseResult[UriAuth]:
    """Parse ``user[:password]@``. Fails unless the closing ``@`` is present."""
    data, user = take_while1(data, _is_user_char, "username")
    password = None
    if data[:1] == b":":
        data, raw_password = take_while(data[1:], _is_user_char)
        password = slice_to_string(raw_password)
    data, _ = char(data, "@")
    return data, UriAuth(slice_to_string(user), password)


def _parse_octet(data: bytes) -> ParseResult[int]:
    rest, digits = take_while1(data, is_digit, "octet")
    if len(digits) > 3 or (len(digits) > 1 and digits[:1] == b"0"):
        raise SipParseError(f"malformed octet {digits!r}", data)
    value = int(digits)
    if value > 255:
        raise SipParseError(f"octet out of range: {value}", data)
    return rest, value


def parse_ipv4_address(data: bytes) -> ParseResult[IPv4Address]:
    """Parse four decimal octets separated by ``.``.

    Fails if the quad runs on into more domain characters
    (``10.0.0.1.example.com``), so that name is parsed as a domain.
    """
    rest = data
    octets: list[int] = []
    for i in range(4):
        if i:
            rest, _ = char(rest, ".")
        rest, octet = _parse_octet(rest)
        octets.append(octet)
    if rest and _is_domain_char(rest[0]):
        raise SipParseError("dotted-quad followed by domain characters", data)
    return rest, IPv4Address(".".join(str(o) for o in octets))


def parse_port(data: bytes) -> ParseResult[int]:
    """Parse ``:port``."""
    rest, _ = char(data, ":")
    rest, digits = take_while1(rest, is_digit, "port")
    port = int(digits)
    if len(digits) > 5 or port > _MAX_PORT:
        raise SipParseError(f"port out of range: {digits!r}", data)
    return rest, port


def parse_host(data: bytes) -> ParseResult[Host]:
    """Parse a dotted-quad or domain host with optional ``:port``."""
    rest, address = opt(parse_ipv4_address, data)
    if address is None:
        rest, name = take_while1(data, _is_domain_char, "host")
    rest, port = opt(parse_port, rest)
    if address is not None:
        return rest, IPv4Host(address, port)
    return rest, DomainHost(slice_to_string(name), port)


def parse_uri(data: bytes) -> ParseResult[Uri]:
    """Parse a SIP/SIPS URI, returning ``(remainder, uri)``."""
    data, scheme = parse_scheme(data)
    data, auth = opt(parse_uri_auth, data)
    data, host = parse_host(data)
    data, parameters = parse_uri_params(data)
    return data, Uri(scheme, host, auth, parameters)


def stringify_uri(uri: Uri) -> str:
    """Serialize a :class:`Uri` back to string form."""
    s = f"{uri.scheme.value}:"
    if uri.auth is not None:
        s += f"{uri.auth}@"
    s += str(uri.host)
    s += stringify_params(uri.parameters)
    return s
