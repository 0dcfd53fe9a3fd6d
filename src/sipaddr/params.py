"""``;key=value`` parameter grammar and typed parameter values."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import ClassVar

from .parse import (
    ParseResult,
    SipParseError,
    char,
    is_alphabetic,
    is_alphanumeric,
    slice_to_string,
    take_while,
)

logger = logging.getLogger(__name__)


class Transport(enum.Enum):
    """Transport protocol named by the ``transport`` URI parameter."""

    UDP = "UDP"
    TCP = "TCP"
    TLS = "TLS"
    SCTP = "SCTP"

    @classmethod
    def from_value(cls, value: str) -> Transport | None:
        """Look up a transport case-insensitively, ``None`` if unknown."""
        try:
            return cls(value.upper())
        except ValueError:
            return None


# --- Parameter values ---


class Param:
    """Base for URI parameters. Subclasses expose ``key`` and ``value``."""

    key: str
    value: str

    def __str__(self) -> str:
        return f";{self.key}={self.value}"


@dataclass(frozen=True)
class TransportParam(Param):
    """``transport=udp|tcp|tls|sctp``."""

    transport: Transport
    key: ClassVar[str] = "transport"

    @property
    def value(self) -> str:  # type: ignore[override]
        return self.transport.value


@dataclass(frozen=True)
class OpaqueParam(Param):
    """Any parameter without a recognised meaning, kept verbatim."""

    key: str
    value: str


# --- Recognised parameter registry ---

ParamFactory = Callable[[str], "Param | None"]


def _transport_param(value: str) -> TransportParam | None:
    transport = Transport.from_value(value)
    if transport is None:
        return None
    return TransportParam(transport)


_KNOWN_PARAMS: dict[str, ParamFactory] = {
    "transport": _transport_param,
}


def register_param(key: str, factory: ParamFactory) -> None:
    """Register a typed parameter kind for *key* (matched case-insensitively).

    *factory* receives the raw value and returns a :class:`Param`, or ``None``
    when the value is not one it understands; the parameter is then kept as
    an :class:`OpaqueParam`.
    """
    _KNOWN_PARAMS[key.lower()] = factory


def make_param(key: str, value: str) -> Param:
    """Build the typed parameter for ``key=value``, falling back to opaque."""
    factory = _KNOWN_PARAMS.get(key.lower())
    if factory is not None:
        param = factory(value)
        if param is not None:
            return param
    return OpaqueParam(key, value)


# --- Grammar ---


def parse_param(data: bytes) -> ParseResult[tuple[str, str]]:
    """Parse exactly one ``;key=value`` pair."""
    data, _ = char(data, ";")
    data, key = take_while(data, is_alphabetic)
    data, _ = char(data, "=")
    data, value = take_while(data, is_alphanumeric)
    return data, (slice_to_string(key), slice_to_string(value))


def parse_params(data: bytes) -> ParseResult[dict[str, str]]:
    """Parse as many ``;key=value`` pairs as the input holds.

    Stops at the first pair that does not parse and leaves it in the
    remainder. A repeated key keeps its first position and its last value.
    """
    params: dict[str, str] = {}
    while True:
        try:
            data, (key, value) = parse_param(data)
        except SipParseError:
            break
        params[key] = value
    if data[:1] == b";":
        logger.debug("Stopped at unparsable parameter %r", data[:40])
    return data, params


def parse_uri_params(data: bytes) -> ParseResult[dict[str, Param]]:
    """Parse URI parameters into typed :class:`Param` values keyed by name."""
    data, raw = parse_params(data)
    params: dict[str, Param] = {}
    for key, value in raw.items():
        param = make_param(key, value)
        params[param.key] = param
    return data, params


def stringify_params(params: Mapping[str, Param] | Mapping[str, str]) -> str:
    """Render parameters as ``;key=value`` pairs in iteration order."""
    parts: list[str] = []
    for key, val in params.items():
        if isinstance(val, Param):
            parts.append(str(val))
        else:
            parts.append(f";{key}={val}")
    return "".join(parts)
