"""Tests for sipaddr.params."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import pytest

from sipaddr import params as params_module
from sipaddr.params import (
    OpaqueParam,
    Param,
    Transport,
    TransportParam,
    make_param,
    parse_param,
    parse_params,
    parse_uri_params,
    register_param,
    stringify_params,
)
from sipaddr.parse import SipParseError


class TestTransport:
    def test_case_insensitive(self) -> None:
        assert Transport.from_value("udp") is Transport.UDP
        assert Transport.from_value("Tcp") is Transport.TCP
        assert Transport.from_value("TLS") is Transport.TLS
        assert Transport.from_value("sctp") is Transport.SCTP

    def test_unknown(self) -> None:
        assert Transport.from_value("ws") is None


class TestMakeParam:
    def test_transport(self) -> None:
        assert make_param("transport", "udp") == TransportParam(Transport.UDP)

    def test_transport_key_case(self) -> None:
        param = make_param("TRANSPORT", "tcp")
        assert param == TransportParam(Transport.TCP)
        assert param.key == "transport"

    def test_unknown_transport_kept_opaque(self) -> None:
        assert make_param("transport", "ws") == OpaqueParam("transport", "ws")

    def test_unknown_key(self) -> None:
        param = make_param("user", "phone")
        assert param == OpaqueParam("user", "phone")
        assert str(param) == ";user=phone"


@dataclass(frozen=True)
class _MethodParam(Param):
    method: str
    key: ClassVar[str] = "method"

    @property
    def value(self) -> str:  # type: ignore[override]
        return self.method


class TestRegisterParam:
    def test_register_new_kind(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(params_module, "_KNOWN_PARAMS", dict(params_module._KNOWN_PARAMS))
        register_param("method", lambda v: _MethodParam(v.upper()) if v.isalpha() else None)

        _, params = parse_uri_params(b";method=invite;transport=udp")
        assert params["method"] == _MethodParam("INVITE")
        assert params["transport"] == TransportParam(Transport.UDP)

    def test_factory_may_decline(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(params_module, "_KNOWN_PARAMS", dict(params_module._KNOWN_PARAMS))
        register_param("method", lambda v: None)
        assert make_param("method", "invite") == OpaqueParam("method", "invite")


class TestParseParam:
    def test_single(self) -> None:
        assert parse_param(b";tag=abc123>") == (b">", ("tag", "abc123"))

    def test_empty_value(self) -> None:
        assert parse_param(b";tag=") == (b"", ("tag", ""))

    def test_missing_semicolon(self) -> None:
        with pytest.raises(SipParseError):
            parse_param(b"tag=abc")

    def test_missing_equals(self) -> None:
        with pytest.raises(SipParseError):
            parse_param(b";lr")

    def test_empty_key(self) -> None:
        assert parse_param(b";=abc") == (b"", ("", "abc"))

    def test_empty_key_roundtrip(self) -> None:
        _, params = parse_params(b";=abc;tag=1")
        assert stringify_params(params) == ";=abc;tag=1"


class TestParseParams:
    def test_many(self) -> None:
        rest, params = parse_params(b";tag=a1;expires=3600 rest")
        assert rest == b" rest"
        assert params == {"tag": "a1", "expires": "3600"}

    def test_none(self) -> None:
        assert parse_params(b"") == (b"", {})
        assert parse_params(b">") == (b">", {})

    def test_stops_at_malformed(self) -> None:
        rest, params = parse_params(b";tag=a1;lr;expires=60")
        assert params == {"tag": "a1"}
        assert rest == b";lr;expires=60"

    def test_duplicate_last_wins(self) -> None:
        _, params = parse_params(b";tag=a;x=1;tag=b")
        assert params == {"tag": "b", "x": "1"}
        assert list(params) == ["tag", "x"]

    def test_typed_duplicates_collapse(self) -> None:
        _, params = parse_uri_params(b";transport=udp;TRANSPORT=tcp")
        assert params == {"transport": TransportParam(Transport.TCP)}


class TestStringifyParams:
    def test_typed(self) -> None:
        params = {
            "transport": TransportParam(Transport.UDP),
            "maddr": OpaqueParam("maddr", "abc"),
        }
        assert stringify_params(params) == ";transport=UDP;maddr=abc"

    def test_plain(self) -> None:
        assert stringify_params({"tag": "xyz", "expires": "60"}) == ";tag=xyz;expires=60"

    def test_empty(self) -> None:
        assert stringify_params({}) == ""
