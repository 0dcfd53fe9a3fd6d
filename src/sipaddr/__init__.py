"""sipaddr — SIP URI and named header value parsing and serialization."""

from __future__ import annotations

__version__ = "0.1.0"

from .headers import (
    Header,
    expand_compact_header,
    parse_header_name,
    parse_max_forwards_header,
    parse_named_header_line,
    prettify_header_name,
    stringify_header,
)
from .named import (
    NamedHeader,
    parse_name,
    parse_named_field_param,
    parse_named_field_params,
    parse_named_field_value,
    parse_named_header,
    parse_quoted_string,
    parse_unquoted_string,
    stringify_named_header,
)
from .params import (
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
from .parse import (
    AlternativeError,
    MissingTokenError,
    SipParseError,
    is_alphabetic,
    is_alphanumeric,
    is_digit,
    is_space,
    slice_to_string,
)
from .uri import (
    DEFAULT_SCHEME,
    DomainHost,
    Host,
    IPv4Host,
    Scheme,
    Uri,
    UriAuth,
    parse_host,
    parse_uri,
    parse_uri_auth,
    stringify_uri,
)

__all__ = [
    "DEFAULT_SCHEME",
    "AlternativeError",
    "DomainHost",
    "Header",
    "Host",
    "IPv4Host",
    "MissingTokenError",
    "NamedHeader",
    "OpaqueParam",
    "Param",
    "Scheme",
    "SipParseError",
    "Transport",
    "TransportParam",
    "Uri",
    "UriAuth",
    "expand_compact_header",
    "is_alphabetic",
    "is_alphanumeric",
    "is_digit",
    "is_space",
    "make_param",
    "parse_header_name",
    "parse_host",
    "parse_max_forwards_header",
    "parse_name",
    "parse_named_field_param",
    "parse_named_field_params",
    "parse_named_field_value",
    "parse_named_header",
    "parse_named_header_line",
    "parse_param",
    "parse_params",
    "parse_quoted_string",
    "parse_unquoted_string",
    "parse_uri",
    "parse_uri_auth",
    "parse_uri_params",
    "prettify_header_name",
    "register_param",
    "slice_to_string",
    "stringify_header",
    "stringify_named_header",
    "stringify_params",
    "stringify_uri",
]
