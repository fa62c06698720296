"""
sitelink/net/url.py

URL helpers for the session client: absolute-URL detection, path joining
against an origin, query-string encoding and origin / WebSocket scheme
normalization.
"""

from __future__ import annotations

import posixpath
import re
from typing import Any, Mapping, Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from sitelink.base.exceptions import InvalidOriginError

_ABSOLUTE_RE = re.compile(r"^(?:[a-z]+:)?//", re.IGNORECASE)

# Characters left alone by JavaScript's encodeURIComponent / encodeURI.
URI_COMPONENT_SAFE = "-_.!~*'()"
URI_SAFE = URI_COMPONENT_SAFE + ";,/?:@&=+$#"

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}

WEBSOCKET_SCHEMES = {"http": "ws", "https": "wss"}


def is_absolute(path: str) -> bool:
    """True for "scheme://..." and protocol-relative "//..." values."""
    return bool(_ABSOLUTE_RE.match(path))


def join_paths(*segments: str) -> str:
    """
    Join path segments POSIX-style and normalize the result.

    Unlike posixpath.join, an absolute segment does not discard what came
    before it: join_paths("/api", "/users") == "/api/users".
    """
    joined = "/".join(s for s in segments if s)
    if not joined:
        return "."

    normalized = posixpath.normpath(joined)
    # POSIX keeps a leading "//"; a URL path must not start with one.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    if joined.endswith("/") and not normalized.endswith("/"):
        normalized += "/"
    return normalized


def join_url(origin: str, *segments: str) -> str:
    """Join path segments and resolve them against origin."""
    return urljoin(origin, join_paths(*segments))


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Encode params as "?k1=v1&k2=v2".

    None values are dropped; keys are used verbatim, values are
    percent-encoded. Returns "" when nothing is left to encode.
    """
    if not params:
        return ""

    pairs = [
        f"{key}={quote(stringify(value), safe=URI_COMPONENT_SAFE)}"
        for key, value in params.items()
        if value is not None
    ]
    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def encode_uri(value: str) -> str:
    """Percent-encode a whole URI-ish string, leaving reserved characters."""
    return quote(value, safe=URI_SAFE)


def normalize_origin(url: str) -> str:
    """
    Reduce an absolute URL to scheme://host[:port].

    Default ports, user info, path, query and fragment are dropped; scheme
    and host are lowercased.
    """
    if not is_absolute(url):
        raise InvalidOriginError(url)

    parts = urlsplit(url)
    try:
        port = parts.port
    except ValueError:
        raise InvalidOriginError(url) from None

    scheme = parts.scheme.lower()
    host = parts.hostname
    if not scheme or not host:
        raise InvalidOriginError(url)

    if ":" in host:
        host = f"[{host}]"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    return f"{scheme}://{host}"


def to_websocket_url(url: str) -> str:
    """Swap an http(s) scheme for ws(s); any other scheme is left as-is."""
    parts = urlsplit(url)
    scheme = WEBSOCKET_SCHEMES.get(parts.scheme.lower())
    if scheme is None:
        return url
    return urlunsplit(parts._replace(scheme=scheme))
