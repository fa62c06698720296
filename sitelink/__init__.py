"""
sitelink: a session-aware client for talking to one website over HTTP and
WebSocket, carrying its cookies and default headers from call to call.
"""

from sitelink.base.exceptions import (
    ErrorCode,
    InvalidOriginError,
    RelativePathRequiredError,
    RequestFailedError,
    SiteLinkError,
)
from sitelink.net.client import ResponseHook, SiteClient
from sitelink.net.cookies import CookieEntry, CookieJar, decode_cookies, encode_cookies
from sitelink.net.headers import HeaderStore, LazyValue, LiteralValue
from sitelink.net.url import encode_query, is_absolute, join_url

__version__ = "0.1.0"

__all__ = [
    "SiteClient",
    "ResponseHook",
    "CookieEntry",
    "CookieJar",
    "decode_cookies",
    "encode_cookies",
    "HeaderStore",
    "LazyValue",
    "LiteralValue",
    "encode_query",
    "is_absolute",
    "join_url",
    "ErrorCode",
    "SiteLinkError",
    "InvalidOriginError",
    "RelativePathRequiredError",
    "RequestFailedError",
]
