import pytest

from sitelink.base.exceptions import InvalidOriginError
from sitelink.net.url import (
    encode_query,
    encode_uri,
    is_absolute,
    join_paths,
    join_url,
    normalize_origin,
    to_websocket_url,
)


@pytest.mark.parametrize(
    "path,expected",
    [
        ("http://x.com/y", True),
        ("HTTPS://x.com", True),
        ("//x.com/y", True),
        ("/y", False),
        ("y/z", False),
        ("mailto:a@b.c", False),
    ],
)
def test_is_absolute(path, expected):
    assert is_absolute(path) is expected


def test_encode_query_empty_cases():
    assert encode_query(None) == ""
    assert encode_query({}) == ""
    assert encode_query({"a": None}) == ""


def test_encode_query_filters_none_and_keeps_order():
    assert encode_query({"a": "1", "b": None, "c": "2"}) == "?a=1&c=2"


def test_encode_query_encodes_values_not_keys():
    assert encode_query({"q": "a b&c/d", "k[]": "é"}) == "?q=a%20b%26c%2Fd&k[]=%C3%A9"


def test_encode_query_stringifies_values():
    assert encode_query({"n": 3, "on": True, "off": False}) == "?n=3&on=true&off=false"


def test_encode_uri_keeps_reserved_characters():
    assert encode_uri("a=1&b=x y/z") == "a=1&b=x%20y/z"


@pytest.mark.parametrize(
    "segments,expected",
    [
        (("/", "users"), "/users"),
        (("/api", "users"), "/api/users"),
        (("/api", "/users"), "/api/users"),
        (("/api/", "./v1/../users/"), "/api/users/"),
        (("api", "users"), "api/users"),
        (("",), "."),
    ],
)
def test_join_paths(segments, expected):
    assert join_paths(*segments) == expected


def test_join_url_resolves_against_origin():
    assert join_url("http://example.com", "/api", "users") == "http://example.com/api/users"
    assert join_url("http://example.com", "/", "a//b", "..", "c") == "http://example.com/a/c"
    assert join_url("http://example.com", "/") == "http://example.com/"


def test_normalize_origin_strips_path_and_default_port():
    assert normalize_origin("http://example.com") == "http://example.com"
    assert normalize_origin("HTTP://Example.COM:80/path?q=1") == "http://example.com"
    assert normalize_origin("https://user:pw@example.com:8443/x") == "https://example.com:8443"


@pytest.mark.parametrize("bad", ["/relative", "example.com", "//example.com"])
def test_normalize_origin_rejects_non_absolute(bad):
    with pytest.raises(InvalidOriginError):
        normalize_origin(bad)


def test_to_websocket_url_maps_scheme_only():
    assert to_websocket_url("http://x.com/a") == "ws://x.com/a"
    assert to_websocket_url("https://x.com/http/feed?src=http") == "wss://x.com/http/feed?src=http"
    assert to_websocket_url("wss://x.com/live") == "wss://x.com/live"
