"""
sitelink/net/client.py
Site session client.

SiteClient pins one origin and keeps a relative base path, an ordered header
store and a cookie jar for it. Every request goes through httpx.AsyncClient
with the session headers (Origin, Referer and a Cookie header computed from
the jar at send time) and feeds the response's Set-Cookie values back into
the jar. connect() opens a WebSocket to the same site with the same headers.
"""

from __future__ import annotations

import inspect
import logging
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

import httpx
from websockets.asyncio.client import connect as ws_connect

from sitelink.base.config import SiteLinkConfig, get_config
from sitelink.base.exceptions import RelativePathRequiredError, RequestFailedError
from sitelink.net.cookies import CookieJar
from sitelink.net.headers import HeaderStore, merge_headers
from sitelink.net.url import (
    encode_query,
    encode_uri,
    is_absolute,
    join_url,
    normalize_origin,
    stringify,
    to_websocket_url,
)

logger = logging.getLogger(__name__)

ResponseHook = Callable[
    [httpx.Response, str, Dict[str, Any]],
    Union[Optional[httpx.Response], Awaitable[Optional[httpx.Response]]],
]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class _RejectAllCookies(DefaultCookiePolicy):
    def set_ok(self, cookie, request):
        return False

    def return_ok(self, cookie, request):
        return False


class SiteClient:
    """
    Stateful HTTP/WebSocket client bound to a single origin.

    Example:
        async with SiteClient("https://example.com") as client:
            client.set_path("/api")
            await client.post("login", **SiteClient.form_data({"user": "a", "pass": "b"}))
            resp = await client.get("me")    # sends the session cookie
    """

    @staticmethod
    def form_data(body: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Build request options carrying body as a urlencoded form.

        Fields are joined as key=value with "&" and the whole string gets one
        URI encoding pass; "&" and "=" inside values are not escaped.
        """
        options = dict(options or {})
        data = "&".join(f"{key}={stringify(value)}" for key, value in body.items())

        headers = merge_headers(options.get("headers") or {}, {"Content-Type": FORM_CONTENT_TYPE})

        options["content"] = encode_uri(data)
        options["headers"] = headers
        return options

    def __init__(
        self,
        origin: str,
        underlying_client: Optional[httpx.AsyncClient] = None,
        config: Optional[SiteLinkConfig] = None,
    ):
        self.config = config or get_config()
        self._origin = normalize_origin(origin)
        self._path = "/"
        self._response_hook: Optional[ResponseHook] = None

        self.cookies = CookieJar()
        self.headers = HeaderStore()
        self.headers.upsert("Origin", self._origin)
        self.headers.upsert("Referer", self._origin)
        self.headers.upsert("Cookie", self.cookies.get)

        self._owns_client = underlying_client is None
        self.client = underlying_client or self._build_client()
        # CookieJar is the only cookie store; httpx must neither keep nor send its own.
        self.client.cookies.jar.set_policy(_RejectAllCookies())
        self.client.cookies.clear()

    def _build_client(self) -> httpx.AsyncClient:
        http = self.config.http
        headers = {"User-Agent": http.user_agent} if http.user_agent else None
        return httpx.AsyncClient(
            timeout=http.timeout,
            verify=http.verify,
            follow_redirects=http.follow_redirects,
            headers=headers,
        )

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def path(self) -> str:
        return self._path

    def set_path(self, path: str) -> str:
        if is_absolute(path):
            raise RelativePathRequiredError(path)
        self._path = path
        return self._path

    def on_response(self, hook: Optional[ResponseHook]) -> None:
        """
        Register the response hook (None removes it).

        The hook is called as hook(response, url, options) after every
        request and may be a coroutine function. Returning an httpx.Response
        replaces the response; any other return value keeps the original.
        """
        self._response_hook = hook

    def join(self, *paths: str) -> str:
        return join_url(self._origin, self._path, *paths)

    def build_url(self, target: str, params: Optional[Mapping[str, Any]] = None) -> str:
        url = target if is_absolute(target) else self.join(target)
        return url + encode_query(params)

    def _merge_headers(self, headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
        return merge_headers(self.headers.materialize(), headers)

    async def _run_hook(self, response: httpx.Response, url: str, options: Dict[str, Any]) -> httpx.Response:
        if self._response_hook is None:
            return response

        result = self._response_hook(response, url, options)
        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, httpx.Response):
            if result is not response:
                logger.debug(f"[SiteClient] Response for {url} replaced by hook ({response.status_code} -> {result.status_code})")
            return result
        return response

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        **options: Any,
    ) -> httpx.Response:
        """
        Send a request to the site and return the (possibly hook-replaced) response.

        Extra keyword options (content, data, json, files, timeout, ...) go
        straight to httpx.AsyncClient.request.

        Raises:
            RequestFailedError: the final response status is not 2xx.
        """
        target = self.build_url(url, params)
        call_options: Dict[str, Any] = {"method": method, "params": params, "headers": headers, **options}

        logger.debug(f"[SiteClient] {method.upper()} {target}")
        response = await self.client.request(
            method,
            target,
            headers=self._merge_headers(headers),
            **options,
        )

        response = await self._run_hook(response, target, call_options)

        if not response.is_success:
            logger.warning(f"[SiteClient] {method.upper()} {target} failed with status {response.status_code}")
            raise RequestFailedError(target, response.status_code, response=response)

        set_cookies = response.headers.get_list("set-cookie")
        if set_cookies:
            self.cookies.set(set_cookies)
            logger.info(f"[SiteClient] Captured {len(set_cookies)} Set-Cookie header(s) from {self._origin}")

        return response

    async def get(self, url: str, **options: Any) -> httpx.Response:
        options.pop("method", None)
        return await self.request(url, method="GET", **options)

    async def post(self, url: str, **options: Any) -> httpx.Response:
        options.pop("method", None)
        return await self.request(url, method="POST", **options)

    def connect(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        **options: Any,
    ):
        """
        Open a WebSocket to the site.

        Returns the websockets connect handle: await it for a connection or
        use it as an async context manager. Extra keyword options go to
        websockets' connect(). Cookies set during the handshake are not
        captured.
        """
        target = to_websocket_url(self.build_url(url, params))

        ws = self.config.websocket
        options.setdefault("open_timeout", ws.open_timeout)
        options.setdefault("max_size", ws.max_size)

        logger.debug(f"[SiteClient] WS {target}")
        return ws_connect(target, additional_headers=self._merge_headers(headers), **options)

    async def aclose(self) -> None:
        """Close the httpx client if this SiteClient created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "SiteClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"SiteClient(origin={self._origin!r}, path={self._path!r})"
