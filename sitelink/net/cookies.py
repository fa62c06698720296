"""
sitelink/net/cookies.py

Cookie header codec and the session cookie jar.

Only the leading `name=value` pair of a Set-Cookie value is kept; attributes
(Path, Expires, HttpOnly, ...) are discarded. No expiry, domain or path rules
are enforced and values are passed through verbatim in both directions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CookieEntry:
    key: str
    val: str


def decode_cookies(raw: Optional[Iterable[str]]) -> List[CookieEntry]:
    """
    Decode Set-Cookie header values into name/value entries.

    "sid=abc; Path=/; HttpOnly" -> CookieEntry("sid", "abc")

    A pair without "=" becomes a key with an empty value. None decodes to an
    empty list.
    """
    if raw is None:
        return []

    entries: List[CookieEntry] = []
    for cookie in raw:
        pair = cookie.split(";", 1)[0]
        key, _, val = pair.partition("=")
        entries.append(CookieEntry(key=key, val=val))
    return entries


def encode_cookies(jar: Mapping[str, str]) -> str:
    """Encode a name -> value mapping as a Cookie header value."""
    return "; ".join(f"{name}={value}" for name, value in jar.items())


class CookieJar:
    """
    Insertion-ordered cookie store owned by one SiteClient.

    Entries are only added or overwritten by set()/update()/item assignment;
    nothing is evicted on its own.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._cookies: Dict[str, str] = {}
        if initial:
            self.update(initial)

    def get(self) -> str:
        """Current jar encoded as a Cookie header value ("" when empty)."""
        return encode_cookies(self._cookies)

    def set(self, raw: Optional[Iterable[str]]) -> str:
        """Merge Set-Cookie header values into the jar and return get()."""
        entries = decode_cookies(raw)
        for entry in entries:
            self._cookies[entry.key] = entry.val
        if entries:
            logger.debug(f"[CookieJar] Merged {len(entries)} cookie(s): {sorted({e.key for e in entries})}")
        return self.get()

    def update(self, cookies: Mapping[str, str]) -> None:
        for name, value in cookies.items():
            self._cookies[str(name)] = str(value)

    def delete(self, name: str) -> None:
        self._cookies.pop(name, None)

    def clear(self) -> None:
        self._cookies.clear()

    def as_dict(self) -> Dict[str, str]:
        return dict(self._cookies)

    def __getitem__(self, name: str) -> str:
        return self._cookies[name]

    def __setitem__(self, name: str, value: str) -> None:
        self._cookies[str(name)] = str(value)

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def __repr__(self) -> str:
        return f"CookieJar({sorted(self._cookies)})"
