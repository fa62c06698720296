"""
sitelink/net/headers.py

Ordered header store whose values are either literal strings or producers
evaluated on every materialization (used for the live Cookie header).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Union

HeaderProducer = Callable[[], Optional[str]]


@dataclass(frozen=True)
class LiteralValue:
    value: str

    def resolve(self) -> Optional[str]:
        return self.value


@dataclass(frozen=True)
class LazyValue:
    producer: HeaderProducer

    def resolve(self) -> Optional[str]:
        return self.producer()


HeaderValue = Union[LiteralValue, LazyValue]
HeaderInput = Union[str, HeaderProducer, LiteralValue, LazyValue]


def as_header_value(value: HeaderInput) -> HeaderValue:
    if isinstance(value, (LiteralValue, LazyValue)):
        return value
    if isinstance(value, str):
        return LiteralValue(value)
    if callable(value):
        return LazyValue(value)
    raise TypeError(f"Header value must be a str or a callable, got {type(value).__name__}")


class HeaderStore:
    """
    Insertion-ordered header map.

    Keys are unique and compared by exact string equality. Updating an
    existing key keeps its position; new keys go to the end.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, HeaderValue] = {}

    def upsert(self, key: str, value: HeaderInput) -> "HeaderStore":
        self._entries[key] = as_header_value(value)
        return self

    def remove(self, key: str) -> "HeaderStore":
        self._entries.pop(key, None)
        return self

    def materialize(self) -> Dict[str, str]:
        """
        Resolve every entry into a plain dict for one outgoing call.

        Entries resolving to "" or None are left out of the result but stay
        in the store.
        """
        data: Dict[str, str] = {}
        for key, value in self._entries.items():
            result = value.resolve()
            if not result:
                continue
            data[key] = result
        return data

    def keys(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HeaderStore({list(self._entries)})"


def materialize(store: HeaderStore) -> Dict[str, str]:
    return store.materialize()


def upsert(store: HeaderStore, key: str, value: HeaderInput) -> HeaderStore:
    return store.upsert(key, value)


def remove(store: HeaderStore, key: str) -> HeaderStore:
    return store.remove(key)


def merge_headers(base: Mapping[str, str], overrides: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Overlay overrides on base. Header names compare case-insensitively, so
    {"Cookie": "a=1"} overlaid with {"cookie": "b=2"} leaves only "cookie".
    """
    merged = dict(base)
    if not overrides:
        return merged
    replaced = {key.lower() for key in overrides}
    merged = {key: value for key, value in merged.items() if key.lower() not in replaced}
    merged.update(overrides)
    return merged
