# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Header and query-parameter containers used to assemble requests.

``HeaderValues`` is a case-insensitive header map that keeps the casing of
the first spelling it saw.  ``Params`` is an insertion-ordered multimap that
renders into a URL query string.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from urllib.parse import quote, urlencode

__all__ = ["HeaderValues", "Params"]


class HeaderValues(MutableMapping[str, str]):
    """Case-insensitive ``str -> str`` header map.

    Repeated values added via :meth:`add` are folded into a single
    comma-separated line, the same way HTTP header lines are combined.
    """

    __slots__ = ("_store",)

    def __init__(self, headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None) -> None:
        """Initialize from a mapping or an iterable of ``(name, value)`` pairs."""
        self._store: dict[str, tuple[str, str]] = {}
        if headers is None:
            return
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in pairs:
            self.add(name, value)

    @classmethod
    def from_response_headers(cls, headers: object) -> HeaderValues:
        """Build a header map from whatever a transport response exposes.

        Prefers ``multi_items()`` (``httpx.Headers``) so repeated headers are
        folded into one line; falls back to ``items()`` for plain mappings.
        """
        multi_items = getattr(headers, "multi_items", None)
        if multi_items is not None:
            return cls(multi_items())
        items = getattr(headers, "items", None)
        if items is not None:
            return cls(items())
        return cls()

    def add(self, name: str, value: str) -> None:
        """Append *value* to *name*, folding onto any existing line."""
        key = name.lower()
        existing = self._store.get(key)
        if existing is None:
            self._store[key] = (name, value)
        else:
            self._store[key] = (existing[0], f"{existing[1]}, {value}")

    def line(self, name: str) -> str:
        """Return the header line for *name*, or ``""`` when absent."""
        entry = self._store.get(name.lower())
        return "" if entry is None else entry[1]

    def __getitem__(self, name: str) -> str:
        """Return the value of *name*, ignoring case."""
        return self._store[name.lower()][1]

    def __setitem__(self, name: str, value: str) -> None:
        """Set *name*, keeping the first-seen spelling."""
        key = name.lower()
        existing = self._store.get(key)
        self._store[key] = (name if existing is None else existing[0], value)

    def __delitem__(self, name: str) -> None:
        """Remove *name*, ignoring case."""
        del self._store[name.lower()]

    def __iter__(self) -> Iterator[str]:
        """Iterate header names in their first-seen spelling."""
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        """Return the number of distinct header names."""
        return len(self._store)

    def __repr__(self) -> str:  # noqa: D105
        return f"HeaderValues({dict(self.items())!r})"


class Params:
    """Insertion-ordered query-parameter multimap.

    :meth:`set` replaces every value of a key while keeping the position of
    its first occurrence; :meth:`add` appends another value.
    """

    __slots__ = ("_pairs",)

    def __init__(self) -> None:
        """Initialize an empty parameter list."""
        self._pairs: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        """Set *key* to the single value *value*."""
        for i, (k, _) in enumerate(self._pairs):
            if k == key:
                self._pairs[i] = (key, value)
                self._pairs[i + 1 :] = [p for p in self._pairs[i + 1 :] if p[0] != key]
                return
        self._pairs.append((key, value))

    def add(self, key: str, value: str) -> None:
        """Append another *value* for *key*."""
        self._pairs.append((key, value))

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value of *key*, or *default*."""
        for k, v in self._pairs:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> list[str]:
        """Return every value of *key* in insertion order."""
        return [v for k, v in self._pairs if k == key]

    def remove(self, key: str) -> None:
        """Drop every value of *key*."""
        self._pairs = [p for p in self._pairs if p[0] != key]

    def items(self) -> list[tuple[str, str]]:
        """Return a copy of the ``(key, value)`` pairs in insertion order."""
        return list(self._pairs)

    def encode(self) -> str:
        """Render the pairs as a URL query string (``%20`` for spaces)."""
        return urlencode(self._pairs, quote_via=quote)

    def __contains__(self, key: object) -> bool:
        """Return whether *key* has any value."""
        return any(k == key for k, _ in self._pairs)

    def __len__(self) -> int:
        """Return the number of pairs."""
        return len(self._pairs)

    def __str__(self) -> str:
        """Return the encoded query string."""
        return self.encode()

    def __repr__(self) -> str:  # noqa: D105
        return f"Params({self._pairs!r})"
