"""Explicit query cache in front of an injected fetch function.

Entries are keyed by a canonical string built from the endpoint name and its
parameters, so ``("transactions-history", from=a, to=b)`` always maps to the
same key no matter how the arguments were passed. Each fetch takes a ticket
for its key; a result is stored only if no newer fetch or invalidation for that
key happened while it ran, so the latest request always wins. The number of
tracked keys is capped; the least recently used one is evicted first.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from itertools import count
from threading import Lock
from typing import Any, Callable, Generic, Mapping, TypeVar

from .logging_setup import get_logger

T = TypeVar("T")

Fetch = Callable[[str, Mapping[str, Any]], T]

_logger = get_logger("budget_tracker.data_access")


def _canonical_value(value: Any) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(sorted(_canonical_value(v) for v in value))
    return str(value)


def canonical_params(params: Mapping[str, Any]) -> dict[str, str]:
    return {k: _canonical_value(v) for k, v in params.items() if v is not None}


def cache_key(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """``cache_key("stats", {"to": t, "from": f})`` -> ``"stats?from=...&to=..."``."""
    canon = canonical_params(params or {})
    query = "&".join(f"{k}={canon[k]}" for k in sorted(canon))
    return f"{endpoint}?{query}" if query else endpoint


@dataclass
class _Slot(Generic[T]):
    endpoint: str
    params: dict[str, str]
    ticket: int = 0
    value: T | None = None
    filled: bool = False

    def matches(self, endpoint: str | None, wanted: Mapping[str, str]) -> bool:
        if endpoint is not None and self.endpoint != endpoint:
            return False
        return all(self.params.get(k) == v for k, v in wanted.items())


class QueryCache(Generic[T]):
    """Bounded LRU of query results keyed by ``cache_key``.

    Tickets come from one counter shared by every key, so a slot dropped by
    ``invalidate`` or evicted for space can be recreated without an old
    in-flight fetch ever matching the new slot.
    """

    def __init__(self, fetch: Fetch | None = None, max_entries: int = 128) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._fetch = fetch
        self.max_entries = max_entries
        self._lock = Lock()
        self._tickets = count(1)
        self._slots: OrderedDict[str, _Slot[T]] = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for s in self._slots.values() if s.filled)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            slot = self._slots.get(key)
            return slot is not None and slot.filled

    @property
    def slot_count(self) -> int:
        """Keys currently tracked, filled or waiting on a fetch."""
        with self._lock:
            return len(self._slots)

    def _evict(self) -> None:
        while len(self._slots) > self.max_entries:
            key, _slot = self._slots.popitem(last=False)
            _logger.debug("evicted %s", key)

    def begin(self, endpoint: str, params: Mapping[str, Any] | None = None) -> int:
        """Issue a new ticket for the key; tickets issued earlier become stale."""
        key = cache_key(endpoint, params)
        with self._lock:
            slot = self._slots.get(key)
            if slot is None:
                slot = self._slots[key] = _Slot(endpoint, canonical_params(params or {}))
            self._slots.move_to_end(key)
            slot.ticket = next(self._tickets)
            self._evict()
            return slot.ticket

    def commit(self, endpoint: str, params: Mapping[str, Any] | None, ticket: int, value: T) -> bool:
        """Store ``value`` unless a newer ticket was issued. Returns whether it was stored."""
        key = cache_key(endpoint, params)
        with self._lock:
            slot = self._slots.get(key)
            if slot is None or slot.ticket != ticket:
                _logger.debug("discarding stale result for %s (ticket %s)", key, ticket)
                return False
            slot.value = value
            slot.filled = True
            return True

    def peek(self, endpoint: str, params: Mapping[str, Any] | None = None) -> T | None:
        with self._lock:
            slot = self._slots.get(cache_key(endpoint, params))
            return slot.value if slot is not None and slot.filled else None

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None, fetch: Fetch | None = None) -> T:
        params = dict(params or {})
        key = cache_key(endpoint, params)
        with self._lock:
            slot = self._slots.get(key)
            if slot is not None and slot.filled:
                self._slots.move_to_end(key)
                _logger.debug("cache hit %s", key)
                return slot.value  # type: ignore[return-value]

        fetcher = fetch or self._fetch
        if fetcher is None:
            raise RuntimeError("QueryCache.get needs a fetch function")
        ticket = self.begin(endpoint, params)
        _logger.debug("cache miss %s (ticket %s)", key, ticket)
        try:
            value = fetcher(endpoint, params)
        except Exception:
            self._release(key, ticket)
            raise
        if not self.commit(endpoint, params, ticket, value):
            # a newer request owns the key; prefer what it stored
            newer = self.peek(endpoint, params)
            if newer is not None:
                return newer
        return value

    def _release(self, key: str, ticket: int) -> None:
        with self._lock:
            slot = self._slots.get(key)
            if slot is not None and slot.ticket == ticket and not slot.filled:
                del self._slots[key]

    def invalidate(self, endpoint: str | None = None, **match: Any) -> int:
        """Drop entries for ``endpoint`` whose params include ``match``.

        Fetches still in flight for those keys become stale too. Returns the
        number of stored entries removed.
        """
        wanted = canonical_params(match)
        with self._lock:
            doomed = [k for k, s in self._slots.items() if s.matches(endpoint, wanted)]
            removed = sum(1 for k in doomed if self._slots[k].filled)
            for key in doomed:
                del self._slots[key]
        if removed:
            _logger.debug("invalidated %d cache entries (endpoint=%s, match=%s)", removed, endpoint, wanted)
        return removed

    def clear(self) -> None:
        self.invalidate()
