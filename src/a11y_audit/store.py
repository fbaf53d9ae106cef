"""Bounded in-memory stores for scan results and fix suggestions."""

import random
import string
import time
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, TypeVar


K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def new_scan_id() -> str:
    """Opaque scan identifier: base-36 millisecond timestamp plus a random suffix."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_BASE36, k=11))
    return _to_base36(millis) + suffix


class BoundedStore(Generic[K, V]):
    """Key-value store that keeps at most ``capacity`` entries.

    The oldest inserted entries are discarded first. Overwriting a key keeps
    its original position.
    """

    def __init__(self, capacity: int = 50):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: "OrderedDict[K, V]" = OrderedDict()

    def put(self, key: K, value: V) -> None:
        self._items[key] = value
        while len(self._items) > self.capacity:
            self._items.popitem(last=False)

    def get(self, key: K) -> Optional[V]:
        return self._items.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def keys(self) -> list[K]:
        return list(self._items)


class TTLCache(Generic[K, V]):
    """Cache whose entries expire ``ttl_seconds`` after they were set."""

    def __init__(self, ttl_seconds: float = 60 * 60, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._items: dict[K, tuple[float, V]] = {}

    def _expired(self, stamp: float, now: float) -> bool:
        return now - stamp > self.ttl_seconds

    def set(self, key: K, value: V) -> None:
        self._items[key] = (self._clock(), value)

    def get(self, key: K) -> Optional[V]:
        entry = self._items.get(key)
        if entry is None:
            return None
        stamp, value = entry
        if self._expired(stamp, self._clock()):
            del self._items[key]
            return None
        return value

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        stale = [k for k, (stamp, _) in self._items.items() if self._expired(stamp, now)]
        for key in stale:
            del self._items[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._items)
