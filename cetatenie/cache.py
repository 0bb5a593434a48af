"""A thread-safe cache whose entries expire a fixed time after they are stored."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class _Entry:
    data: bytes
    expires_at: float


class TtlCache:
    """Maps string keys to byte payloads, each valid for ``ttl`` seconds."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._items: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        """Return the cached payload, or None when it is missing or expired."""
        with self._lock:
            entry = self._items.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._items[key]
                return None
            return entry.data

    def set(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, expiring ``ttl`` seconds from now."""
        with self._lock:
            self._items[key] = _Entry(data, self._clock() + self.ttl)

    def cleanup(self) -> None:
        """Drop every expired entry."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._items.items() if now > entry.expires_at]
            for key in expired:
                del self._items[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)