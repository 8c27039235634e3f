"""Bounded page-URL to image-URL cache shared across requests."""

import threading
from collections import deque
from typing import Deque, Dict, Optional

DEFAULT_CAPACITY = 100


class ImageResolutionCache:
    """FIFO-bounded cache of resolved images.

    Eviction follows insertion order, not access order: when a new key would
    push the size past ``capacity`` the earliest inserted key is dropped.
    Updating an existing key keeps its original position. A single lock
    guards the map and the order queue together.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: Dict[str, str] = {}
        self._order: Deque[str] = deque()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            if key in self._entries:
                self._entries[key] = value
                return
            if len(self._entries) >= self.capacity:
                oldest = self._order.popleft()
                del self._entries[oldest]
            self._entries[key] = value
            self._order.append(key)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._order.clear()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
