"""
Per-key locking for stock movements.

Movements on the same (product, warehouse) pair must not interleave their
read-check-write sequence; movements on different pairs never wait on each
other. Locks are created on demand and dropped once no thread holds or waits
for them.
"""
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class _KeyLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class StockLockRegistry:
    """Exclusive locks keyed by (product_id, warehouse_id)"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, _KeyLock] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _KeyLock()
            entry.users += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
