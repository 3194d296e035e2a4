from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class _KeySlot:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class KeyedLock:
    """One mutex per key, created on first use and dropped once idle.

    Clock actions lock on (user_id, work_date) so punches for other users or
    other days never wait on each other.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._slots: dict[Hashable, _KeySlot] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._slots)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            slot = self._slots.get(key)
            if slot is None:
                slot = self._slots[key] = _KeySlot()
            slot.users += 1
        try:
            with slot.lock:
                yield
        finally:
            with self._guard:
                slot.users -= 1
                if slot.users == 0:
                    del self._slots[key]
