"""In-memory record of the item identities already reported."""

from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, Iterator


class SeenSet:
    """Identities reported during this process.

    Unbounded by default, so it only ever grows. With ``capacity`` set, the
    least recently added identity is evicted once the limit is reached.
    """

    def __init__(self, capacity: int | None = None, initial: Iterable[str] = ()) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: OrderedDict[str, None] = OrderedDict()
        for identity in initial:
            self.add(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def add(self, identity: str) -> None:
        if identity in self._entries:
            self._entries.move_to_end(identity)
            return
        self._entries[identity] = None
        if self.capacity is not None and len(self._entries) > self.capacity:
            self._entries.popitem(last=False)

    def touch(self, identity: str) -> None:
        """Mark a known identity as recently seen so eviction spares it.

        Only the order changes; membership is untouched.
        """

        if self.capacity is not None and identity in self._entries:
            self._entries.move_to_end(identity)

    def snapshot(self) -> set[str]:
        return set(self._entries)


__all__ = ["SeenSet"]
