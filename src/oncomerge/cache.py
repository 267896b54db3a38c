"""Caller-owned cache for driver evaluations.

Driver evidence for a record depends on the record, the annotation settings and
the annotation sources it was evaluated against. Evaluations are cached under a
stable serialization of the record plus a hashable ``flags`` value the caller
builds from everything else. The cache is bounded and evicts least recently
used entries.
"""

from collections import OrderedDict
from typing import Callable, Hashable, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_MAXSIZE = 10_000


class DriverInfoCache:
    """Bounded LRU cache of driver evaluations."""

    def __init__(self, maxsize: int = DEFAULT_MAXSIZE) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[tuple[str, Hashable], object] = OrderedDict()

    @staticmethod
    def make_key(record: BaseModel, flags: Hashable) -> tuple[str, Hashable]:
        """Cache key: the record's JSON serialization plus the caller's flags."""
        return (record.model_dump_json(), flags)

    def get_or_compute(self, record: BaseModel, flags: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached evaluation or compute and store it."""
        key = self.make_key(record, flags)
        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]  # type: ignore[return-value]

        self.misses += 1
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
        return value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
