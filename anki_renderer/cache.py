from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass

from .parser import parse
from .types import Node


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0


class TemplateCache:
    """Parsed templates keyed by (template text, strict_filters).

    LRU bounded by `max_entries`; `max_entries=0` disables storage and every
    lookup parses. Safe to share between threads.
    """

    def __init__(self, max_entries: int = 256):
        if max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {max_entries}")
        self.max_entries = max_entries
        self.stats = CacheStats()
        self._entries: OrderedDict[tuple[str, bool], tuple[Node, ...]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, template: str, *, strict_filters: bool = False) -> tuple[Node, ...]:
        key = (template, strict_filters)
        with self._lock:
            nodes = self._entries.get(key)
            if nodes is not None:
                self._entries.move_to_end(key)
                self.stats.hits += 1
                return nodes
            self.stats.misses += 1

        # Parse outside the lock; parse errors are never cached.
        nodes = parse(template, strict_filters=strict_filters)
        if self.max_entries == 0:
            return nodes

        with self._lock:
            # Another thread may have stored it meanwhile; keep the first one.
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = nodes
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
                self.stats.evictions += 1
        return nodes

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
