"""
Template cache

Parsed trees are immutable, so one tree per distinct template text can be
shared by every caller. The cache is a bounded LRU map guarded by a lock;
a missing template is parsed while the lock is held, so each text is
parsed and inserted at most once even under concurrent first use. Parse
errors are not cached.
"""

import threading
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

from .log import LOG

T = TypeVar("T")


class TemplateCache(Generic[T]):
    """
    Bounded, thread-safe map from template text to a compiled value

    Example:
        >>> cache = TemplateCache(maxsize=2)
        >>> cache.get_orCreate("~A", len)
        2
        >>> "~A" in cache
        True
    """

    def __init__(self, maxsize: int = 256) -> None:
        """
        Args:
            maxsize: Entries kept before the least recently used is dropped;
                     0 disables caching
        """
        self.maxsize = maxsize
        self.entries: "OrderedDict[str, T]" = OrderedDict()
        self.lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, text: object) -> bool:
        return text in self.entries

    def get_orCreate(self, text: str, factory: Callable[[str], T]) -> T:
        """
        Return the cached value for text, building it with factory on a miss

        Args:
            text: Template text (the cache key)
            factory: Builds the value; exceptions propagate and nothing is stored
        """
        if self.maxsize <= 0:
            return factory(text)

        with self.lock:
            if text in self.entries:
                self.hits += 1
                self.entries.move_to_end(text)
                return self.entries[text]

            self.misses += 1
            LOG(f"Template cache miss ({len(self.entries)}/{self.maxsize} entries)", level=2)
            value = factory(text)
            self.entries[text] = value
            if len(self.entries) > self.maxsize:
                self.entries.popitem(last=False)
            return value

    def clear(self) -> None:
        with self.lock:
            self.entries.clear()
            self.hits = 0
            self.misses = 0
