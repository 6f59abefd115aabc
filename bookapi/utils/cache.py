"""
Tag-invalidated read-through cache on top of a cachetools TTLCache.

Every tag owns a generation token. Entries are stored under
(tag, token, key), so replacing the token retires every entry of the tag at
once. A lookup that read the old token before an invalidation can only ever
write an entry nobody will read again.

Keys:
- list:   "<ResourceType>-<page>-<limit>"   e.g. "Author-1-3"
- detail: "<ResourceType>-<id>"             e.g. "Author-7"

The cache lives in the process: run a single process (any number of threads).
"""
from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable

from cachetools import TTLCache

AUTHORS_TAG = "authorsCache"
BOOKS_TAG = "booksCache"

logger = logging.getLogger(__name__)


def list_key(resource: str, page: int, limit: int) -> str:
    return f"{resource}-{page}-{limit}"


def detail_key(resource: str, entity_id) -> str:
    return f"{resource}-{entity_id}"


def _new_token() -> str:
    return uuid.uuid4().hex


class TaggedCache:
    """
    TTLCache is not thread-safe, every access to it and to the token table
    happens under one lock. compute() runs outside the lock: two requests
    missing the same key may both compute it.
    """

    def __init__(self, maxsize: int = 1024, ttl: float = 3600, timer: Callable[[], float] = time.monotonic):
        self._entries = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._tokens: dict[str, str] = {}
        self._lock = threading.Lock()

    def _token(self, tag: str) -> str:
        token = self._tokens.get(tag)
        if token is None:
            token = self._tokens[tag] = _new_token()
        return token

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    def remember(self, tag: str, key: str, compute: Callable[[], str]):
        """
        Read-through lookup: the stored value for key under tag, or the result
        of compute() which is stored before being returned.
        """
        with self._lock:
            entry_key = (tag, self._token(tag), key)
            value = self._entries.get(entry_key)
        if value is not None:
            logger.debug("cache hit %s", key)
            return value

        logger.debug("cache miss %s", key)
        value = compute()
        with self._lock:
            self._entries[entry_key] = value
        return value

    def invalidate(self, *tags: str) -> None:
        """Drop every entry under each of the tags."""
        with self._lock:
            for tag in tags:
                self._tokens[tag] = _new_token()
                for entry_key in [k for k in self._entries.keys() if k[0] == tag]:
                    del self._entries[entry_key]
        logger.info("cache invalidated: %s", ", ".join(tags))
