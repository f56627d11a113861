"""
Expiring cache for resolved tags and divergence messages
"""

import functools
import json
import re
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Protocol

from .shared import get_logging_manager


@dataclass
class CacheEntry:
    """A cached value and the Unix timestamp after which it is stale.

    ``value`` may be None, meaning "computed, nothing found". A missing
    entry means "not cached".
    """

    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class CacheService(Protocol):
    """Storage behind :func:`memoize`."""

    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, value: Any, expires_at: float) -> None: ...

    def clear(self, key: str | None = None) -> None: ...


class InMemoryCache:
    """Process-local cache backed by a dict."""

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def set(self, key: str, value: Any, expires_at: float) -> None:
        self._entries[key] = CacheEntry(key=key, value=value, expires_at=expires_at)

    def clear(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


class JsonFileCache:
    """Cache persisted as one JSON file per key."""

    def __init__(self, cache_dir: str | Path):
        """Initialize cache, creating the directory if needed."""
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _get_cache_file(self, key: str) -> Path:
        """Get cache file path for a key."""
        # Keys look like "latest-tag-button_tags:owner/repo"
        safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", key)
        return self.cache_dir / f"{safe_name}.json"

    def get(self, key: str) -> CacheEntry | None:
        cache_file = self._get_cache_file(key)

        if not cache_file.exists():
            return None

        try:
            with open(cache_file) as f:
                data = json.load(f)
            entry = CacheEntry(
                key=data["key"],
                value=data["value"],
                expires_at=float(data["expires_at"]),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            # Invalid cache file, treat as not cached
            return None

        # Two keys may share a sanitized file name
        if entry.key != key:
            return None
        return entry

    def set(self, key: str, value: Any, expires_at: float) -> None:
        entry = CacheEntry(key=key, value=value, expires_at=expires_at)
        with open(self._get_cache_file(key), "w") as f:
            json.dump(asdict(entry), f, indent=2)

    def clear(self, key: str | None = None) -> None:
        """Clear a single key or every cached entry."""
        if key:
            cache_file = self._get_cache_file(key)
            if cache_file.exists():
                cache_file.unlink()
        else:
            for cache_file in self.cache_dir.glob("*.json"):
                cache_file.unlink()


def memoize(
    cache: CacheService,
    key_fn: Callable[..., str],
    ttl: timedelta,
    clock: Callable[[], float] = time.time,
) -> Callable:
    """
    Cache a function's results in ``cache`` for ``ttl``.

    ``key_fn`` receives the same arguments as the wrapped function. A live
    entry short-circuits the call, including entries holding None. Exceptions
    propagate and leave the cache untouched. Concurrent misses on one key are
    not de-duplicated.
    """
    logging_manager = get_logging_manager()
    ttl_seconds = ttl.total_seconds()

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key = key_fn(*args, **kwargs)
            entry = cache.get(key)
            if entry is not None and not entry.is_expired(clock()):
                logging_manager.log_cache_operation("get", key, hit=True)
                return entry.value

            logging_manager.log_cache_operation(
                "get", key, hit=False, stale=entry is not None
            )
            value = func(*args, **kwargs)
            cache.set(key, value, clock() + ttl_seconds)
            logging_manager.log_cache_operation("set", key)
            return value

        return wrapper

    return decorator
