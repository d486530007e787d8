"""
In-memory TTL caches for analysis and question results.

Entries expire lazily on read and in bulk through a background sweeper.
Nothing is persisted; a restart starts from an empty cache.
"""

import base64
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from prompt_quality.config import (
    ANALYTICS_CACHE_TTL,
    CACHE_SWEEP_INTERVAL,
    OPTIMIZATION_CACHE_TTL,
    QUESTION_CACHE_TTL,
)

logger = logging.getLogger(__name__)

ANALYSIS_KEY_PREFIX = "analysis_"
QUESTIONS_KEY_PREFIX = "questions_"


@dataclass
class CacheEntry:
    data: Any
    expires_at: float


class TTLCache:
    """
    Thread-safe key/value store whose entries expire after a time-to-live.

    Usage:
        cache = TTLCache(default_ttl=1800)
        cache.set("key", value)
        cache.get("key")           # value, or None once expired
        cache.set("key", value, 60)  # per-entry TTL in seconds
    """

    def __init__(
        self,
        default_ttl: float = 3600,
        clock: Callable[[], float] = time.time,
        name: str = "cache",
    ):
        self.default_ttl = default_ttl
        self.name = name
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._store[key]
                return None
            return entry.data

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Store a value, replacing any previous entry for the key.

        Args:
            key: Cache key
            value: Payload to store
            ttl: Lifetime in seconds; falls back to the cache default when unset or zero
        """
        lifetime = ttl if ttl else self.default_ttl
        with self._lock:
            self._store[key] = CacheEntry(data=value, expires_at=self._clock() + lifetime)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        with self._lock:
            return len(self._store)

    def clean_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._store.items() if now > entry.expires_at]
            for key in expired:
                del self._store[key]
        if expired:
            logger.debug("Removed %d expired entries from %s", len(expired), self.name)
        return len(expired)


# ── Key generation ─────────────────────────────────────────────


def _fingerprint(prompt: str, media_type: str, target_model: str) -> str:
    normalized = f"{prompt.strip().lower()}_{media_type.lower()}_{target_model.lower()}"
    return base64.urlsafe_b64encode(normalized.encode("utf-8")).decode("ascii")


def generate_analysis_cache_key(prompt: str, media_type: str, target_model: str) -> str:
    """Cache key for a prompt analysis, insensitive to case and surrounding whitespace."""
    return ANALYSIS_KEY_PREFIX + _fingerprint(prompt, media_type, target_model)


def generate_questions_cache_key(prompt: str, media_type: str, target_model: str) -> str:
    """Cache key for generated questions; never collides with analysis keys."""
    return QUESTIONS_KEY_PREFIX + _fingerprint(prompt, media_type, target_model)


# ── Background sweep ───────────────────────────────────────────


class CacheSweeper:
    """Periodically purges expired entries from a set of caches."""

    def __init__(self, caches: list[TTLCache], interval: float = CACHE_SWEEP_INTERVAL):
        self.caches = caches
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sweep(self) -> int:
        """Run one sweep over every cache and return the number of evictions."""
        removed = sum(cache.clean_expired() for cache in self.caches)
        if removed:
            logger.info("Cache sweep evicted %d expired entries", removed)
        return removed

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="cache-sweeper", daemon=True
        )
        self._thread.start()
        logger.info("Cache sweeper started (interval=%ss)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                # still mid-sweep; keep the handle so start() cannot spawn a second loop
                logger.warning("Cache sweeper did not stop within %ss", timeout)
                return
            self._thread = None
            logger.info("Cache sweeper stopped")

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.sweep()


# ── Registry (constructed once at process start) ───────────────


class CacheRegistry:
    """
    The caches shared by request handlers.

    - questions: generated clarifying questions
    - optimizations: prompt analyses and optimization results
    - analytics: dashboard aggregates
    """

    def __init__(
        self,
        questions: TTLCache,
        optimizations: TTLCache,
        analytics: TTLCache,
        sweep_interval: float = CACHE_SWEEP_INTERVAL,
    ):
        self.questions = questions
        self.optimizations = optimizations
        self.analytics = analytics
        self.sweeper = CacheSweeper(self.all(), interval=sweep_interval)

    def all(self) -> list[TTLCache]:
        return [self.questions, self.optimizations, self.analytics]

    def start_sweeper(self) -> None:
        self.sweeper.start()

    def stop_sweeper(self, timeout: Optional[float] = None) -> None:
        self.sweeper.stop(timeout)

    def clear(self) -> None:
        for cache in self.all():
            cache.clear()


def create_cache_registry(
    clock: Callable[[], float] = time.time,
    question_ttl: float = QUESTION_CACHE_TTL,
    optimization_ttl: float = OPTIMIZATION_CACHE_TTL,
    analytics_ttl: float = ANALYTICS_CACHE_TTL,
    sweep_interval: float = CACHE_SWEEP_INTERVAL,
) -> CacheRegistry:
    """Build the cache registry from configuration. The sweeper is not started."""
    return CacheRegistry(
        questions=TTLCache(question_ttl, clock=clock, name="questions"),
        optimizations=TTLCache(optimization_ttl, clock=clock, name="optimizations"),
        analytics=TTLCache(analytics_ttl, clock=clock, name="analytics"),
        sweep_interval=sweep_interval,
    )
