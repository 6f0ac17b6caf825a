import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

T = TypeVar("T")

@dataclass
class CacheEntry(Generic[T]):
    data: T
    expires_at: float

class TTLCache:
    """In-process key/value cache with per-entry expiry.

    Reads enforce expiry on their own; the background sweep only bounds memory
    for keys that are never read again. Entries are shared by every request in
    the process and no locking is done, so two concurrent misses for the same
    key will both fetch and the last write wins.
    """

    def __init__(
        self,
        sweep_interval: int = 60,
        clock: Callable[[], float] = time.monotonic
    ):
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: Dict[str, CacheEntry[Any]] = {}
        self._scheduler: Optional[AsyncIOScheduler] = None

    def get(self, key: str) -> Optional[Any]:
        """Get a cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None

        return entry.data

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Store a value for ttl_seconds, replacing any existing entry."""
        self._entries[key] = CacheEntry(data=value, expires_at=self._clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def sweep(self) -> int:
        """Evict every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Swept {len(expired)} expired cache entries")
        return len(expired)

    async def _sweep_job(self) -> None:
        # Coroutine job so the scheduler runs it on the event loop, not a worker thread
        self.sweep()

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self.running:
            return

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self._sweep_job,
            IntervalTrigger(seconds=self.sweep_interval),
            id="cache_sweep",
            replace_existing=True
        )
        self._scheduler.start()
        logger.info(f"Cache sweep scheduled every {self.sweep_interval}s")

    def stop(self) -> None:
        """Stop the periodic sweep. Cached entries are kept."""
        if self._scheduler is not None:
            if self._scheduler.running:
                self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Cache sweep stopped")

def generate_cache_key(endpoint: str, params: Mapping[str, Optional[str]]) -> str:
    """Build a deterministic cache key from an endpoint name and its parameters.

    Parameters set to None are dropped and the rest are sorted by name, so the
    same parameter set always yields the same key regardless of insertion order.
    """
    sorted_params = "&".join(
        f"{name}={value}"
        for name, value in sorted(params.items())
        if value is not None
    )
    return f"{endpoint}:{sorted_params}"
