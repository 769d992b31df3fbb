"""In-memory TTL cache for the listing snapshot."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from anken_matcher.domain.models import Listing

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class CacheEntry:
    """One cached snapshot.

    Attributes:
        data: Listings as returned by the source
        fetched_at: Clock reading at the time the snapshot was stored
        source_ref: Source reference the snapshot was loaded from
    """

    data: Tuple[Listing, ...]
    fetched_at: float
    source_ref: str


class ListingCache:
    """Holds at most one listing snapshot and serialises refreshes.

    At most one refresh runs at a time. A caller arriving while a refresh is in
    flight is served the previous snapshot for the same source reference if
    there is one, and otherwise waits for the refresh to finish.

    Args:
        ttl_seconds: Age after which a snapshot is stale
        clock: Monotonic clock returning seconds
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"Cache TTL must be positive, got: {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[CacheEntry] = None
        self._refresh_lock = threading.Lock()

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    def is_fresh(self, entry: Optional[CacheEntry], source_ref: str) -> bool:
        if entry is None or entry.source_ref != source_ref:
            return False
        return self._clock() - entry.fetched_at < self.ttl_seconds

    def get(self, source_ref: str) -> Optional[List[Listing]]:
        """Return the snapshot for ``source_ref`` if it is still fresh."""
        entry = self._entry
        if self.is_fresh(entry, source_ref):
            return list(entry.data)
        return None

    def refresh(self, source_ref: str, loader: Callable[[], List[Listing]]) -> List[Listing]:
        """Reload the snapshot with ``loader`` unless another caller already is.

        Exceptions from ``loader`` propagate and leave the previous snapshot in
        place.
        """
        if not self._refresh_lock.acquire(blocking=False):
            stale = self._entry
            if stale is not None and stale.source_ref == source_ref:
                return list(stale.data)
            self._refresh_lock.acquire()

        try:
            # A refresh that finished while we waited may have filled the entry
            current = self.get(source_ref)
            if current is not None:
                return current
            data = tuple(loader())
            self._entry = CacheEntry(data=data, fetched_at=self._clock(), source_ref=source_ref)
            return list(data)
        finally:
            self._refresh_lock.release()

    def invalidate(self) -> None:
        """Drop the snapshot so the next fetch reloads."""
        self._entry = None
