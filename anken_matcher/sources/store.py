"""Listing store: cached access to the listing source."""

from typing import List, Optional

from anken_matcher.domain.models import Listing
from anken_matcher.logging import get_logger

from .base import BaseSource
from .cache import ListingCache
from .exceptions import InvalidSourceReference

logger = get_logger(__name__, component="listing_store")


class ListingStore:
    """Serves listings from the cache, refetching through ``source`` when stale.

    Args:
        source: Source that loads listings for a source reference
        cache: Snapshot cache; a private one with the default TTL if omitted
    """

    def __init__(self, source: BaseSource, cache: Optional[ListingCache] = None):
        self.source = source
        self.cache = cache if cache is not None else ListingCache()

    def fetch(self, source_ref: Optional[str]) -> List[Listing]:
        """Return the listings behind ``source_ref``.

        Raises:
            InvalidSourceReference: If ``source_ref`` is empty
            SourceUnavailable: If a refetch is needed and fails
            SourceMalformed: If a refetch returns fewer than two rows
        """
        if not source_ref or not source_ref.strip():
            raise InvalidSourceReference("No listing source configured (set GOOGLE_SHEET_URL)")
        source_ref = source_ref.strip()

        cached = self.cache.get(source_ref)
        if cached is not None:
            logger.debug(
                "Listing cache hit",
                extra={"event": "listing_store.cache.hit", "listing_count": len(cached)},
            )
            return cached

        logger.info(
            "Listing cache miss, fetching listings",
            extra={"event": "listing_store.cache.miss", "ttl_seconds": self.cache.ttl_seconds},
        )
        return self.cache.refresh(source_ref, lambda: self.source.fetch_listings(source_ref))

    def invalidate(self) -> None:
        self.cache.invalidate()
        logger.info("Listing cache cleared", extra={"event": "listing_store.cache.invalidated"})
