"""Listing sources and the cached listing store."""

from .base import BaseSource, rows_to_listings
from .cache import CacheEntry, ListingCache
from .exceptions import InvalidSourceReference, SourceError, SourceMalformed, SourceUnavailable
from .sheets import SheetSource, parse_csv_rows, to_export_url
from .store import ListingStore

__all__ = [
    "BaseSource",
    "CacheEntry",
    "InvalidSourceReference",
    "ListingCache",
    "ListingStore",
    "SheetSource",
    "SourceError",
    "SourceMalformed",
    "SourceUnavailable",
    "parse_csv_rows",
    "rows_to_listings",
    "to_export_url",
]
