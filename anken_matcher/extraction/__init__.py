"""Signal extraction from listing text.

This module provides:
- extract_price: rate and unit via an ordered pattern cascade
- classify_location / extract_location_label: remote and location handling
- detect_keywords: category keywords from a static dictionary
"""

from .keywords import DetectedKeyword, detect_keywords, group_by_category
from .location import (
    LocationMatch,
    LocationMatchType,
    classify_location,
    extract_location_label,
    is_remote,
)
from .price import PRICE_RULES, extract_price

__all__ = [
    "PRICE_RULES",
    "extract_price",
    "LocationMatch",
    "LocationMatchType",
    "classify_location",
    "extract_location_label",
    "is_remote",
    "DetectedKeyword",
    "detect_keywords",
    "group_by_category",
]
