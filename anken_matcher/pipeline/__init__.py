"""Pipeline orchestration for listing matching."""

from .models import MatchRunStats
from .runner import MatchingPipeline, match_listings, run_matching

__all__ = [
    "MatchingPipeline",
    "MatchRunStats",
    "match_listings",
    "run_matching",
]
