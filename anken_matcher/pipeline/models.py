"""Data models for matching run tracking."""

from dataclasses import dataclass


@dataclass
class MatchRunStats:
    """
    Statistics for a single matching run.

    Attributes:
        run_id: Identifier attached to every log record of the run
        listing_count: Listings evaluated
        matched_count: Listings that passed every exclusion rule
        excluded_count: Listings removed by an exclusion rule
        duration_seconds: Wall time of the run
        source_malformed: Whether the listing sheet was malformed and skipped
    """

    run_id: str
    listing_count: int = 0
    matched_count: int = 0
    excluded_count: int = 0
    duration_seconds: float = 0.0
    source_malformed: bool = False

    def to_log_fields(self) -> dict:
        return {
            "listing_count": self.listing_count,
            "matched_count": self.matched_count,
            "excluded_count": self.excluded_count,
            "duration_ms": int(self.duration_seconds * 1000),
            "source_malformed": self.source_malformed,
        }
