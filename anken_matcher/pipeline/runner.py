"""Matching run orchestration: fetch listings, score each one, rank the results."""

import os
import threading
import time
from typing import List, Optional, Sequence
from uuid import uuid4

from anken_matcher.domain.models import Listing, SearchCondition, SkillProfile
from anken_matcher.logging import get_logger
from anken_matcher.logging.context import log_context
from anken_matcher.matching.engine import ScoringEngine
from anken_matcher.matching.models import AnkenResult, ExcludedAnken, MatchResult
from anken_matcher.sources.exceptions import SourceMalformed
from anken_matcher.sources.sheets import SheetSource
from anken_matcher.sources.store import ListingStore

from .models import MatchRunStats

logger = get_logger(__name__, component="pipeline")

SHEET_URL_ENV = "GOOGLE_SHEET_URL"


def match_listings(
    listings: Sequence[Listing],
    condition: SearchCondition,
    skill_profile: Optional[SkillProfile] = None,
    engine: Optional[ScoringEngine] = None,
) -> MatchResult:
    """Score every listing and partition the outcomes.

    Each listing lands in exactly one of ``matched`` or ``excluded``.
    ``matched`` is ordered by descending score; equal scores keep the sheet
    order.
    """
    engine = engine or ScoringEngine()
    matched: List[AnkenResult] = []
    excluded: List[ExcludedAnken] = []

    for listing in listings:
        with log_context(listing_id=listing.id):
            outcome = engine.evaluate(listing, condition, skill_profile)
        if isinstance(outcome, ExcludedAnken):
            excluded.append(outcome)
        else:
            matched.append(outcome)

    matched.sort(key=lambda result: -result.score)
    return MatchResult(
        matched=matched,
        excluded=excluded,
        total_count=len(matched),
        skill_summary=skill_profile.summary if skill_profile is not None else None,
    )


class MatchingPipeline:
    """
    Runs one matching request end to end.

    The pipeline reads listings through the store (which owns the cache and
    the source), scores them with the engine and returns the ranked result.
    It holds no per-run state and may be shared between threads.
    """

    def __init__(
        self,
        store: ListingStore,
        source_ref: Optional[str],
        engine: Optional[ScoringEngine] = None,
    ):
        """
        Initialize the matching pipeline.

        Args:
            store: Cached listing store
            source_ref: Listing source reference (sheet URL or CSV path)
            engine: Scoring engine; a default one if omitted
        """
        self.store = store
        self.source_ref = source_ref
        self.engine = engine or ScoringEngine()

    def run_matching(
        self,
        condition: SearchCondition,
        skill_profile: Optional[SkillProfile] = None,
    ) -> MatchResult:
        """
        Match the current listings against ``condition``.

        Returns:
            MatchResult; empty when the listing sheet is malformed

        Raises:
            InvalidSourceReference: If no usable source reference is configured
            SourceUnavailable: If listings have to be fetched and cannot be
        """
        started = time.time()
        stats = MatchRunStats(run_id=uuid4().hex)

        with log_context(run_id=stats.run_id):
            logger.info(
                "Matching run started",
                extra={
                    "event": "matching.run.started",
                    "has_skill_profile": skill_profile is not None,
                    "has_price_rule": condition.has_price_rule,
                    "has_location": condition.location is not None,
                    "has_remarks": condition.remarks is not None,
                },
            )

            try:
                listings = self.store.fetch(self.source_ref)
            except SourceMalformed as e:
                logger.warning(
                    f"Listing sheet is malformed, continuing with no listings: {e}",
                    extra={"event": "matching.run.source_malformed", "row_count": e.row_count},
                )
                stats.source_malformed = True
                listings = []
            except Exception as e:
                logger.error(
                    f"Matching run failed: {e}",
                    extra={"event": "matching.run.failed", "error_type": type(e).__name__},
                )
                raise

            result = match_listings(listings, condition, skill_profile, engine=self.engine)

            stats.listing_count = len(listings)
            stats.matched_count = len(result.matched)
            stats.excluded_count = len(result.excluded)
            stats.duration_seconds = time.time() - started
            logger.info(
                "Matching run completed",
                extra={"event": "matching.run.completed", **stats.to_log_fields()},
            )
            return result


_default_pipeline: Optional[MatchingPipeline] = None
_default_lock = threading.Lock()


def _get_default_pipeline() -> MatchingPipeline:
    global _default_pipeline
    with _default_lock:
        if _default_pipeline is None:
            _default_pipeline = MatchingPipeline(store=ListingStore(SheetSource()), source_ref=None)
        return _default_pipeline


def run_matching(
    condition: SearchCondition,
    skill_profile: Optional[SkillProfile] = None,
    source_ref: Optional[str] = None,
) -> MatchResult:
    """Run matching with the process-wide default store.

    ``source_ref`` defaults to the GOOGLE_SHEET_URL environment variable. The
    listing cache is shared by every call in the process.
    """
    pipeline = _get_default_pipeline()
    ref = source_ref or os.environ.get(SHEET_URL_ENV, "")
    return MatchingPipeline(pipeline.store, ref, engine=pipeline.engine).run_matching(
        condition, skill_profile
    )
