"""Scoring engine: evaluates one listing against a search condition.

Stages run in a fixed order and the price and remarks stages can end
evaluation early with an exclusion:

1. Price (exclusion on unit mismatch or below minimum, bonus above minimum)
2. Location (bonus or penalty, never exclusion)
3. Remarks (exclusion on any NG keyword, otherwise additive bonus)
4. Skills (only with a skill profile)
5. Keywords (only without a skill profile)
6. Clamp to [0, 100]
"""

import math
import re
from typing import List, Optional, Tuple, Union

from anken_matcher.domain.models import ExtractedPrice, Listing, SearchCondition, SkillProfile
from anken_matcher.extraction.keywords import detect_keywords
from anken_matcher.extraction.location import (
    LocationMatch,
    LocationMatchType,
    classify_location,
    extract_location_label,
)
from anken_matcher.extraction.price import extract_price
from anken_matcher.logging import get_logger
from anken_matcher.utils.text import format_yen

from .explanation import build_condition_badges, build_match_reason, build_match_reason_detail
from .models import (
    AnkenResult,
    ExcludedAnken,
    ExcludeReason,
    MatchFacts,
    WarningType,
)
from .remarks import RemarksMatcher

logger = get_logger(__name__, component="engine")

BASE_SCORE = 50
MAX_PRICE_BONUS = 20
LOCATION_EXCLUDED_PENALTY = 30
LOCATION_WARNING_PENALTY = 10
REMOTE_BONUS = 5
EXACT_LOCATION_BONUS = 10
SKILL_BONUS = 5
KEYWORD_BONUS = 2
MAX_KEYWORD_BONUS = 10

PRICE_UNKNOWN_MESSAGE = "単価が案件本文から確認できませんでした"

ListingOutcome = Union[AnkenResult, ExcludedAnken]


def price_bonus(price: int, min_price: float) -> int:
    """Bonus for exceeding the requested minimum: 1 point per percent, capped at 20."""
    return min(MAX_PRICE_BONUS, math.floor((price - min_price) / min_price * 100))


def skill_pattern(skill: str) -> re.Pattern:
    """Compile a skill as a case-insensitive pattern, literally if it is not a valid regex."""
    try:
        return re.compile(skill, re.IGNORECASE)
    except re.error:
        return re.compile(re.escape(skill), re.IGNORECASE)


def split_skills(skills: List[str], text: str) -> Tuple[List[str], List[str]]:
    """Partition profile skills into (found in text, not found)."""
    matched, unmatched = [], []
    for skill in skills:
        if skill_pattern(skill).search(text):
            matched.append(skill)
        else:
            unmatched.append(skill)
    return matched, unmatched


class ScoringEngine:
    """Scores listings and explains the score.

    The engine keeps no per-run state, so one instance can evaluate any number
    of listings, from any number of threads.
    """

    def __init__(self, remarks_matcher: Optional[RemarksMatcher] = None):
        self.remarks_matcher = remarks_matcher or RemarksMatcher()

    def evaluate(
        self,
        listing: Listing,
        condition: SearchCondition,
        skill_profile: Optional[SkillProfile] = None,
    ) -> ListingOutcome:
        """Evaluate one listing.

        Returns:
            ExcludedAnken when an exclusion rule fires, otherwise AnkenResult
        """
        text = listing.full_text
        warnings: List[WarningType] = []
        warning_messages: List[str] = []
        score = BASE_SCORE

        # Stage 1: price
        price = extract_price(text)
        if condition.has_price_rule:
            if not price.found:
                warnings.append(WarningType.PRICE_UNKNOWN)
                warning_messages.append(PRICE_UNKNOWN_MESSAGE)
            elif price.price_type != condition.price_type:
                return self._exclude(
                    listing,
                    ExcludeReason.PRICE_MISMATCH,
                    f"単価種別が一致しません（案件: {price.price_type.label}, "
                    f"条件: {condition.price_type.label}）",
                )
            elif price.price < condition.min_price:
                return self._exclude(
                    listing,
                    ExcludeReason.PRICE_MISMATCH,
                    f"単価が最低条件を下回ります（案件: {format_yen(price.price)}円, "
                    f"条件: {format_yen(condition.min_price)}円以上）",
                )
            else:
                score += price_bonus(price.price, condition.min_price)

        # Stage 2: location
        location = classify_location(condition.location, text)
        location_label = extract_location_label(text)
        score += self._apply_location(location, warnings, warning_messages)

        # Stage 3: remarks
        remarks = self.remarks_matcher.evaluate(condition.remarks, text)
        if remarks.is_ng:
            return self._exclude(
                listing,
                ExcludeReason.REMARKS_NG,
                f"備考のNGキーワードに合致しました: {', '.join(remarks.ng_matched)}",
            )
        score += remarks.score

        # Stage 4: skills
        matched_skills: List[str] = []
        unmatched_skills: List[str] = []
        if skill_profile is not None:
            matched_skills, unmatched_skills = split_skills(skill_profile.skills, text)
            score += SKILL_BONUS * len(matched_skills)

        # Stage 5: keywords
        keywords = detect_keywords(text)
        if skill_profile is None:
            score += min(MAX_KEYWORD_BONUS, KEYWORD_BONUS * len(keywords))

        score = max(0, min(100, score))

        facts = MatchFacts(
            condition=condition,
            skill_profile=skill_profile,
            score=score,
            price=price,
            location=location,
            location_label=location_label,
            remarks=remarks,
            keywords=keywords,
            matched_skills=matched_skills,
            unmatched_skills=unmatched_skills,
        )
        return self._build_result(listing, facts, warnings, warning_messages)

    @staticmethod
    def _apply_location(
        location: LocationMatch, warnings: List[WarningType], warning_messages: List[str]
    ) -> int:
        if location.match == LocationMatchType.EXCLUDED:
            warnings.append(WarningType.LOCATION_OUT_OF_RANGE)
            if location.message:
                warning_messages.append(location.message)
            return -LOCATION_EXCLUDED_PENALTY
        if location.match == LocationMatchType.WARNING:
            warnings.append(WarningType.LOCATION_OUT_OF_RANGE)
            if location.message:
                warning_messages.append(location.message)
            return -LOCATION_WARNING_PENALTY
        if location.match == LocationMatchType.UNKNOWN:
            warnings.append(WarningType.LOCATION_UNKNOWN)
            return 0
        if location.match == LocationMatchType.REMOTE:
            return REMOTE_BONUS
        if location.match == LocationMatchType.EXACT:
            return EXACT_LOCATION_BONUS
        return 0

    @staticmethod
    def _exclude(listing: Listing, reason: ExcludeReason, message: str) -> ExcludedAnken:
        logger.debug(
            f"Listing excluded: {listing.id}",
            extra={
                "event": "matching.listing.excluded",
                "listing_id": listing.id,
                "reason": reason.value,
            },
        )
        return ExcludedAnken(
            id=listing.id,
            name=listing.name,
            full_text=listing.full_text,
            exclude_reason=reason,
            exclude_reason_message=message,
        )

    @staticmethod
    def _build_result(
        listing: Listing,
        facts: MatchFacts,
        warnings: List[WarningType],
        warning_messages: List[str],
    ) -> AnkenResult:
        price: ExtractedPrice = facts.price
        logger.debug(
            f"Listing scored: {listing.id}",
            extra={
                "event": "matching.listing.scored",
                "listing_id": listing.id,
                "score": facts.score,
                "location_match": facts.location.match.value,
                "warning_count": len(warnings),
            },
        )
        return AnkenResult(
            id=listing.id,
            name=listing.name,
            full_text=listing.full_text,
            score=facts.score,
            warnings=warnings,
            warning_messages=warning_messages,
            extracted_location=facts.location_label,
            extracted_price_type=price.price_type,
            extracted_price=price.price,
            match_reason=build_match_reason(facts),
            match_reason_detail=build_match_reason_detail(facts),
            condition_badges=build_condition_badges(facts),
        )
