"""Data models for scoring results.

RemarksMatchResult and MatchFacts are internal working structures;
AnkenResult, ExcludedAnken and MatchResult are the records handed to callers
and serialise with the camelCase keys the web client expects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from anken_matcher.domain.models import ExtractedPrice, PriceType, SearchCondition, SkillProfile
from anken_matcher.extraction.keywords import DetectedKeyword
from anken_matcher.extraction.location import LocationMatch


class WarningType(str, Enum):
    LOCATION_OUT_OF_RANGE = "location_out_of_range"
    LOCATION_UNKNOWN = "location_unknown"
    PRICE_UNKNOWN = "price_unknown"


class ExcludeReason(str, Enum):
    PRICE_MISMATCH = "price_mismatch"
    REMARKS_NG = "remarks_ng"
    LOCATION_EXCLUDED = "location_excluded"


class BadgeStatus(str, Enum):
    MATCH = "match"
    WARN = "warn"
    INFO = "info"


@dataclass
class RemarksMatchResult:
    """Outcome of matching the candidate's remarks against one listing.

    Attributes:
        score: Additive score delta from positive and free-text matches
        ng_matched: NG keywords whose body pattern was found (hard exclusion)
        positive_matched: Positive table keywords found in the listing
        free_text_matched: Other remark tokens found in the listing
        free_text_unmatched: Remark tokens that need manual verification

    All lists are unique and keep the order in which remarks mention them.
    """

    score: int = 0
    ng_matched: List[str] = field(default_factory=list)
    positive_matched: List[str] = field(default_factory=list)
    free_text_matched: List[str] = field(default_factory=list)
    free_text_unmatched: List[str] = field(default_factory=list)

    @property
    def is_ng(self) -> bool:
        return bool(self.ng_matched)

    @property
    def matched_labels(self) -> List[str]:
        """Positive matches first, then free-text matches."""
        return self.positive_matched + self.free_text_matched


@dataclass
class MatchFacts:
    """Everything the engine learned about one listing.

    Explanations and badges are rendered from these facts only, so the
    itemised detail and the badges always describe the same signals.
    """

    condition: SearchCondition
    skill_profile: Optional[SkillProfile]
    score: int
    price: ExtractedPrice
    location: LocationMatch
    location_label: Optional[str]
    remarks: RemarksMatchResult
    keywords: List[DetectedKeyword] = field(default_factory=list)
    matched_skills: List[str] = field(default_factory=list)
    unmatched_skills: List[str] = field(default_factory=list)

    @property
    def price_requested(self) -> bool:
        return self.condition.has_price_rule

    @property
    def price_matched(self) -> bool:
        """Price was requested, found, and of the requested unit."""
        return (
            self.price_requested
            and self.price.found
            and self.price.price_type == self.condition.price_type
        )


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConditionBadge(_ResultModel):
    label: str
    status: BadgeStatus


class AnkenResult(_ResultModel):
    """A listing that passed every exclusion rule, with its score and explanation."""

    id: str
    name: str
    full_text: str
    score: int = Field(..., ge=0, le=100)
    warnings: List[WarningType] = Field(default_factory=list)
    warning_messages: List[str] = Field(default_factory=list)
    extracted_location: Optional[str] = None
    extracted_price_type: Optional[PriceType] = None
    extracted_price: Optional[int] = None
    match_reason: Optional[str] = None
    match_reason_detail: Optional[str] = None
    condition_badges: List[ConditionBadge] = Field(default_factory=list)


class ExcludedAnken(_ResultModel):
    """A listing removed by an exclusion rule. Exclusion is terminal for the run."""

    id: str
    name: str
    full_text: str
    exclude_reason: ExcludeReason
    exclude_reason_message: str


class MatchResult(_ResultModel):
    """Partitioned, ranked outcome of one matching run."""

    matched: List[AnkenResult] = Field(default_factory=list)
    excluded: List[ExcludedAnken] = Field(default_factory=list)
    total_count: int = 0
    skill_summary: Optional[str] = None
