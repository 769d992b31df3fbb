"""Scoring and explanation of listings against a search condition.

This module provides:
- ScoringEngine: per-listing scoring with exclusion rules
- RemarksMatcher: free-text remarks matching with synonym expansion
- build_match_reason / build_match_reason_detail / build_condition_badges
- Result models (AnkenResult, ExcludedAnken, MatchResult, ...)
"""

from .engine import ScoringEngine
from .explanation import build_condition_badges, build_match_reason, build_match_reason_detail
from .models import (
    AnkenResult,
    BadgeStatus,
    ConditionBadge,
    ExcludedAnken,
    ExcludeReason,
    MatchFacts,
    MatchResult,
    RemarksMatchResult,
    WarningType,
)
from .remarks import RemarksMatcher, tokenize_remarks

__all__ = [
    "ScoringEngine",
    "RemarksMatcher",
    "tokenize_remarks",
    "build_match_reason",
    "build_match_reason_detail",
    "build_condition_badges",
    "AnkenResult",
    "BadgeStatus",
    "ConditionBadge",
    "ExcludedAnken",
    "ExcludeReason",
    "MatchFacts",
    "MatchResult",
    "RemarksMatchResult",
    "WarningType",
]
