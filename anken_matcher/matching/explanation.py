"""Human-readable explanations and badges for scored listings.

Everything here is rendered from MatchFacts; nothing re-runs the matchers.
Three renderings of the same facts are produced:
- build_match_reason: short one-line reason for result cards
- build_match_reason_detail: itemised, multi-line explanation
- build_condition_badges: flat list of labelled status chips
"""

from typing import List, Optional

from anken_matcher.extraction.keywords import CATEGORY_ORDER, group_by_category
from anken_matcher.extraction.location import LocationMatchType
from anken_matcher.utils.text import format_yen

from .models import BadgeStatus, ConditionBadge, MatchFacts

MATCH_MARK = "✅"
WARN_MARK = "⚠️"
INFO_MARK = "ℹ️"

HIGH_SCORE = 70
LOW_SCORE = 40

MAX_REASON_REMARKS = 2
MAX_REASON_KEYWORDS = 2
MAX_LOCATION_REASON_CHARS = 10
MAX_DETAIL_MATCHED_SKILLS = 5
MAX_DETAIL_UNMATCHED_SKILLS = 3
MAX_MATCHED_REMARK_BADGES = 3
MAX_UNMATCHED_REMARK_BADGES = 2

REMOTE_LABEL = "フルリモート"
PRICE_UNKNOWN_LABEL = "単価要確認"
LOW_SCORE_CAUTION = "スコアが低いため、条件に完全にはマッチしていない可能性があります"


def _price_text(facts: MatchFacts) -> Optional[str]:
    if not facts.price.found:
        return None
    return f"{format_yen(facts.price.price)}{facts.price.price_type.unit}"


def _score_band_phrase(score: int) -> str:
    if score >= HIGH_SCORE:
        return "条件に適合しています"
    if score >= LOW_SCORE:
        return "部分的にマッチしています"
    return "参考情報として表示"


def _leading_keywords(facts: MatchFacts) -> List[str]:
    """One keyword per category, leading categories first, at most two."""
    grouped = group_by_category(facts.keywords)
    picked: List[str] = []
    for category in CATEGORY_ORDER:
        if category in grouped:
            picked.append(grouped[category][0])
            if len(picked) >= MAX_REASON_KEYWORDS:
                break
    return picked


def build_match_reason(facts: MatchFacts) -> str:
    """Short reason: the most salient matched signals joined with "・"."""
    parts: List[str] = []

    if facts.price_matched:
        parts.append(f"単価{_price_text(facts)}")

    if facts.location.match == LocationMatchType.REMOTE:
        parts.append(REMOTE_LABEL)
    elif facts.location.match == LocationMatchType.EXACT and facts.location_label:
        parts.append(facts.location_label[:MAX_LOCATION_REASON_CHARS])

    if facts.matched_skills:
        parts.append(f"スキル{len(facts.matched_skills)}項一致")

    remark_parts = []
    if facts.remarks.positive_matched:
        remark_parts.append(facts.remarks.positive_matched[0])
    if facts.remarks.free_text_matched:
        remark_parts.append(facts.remarks.free_text_matched[0])
    parts.extend(part for part in remark_parts[:MAX_REASON_REMARKS] if part not in parts)

    if facts.skill_profile is None:
        keywords = _leading_keywords(facts)
        if keywords:
            parts.append("・".join(keywords))

    if not parts:
        return _score_band_phrase(facts.score)
    return "・".join(parts)


def build_match_reason_detail(facts: MatchFacts) -> Optional[str]:
    """Itemised explanation, one line per fact. None when there is nothing to say."""
    lines: List[str] = []
    condition = facts.condition

    price_text = _price_text(facts)
    if facts.price_matched:
        minimum = f"{format_yen(condition.min_price)}{condition.price_type.unit}"
        lines.append(f"{MATCH_MARK} 単価: {price_text}（条件: {minimum}以上）")
    elif price_text:
        lines.append(f"{INFO_MARK} 単価: {price_text}")
    elif facts.price_requested:
        lines.append(f"{WARN_MARK} 単価: 案件本文から確認できませんでした")

    location = facts.location
    if location.match == LocationMatchType.REMOTE:
        lines.append(f"{MATCH_MARK} 勤務地: フルリモート対応")
    elif location.match == LocationMatchType.EXACT:
        label = facts.location_label or condition.location
        lines.append(f"{MATCH_MARK} 勤務地: {label}（希望地と一致）")
    elif location.match == LocationMatchType.IN_RANGE and condition.location:
        label = facts.location_label or "希望エリア内"
        lines.append(f"{MATCH_MARK} 勤務地: {label}（{condition.location}エリア内）")
    elif location.match in (LocationMatchType.WARNING, LocationMatchType.EXCLUDED):
        if location.message:
            lines.append(f"{WARN_MARK} 勤務地: {location.message}")
    elif location.match == LocationMatchType.UNKNOWN:
        label = facts.location_label or "記載なし"
        lines.append(f"{INFO_MARK} 勤務地: {label}（希望地との一致を要確認）")

    if facts.matched_skills:
        shown = "、".join(facts.matched_skills[:MAX_DETAIL_MATCHED_SKILLS])
        lines.append(f"{MATCH_MARK} スキルマッチ: {shown}")
    if facts.skill_profile is not None and facts.unmatched_skills:
        shown = "、".join(facts.unmatched_skills[:MAX_DETAIL_UNMATCHED_SKILLS])
        lines.append(f"{INFO_MARK} 未一致スキル: {shown}")

    for category, labels in group_by_category(facts.keywords).items():
        lines.append(f"{INFO_MARK} {category}: {'、'.join(labels)}")

    if facts.remarks.matched_labels:
        lines.append(f"{MATCH_MARK} 希望条件: {'、'.join(facts.remarks.matched_labels)}")
    if facts.remarks.free_text_unmatched:
        lines.append(f"{WARN_MARK} 要確認: {'、'.join(facts.remarks.free_text_unmatched)}")

    if facts.score < LOW_SCORE:
        lines.append(f"{WARN_MARK} {LOW_SCORE_CAUTION}")

    return "\n".join(lines) if lines else None


def build_condition_badges(facts: MatchFacts) -> List[ConditionBadge]:
    """Status chips mirroring the detail lines."""
    badges: List[ConditionBadge] = []

    price_text = _price_text(facts)
    if facts.price_matched:
        label = f"{facts.price.price_type.label}{format_yen(facts.price.price)}円"
        badges.append(ConditionBadge(label=label, status=BadgeStatus.MATCH))
    elif price_text:
        badges.append(ConditionBadge(label=price_text, status=BadgeStatus.INFO))
    elif facts.price_requested:
        badges.append(ConditionBadge(label=PRICE_UNKNOWN_LABEL, status=BadgeStatus.WARN))

    location = facts.location
    condition = facts.condition
    if location.match == LocationMatchType.REMOTE:
        badges.append(ConditionBadge(label=REMOTE_LABEL, status=BadgeStatus.MATCH))
    elif location.match == LocationMatchType.EXACT:
        label = (facts.location_label or condition.location)[:MAX_LOCATION_REASON_CHARS]
        badges.append(ConditionBadge(label=label, status=BadgeStatus.MATCH))
    elif location.match == LocationMatchType.IN_RANGE and condition.location:
        badges.append(ConditionBadge(label=f"{condition.location}エリア内", status=BadgeStatus.MATCH))
    elif location.match in (LocationMatchType.WARNING, LocationMatchType.EXCLUDED):
        badges.append(ConditionBadge(label="出社の可能性", status=BadgeStatus.WARN))
    elif location.match == LocationMatchType.UNKNOWN:
        badges.append(ConditionBadge(label="勤務地要確認", status=BadgeStatus.INFO))

    for label in facts.remarks.matched_labels[:MAX_MATCHED_REMARK_BADGES]:
        badges.append(ConditionBadge(label=label, status=BadgeStatus.MATCH))
    for label in facts.remarks.free_text_unmatched[:MAX_UNMATCHED_REMARK_BADGES]:
        badges.append(ConditionBadge(label=f"{label}（要確認）", status=BadgeStatus.WARN))

    return badges
