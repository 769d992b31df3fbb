"""Turn a skill-sheet analysis reply into a SkillProfile.

The reply is expected to be the JSON object

    {"summary": "...", "skills": ["Java", ...], "yearsOfExperience": {"Java": 5, "Go": "unknown"}}

optionally wrapped in Markdown code fences. Anything that does not parse or
validate yields a default profile instead of an error.
"""

import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from anken_matcher.domain.models import SkillProfile

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "スキルシートを解析しました"
DEFAULT_SUMMARY = "スキル情報を解析しました"
UNKNOWN_YEARS = "unknown"

_CODE_FENCE = re.compile(r"```(?:json)?\n?")


def strip_code_fences(response_text: str) -> str:
    return _CODE_FENCE.sub("", response_text).strip()


def _clean_years(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        return {}
    cleaned: Dict[str, Any] = {}
    for skill, years in value.items():
        if isinstance(years, bool) or not isinstance(skill, str):
            continue
        if isinstance(years, (int, float)):
            cleaned[skill] = float(years)
        elif isinstance(years, str) and years.strip() == UNKNOWN_YEARS:
            cleaned[skill] = UNKNOWN_YEARS
    return cleaned


def fallback_profile(raw_text: str) -> SkillProfile:
    return SkillProfile(summary=FALLBACK_SUMMARY, skills=[], years_of_experience={}, raw_text=raw_text)


def parse_skill_profile_response(response_text: str, raw_text: str) -> SkillProfile:
    """Parse an analysis reply, falling back to a default profile on failure.

    Args:
        response_text: Reply text, JSON optionally inside code fences
        raw_text: Original skill-sheet text, kept on the profile

    Returns:
        Parsed profile; non-string skills are dropped
    """
    try:
        parsed = json.loads(strip_code_fences(response_text or ""))
    except json.JSONDecodeError as e:
        logger.warning(
            f"Skill profile reply is not valid JSON: {e}",
            extra={"event": "skills.parse.fallback", "reason": "invalid_json"},
        )
        return fallback_profile(raw_text)

    if not isinstance(parsed, dict):
        logger.warning(
            "Skill profile reply is not a JSON object",
            extra={"event": "skills.parse.fallback", "reason": "not_an_object"},
        )
        return fallback_profile(raw_text)

    summary = parsed.get("summary")
    try:
        return SkillProfile(
            summary=summary if isinstance(summary, str) else DEFAULT_SUMMARY,
            skills=parsed.get("skills"),
            years_of_experience=_clean_years(
                parsed.get("yearsOfExperience", parsed.get("years_of_experience"))
            ),
            raw_text=raw_text,
        )
    except ValidationError as e:
        logger.warning(
            f"Skill profile reply failed validation: {e.error_count()} error(s)",
            extra={"event": "skills.parse.fallback", "reason": "validation"},
        )
        return fallback_profile(raw_text)
