"""Skill-sheet analysis helpers."""

from .parser import FALLBACK_SUMMARY, parse_skill_profile_response, strip_code_fences

__all__ = ["FALLBACK_SUMMARY", "parse_skill_profile_response", "strip_code_fences"]
