"""Domain models shared across the matching pipeline."""

from .models import ExtractedPrice, Listing, PriceType, SearchCondition, SkillProfile

__all__ = ["ExtractedPrice", "Listing", "PriceType", "SearchCondition", "SkillProfile"]
