"""Core domain models: listings, search conditions and skill profiles.

- Listing: one job/engagement record read from the listing sheet
- SearchCondition: the candidate's request; every field is optional
- SkillProfile: pre-computed summary of a candidate's skill sheet
- ExtractedPrice: rate and unit recovered from listing text
"""

from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PriceType(str, Enum):
    """Unit of a rate."""

    HOURLY = "hourly"
    MONTHLY = "monthly"

    @property
    def label(self) -> str:
        return "時給" if self is PriceType.HOURLY else "月額"

    @property
    def unit(self) -> str:
        return "円/時" if self is PriceType.HOURLY else "円/月"


class _CamelModel(BaseModel):
    # Accept both snake_case and the camelCase keys used by the web client
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Listing(_CamelModel):
    """A single listing as read from the sheet.

    ``id`` is derived from the sheet column (``anken_<column>``) and stays
    stable across refreshes as long as the column order does.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    full_text: str = ""


class SearchCondition(_CamelModel):
    """Candidate search request.

    Every field is optional and an absent field disables its rule. Values that
    cannot be interpreted are treated as absent instead of raising.
    """

    location: Optional[str] = None
    price_type: Optional[PriceType] = None
    min_price: Optional[float] = None
    work_hours: Optional[str] = None
    work_time_zone: Optional[str] = None
    start_date: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator("location", "work_hours", "work_time_zone", "start_date", "remarks", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("price_type", mode="before")
    @classmethod
    def coerce_price_type(cls, v):
        if isinstance(v, PriceType):
            return v
        if isinstance(v, str) and v.strip().lower() in {t.value for t in PriceType}:
            return v.strip().lower()
        return None

    @field_validator("min_price", mode="before")
    @classmethod
    def coerce_min_price(cls, v):
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, str):
            v = v.replace(",", "").replace("，", "").strip()
            if not v:
                return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        if value != value or value < 0:
            return None
        return value

    @property
    def has_price_rule(self) -> bool:
        """True when both price type and a positive minimum are requested."""
        return self.price_type is not None and bool(self.min_price)


ExperienceValue = Union[float, Literal["unknown"]]


class SkillProfile(_CamelModel):
    """Structured skill-sheet summary produced outside the core."""

    summary: str = ""
    skills: List[str] = Field(default_factory=list)
    years_of_experience: Dict[str, ExperienceValue] = Field(default_factory=dict)
    raw_text: str = ""

    @field_validator("skills", mode="before")
    @classmethod
    def keep_string_skills(cls, v):
        if not isinstance(v, list):
            return []
        return [s.strip() for s in v if isinstance(s, str) and s.strip()]


class ExtractedPrice(BaseModel):
    """Rate recovered from listing text; both fields are None when nothing matched."""

    model_config = ConfigDict(frozen=True)

    price: Optional[int] = None
    price_type: Optional[PriceType] = None

    @property
    def found(self) -> bool:
        return self.price is not None and self.price_type is not None
