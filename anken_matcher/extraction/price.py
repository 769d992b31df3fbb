"""Rate extraction from listing text.

Listings state their rate in many overlapping ways ("時給：1,600円",
"単価：330,000円〜350,000円", "月額32万円", "日/12,000円＋税" ...). The text
often satisfies several patterns at once, so rules are evaluated strictly in
order and the first rule whose handler accepts the match wins. Reordering
PRICE_RULES changes results on ambiguous text.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from anken_matcher.domain.models import ExtractedPrice, PriceType
from anken_matcher.utils.text import parse_man_yen, parse_yen

# Amounts at or above this value are monthly, below it hourly
HOURLY_CEILING = 10_000
# Working days used to turn a daily rate into a monthly one
WORKDAYS_PER_MONTH = 20

_NUM = r"([0-9,，]+)"  # yen amount with optional thousand separators
_MAN = r"([0-9.]+)"  # 万円 amount, may be decimal
_RANGE = r"[〜～~\-−]"
_SLASH = r"[\/／]"
_COLON = r"[:：]"

Handler = Callable[[re.Match], Optional[ExtractedPrice]]


@dataclass(frozen=True)
class PriceRule:
    """One step of the cascade: a labelled pattern plus the handler for its match."""

    label: str
    pattern: re.Pattern
    handler: Handler

    def apply(self, text: str) -> Optional[ExtractedPrice]:
        match = self.pattern.search(text)
        if not match:
            return None
        return self.handler(match)


def _hourly(below_ceiling: bool = False) -> Handler:
    def handle(match: re.Match) -> Optional[ExtractedPrice]:
        value = parse_yen(match.group(1))
        if value is None or (below_ceiling and value >= HOURLY_CEILING):
            return None
        return ExtractedPrice(price=value, price_type=PriceType.HOURLY)

    return handle


def _monthly_yen(min_value: int = 0) -> Handler:
    def handle(match: re.Match) -> Optional[ExtractedPrice]:
        value = parse_yen(match.group(1))
        if value is None or value < min_value:
            return None
        return ExtractedPrice(price=value, price_type=PriceType.MONTHLY)

    return handle


def _monthly_man_yen(match: re.Match) -> Optional[ExtractedPrice]:
    value = parse_man_yen(match.group(1))
    if value is None:
        return None
    return ExtractedPrice(price=value, price_type=PriceType.MONTHLY)


def _monthly_from_daily(match: re.Match) -> Optional[ExtractedPrice]:
    daily = parse_yen(match.group(1))
    if daily is None:
        return None
    return ExtractedPrice(price=daily * WORKDAYS_PER_MONTH, price_type=PriceType.MONTHLY)


def _rule(label: str, pattern: str, handler: Handler) -> PriceRule:
    return PriceRule(label=label, pattern=re.compile(pattern), handler=handler)


PRICE_RULES = (
    # --- hourly ---
    # 単価：～2,400円税込
    _rule("rate_upper_bound_only", rf"単価\s*{_COLON}\s*[〜～~]\s*{_NUM}\s*円", _hourly(below_ceiling=True)),
    # 時給制：2,000~2,400円
    _rule("hourly_system_range", rf"時給制\s*{_COLON}\s*{_NUM}\s*{_RANGE}\s*{_NUM}\s*円", _hourly()),
    # 時給：1,600円〜2,000円
    _rule("hourly_colon", rf"時給\s*{_COLON}\s*{_NUM}\s*円", _hourly()),
    # 2,300円~2,500円/時給
    _rule(
        "hourly_postfix",
        rf"{_NUM}\s*円\s*[〜～~\-−\/]\s*(?:[0-9,，]+\s*円\s*[〜～~\-−\/]\s*)?(?:時給|時間|h)",
        _hourly(below_ceiling=True),
    ),
    # 1,600円 / 時
    _rule("hourly_per_hour_suffix", rf"{_NUM}\s*円\s*{_SLASH}\s*時", _hourly(below_ceiling=True)),
    # 時給2,200円
    _rule("hourly_prefix", rf"時給\s*{_NUM}\s*円", _hourly()),
    # ■単価：2,300円~2,500円/時
    _rule(
        "rate_range_per_hour",
        rf"単価\s*{_COLON}\s*{_NUM}\s*円\s*{_RANGE}\s*{_NUM}\s*円\s*{_SLASH}\s*時",
        _hourly(below_ceiling=True),
    ),
    # ■単価：2,300円~2,500円 (small values under a rate label are hourly)
    _rule(
        "rate_range_small",
        rf"単価\s*{_COLON}\s*{_NUM}\s*円\s*{_RANGE}\s*{_NUM}\s*円",
        _hourly(below_ceiling=True),
    ),
    # --- daily ---
    # 日/12,000円＋税
    _rule("daily_rate", rf"日\s*{_SLASH}\s*{_NUM}\s*円", _monthly_from_daily),
    # --- compensation section ---
    # 報酬\n...\n2,200円~2,600円
    _rule(
        "compensation_section",
        rf"(?:報酬|給与)\s*\n(?:.*\n)*?.*?{_NUM}\s*円\s*{_RANGE}\s*{_NUM}\s*円",
        _hourly(below_ceiling=True),
    ),
    # 報酬\n①トッププレイヤー枠 2,200円~2,600円
    _rule(
        "compensation_numbered_item",
        rf"(?:報酬|給与)[^\n]*\n[^\n]*?{_NUM}\s*円\s*{_RANGE}\s*{_NUM}\s*円",
        _hourly(below_ceiling=True),
    ),
    # --- monthly ---
    # 税抜32万円（フルタイム）
    _rule("tax_excluded_man_yen", rf"税抜\s*{_MAN}\s*万円", _monthly_man_yen),
    # 単価：32〜35万円
    _rule("rate_man_yen_range", rf"単価\s*{_COLON}\s*{_MAN}\s*{_RANGE}\s*{_MAN}\s*万円", _monthly_man_yen),
    # 32〜35万円目安
    _rule("man_yen_range", rf"{_MAN}\s*{_RANGE}\s*{_MAN}\s*万円", _monthly_man_yen),
    # 単価：330,000円〜350,000円（スキル見合い）
    _rule(
        "rate_yen_range",
        rf"単価\s*{_COLON}\s*{_NUM}\s*円\s*{_RANGE}\s*{_NUM}\s*円",
        _monthly_yen(min_value=HOURLY_CEILING),
    ),
    # 単価：330,000円（目安）
    _rule("rate_yen_single", rf"単価\s*{_COLON}\s*{_NUM}\s*円", _monthly_yen(min_value=HOURLY_CEILING)),
    # 月額32万円
    _rule("monthly_man_yen", rf"月額\s*{_MAN}\s*万円", _monthly_man_yen),
    # 月額400,000円
    _rule("monthly_yen", rf"月額\s*{_NUM}\s*円", _monthly_yen(min_value=HOURLY_CEILING)),
    # 32万円/月
    _rule("man_yen_per_month", rf"{_MAN}\s*万円\s*{_SLASH}\s*月", _monthly_man_yen),
    # 330,000円/月
    _rule("yen_per_month", rf"{_NUM}\s*円\s*{_SLASH}\s*月", _monthly_yen(min_value=HOURLY_CEILING)),
)

NO_PRICE = ExtractedPrice()


def extract_price(text: str) -> ExtractedPrice:
    """Return the rate stated in ``text`` using the first rule that accepts it.

    Example:
        >>> extract_price("時給：1,600円")
        ExtractedPrice(price=1600, price_type=<PriceType.HOURLY: 'hourly'>)
    """
    if not text:
        return NO_PRICE
    for rule in PRICE_RULES:
        result = rule.apply(text)
        if result is not None:
            return result
    return NO_PRICE


def match_price_rule(text: str) -> Optional[str]:
    """Label of the rule that decides ``text``, or None. Useful for diagnostics."""
    for rule in PRICE_RULES:
        if rule.apply(text) is not None:
            return rule.label
    return None
