"""Remote-work detection and location classification for listings."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

REMOTE_PATTERNS = (
    re.compile(r"フルリモ|フルリモート|完全リモート|在宅.*可|リモート.*可|テレワーク"),
    re.compile(r"remote.*ok|fully\s*remote", re.IGNORECASE),
)

# A condition asking for remote work
REMOTE_REQUEST_PATTERN = re.compile(r"リモート|remote", re.IGNORECASE)

LOCATION_LABEL_PATTERNS = (
    re.compile(r"勤務地\s*[:：]\s*(.+?)(?:\n|$)"),
    re.compile(r"就業場所\s*[:：]\s*(.+?)(?:\n|$)"),
    re.compile(r"作業場所\s*[:：]\s*(.+?)(?:\n|$)"),
    re.compile(r"稼働\s*[:：]\s*(.+?)(?:\n|$)"),
)
MAX_LOCATION_LABEL_LENGTH = 50

PREFECTURES = ("東京", "神奈川", "大阪", "愛知", "福岡", "北海道", "京都", "兵庫", "埼玉", "千葉")

REGIONS = {
    "関東": ("東京", "神奈川", "埼玉", "千葉", "茨城", "栃木", "群馬"),
    "関西": ("大阪", "京都", "兵庫", "奈良", "滋賀", "和歌山"),
}

REMOTE_WARNING_MESSAGE = "リモート希望ですが、出社が必要な可能性があります"


class LocationMatchType(str, Enum):
    """How a listing's location relates to the requested one."""

    REMOTE = "remote"
    EXACT = "exact"
    IN_RANGE = "in_range"
    WARNING = "warning"
    UNKNOWN = "unknown"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class LocationMatch:
    match: LocationMatchType
    message: Optional[str] = None


def is_remote(text: str) -> bool:
    """True when the listing declares remote work."""
    return any(pattern.search(text) for pattern in REMOTE_PATTERNS)


def extract_location_label(text: str) -> Optional[str]:
    """Pull a free-text location label (勤務地：... etc.) from listing text.

    Label patterns are tried in priority order; the first capture that is
    non-empty and shorter than 50 characters wins.
    """
    for pattern in LOCATION_LABEL_PATTERNS:
        match = pattern.search(text)
        if match:
            label = match.group(1).strip()
            if 0 < len(label) < MAX_LOCATION_LABEL_LENGTH:
                return label
    return None


def classify_location(condition_location: Optional[str], text: str) -> LocationMatch:
    """Classify a listing's location against the requested location.

    Order of evaluation:
    1. No requested location is neutral, remote listings included
    2. A remote request is met by a remote listing, otherwise a warning
    3. A remote listing satisfies any other requested location
    4. A shared prefecture is an exact match
    5. A listing inside a requested region (関東/関西) is in range
    6. Anything else is unknown
    """
    if not condition_location:
        return LocationMatch(LocationMatchType.IN_RANGE)

    remote = is_remote(text)
    if REMOTE_REQUEST_PATTERN.search(condition_location):
        if remote:
            return LocationMatch(LocationMatchType.REMOTE)
        return LocationMatch(LocationMatchType.WARNING, REMOTE_WARNING_MESSAGE)

    if remote:
        return LocationMatch(LocationMatchType.REMOTE)

    condition_lower = condition_location.lower()
    text_lower = text.lower()

    for prefecture in PREFECTURES:
        if prefecture in condition_lower and prefecture in text_lower:
            return LocationMatch(LocationMatchType.EXACT)

    for region, members in REGIONS.items():
        if region in condition_location and any(member in text_lower for member in members):
            return LocationMatch(LocationMatchType.IN_RANGE)

    return LocationMatch(LocationMatchType.UNKNOWN)
