"""Text and number helpers for Japanese listing text.

This module provides:
- parse_yen / parse_man_yen: amount parsing that tolerates thousand separators
- format_yen: display formatting for amounts
- build_full_text: combined name + text used when exporting listings
"""

from typing import Optional, Union

# Half-width and full-width thousand separators
_SEPARATORS = str.maketrans("", "", ",，")


def parse_yen(raw: str) -> Optional[int]:
    """Parse an integer yen amount such as ``"1,600"`` or ``"330，000"``.

    Returns:
        The amount, or None when nothing numeric remains after stripping separators
    """
    cleaned = raw.translate(_SEPARATORS).strip()
    try:
        return int(cleaned)
    except ValueError:
        return None


def parse_man_yen(raw: str) -> Optional[int]:
    """Parse a 万円 (10,000 yen) amount such as ``"32"`` or ``"32.5"`` into yen.

    Fractions are rounded half-up to whole yen.
    """
    try:
        value = float(raw.translate(_SEPARATORS).strip())
    except ValueError:
        return None
    return int(value * 10000 + 0.5)


def format_yen(amount: Union[int, float]) -> str:
    """Format an amount with thousand separators (``2200`` -> ``"2,200"``)."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,}"


def build_full_text(name: str, full_text: str) -> str:
    """Combine a listing name and text for export without repeating the name.

    When the text already starts with the name it is returned on its own.
    """
    trimmed_name = name.strip()
    trimmed_text = full_text.strip()
    if trimmed_text.startswith(trimmed_name):
        return trimmed_text
    return f"{trimmed_name}\n{trimmed_text}"
