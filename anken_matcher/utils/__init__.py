"""Utility helpers."""

from .text import build_full_text, format_yen, parse_man_yen, parse_yen

__all__ = ["build_full_text", "format_yen", "parse_man_yen", "parse_yen"]
