"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

from .duration import DurationParseError, parse_duration


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Return warnings for settings that are valid but probably unintended."""
    warning_messages = []

    source = config_dict.get("source") or {}
    if isinstance(source, dict) and not source.get("url"):
        warning_messages.append(
            "source.url is not set; GOOGLE_SHEET_URL must be provided in the environment"
        )

    cache = config_dict.get("cache") or {}
    if isinstance(cache, dict) and isinstance(cache.get("ttl"), str):
        try:
            ttl_seconds = parse_duration(cache["ttl"])
        except DurationParseError:
            # Reported as a hard error by model validation
            ttl_seconds = None
        if ttl_seconds is not None and ttl_seconds > 3600:
            warning_messages.append(
                f"Long cache.ttl ({cache['ttl']}) may serve stale listings"
            )

    advanced = config_dict.get("advanced") or {}
    if isinstance(advanced, dict):
        timeout = advanced.get("http_request_timeout")
        if isinstance(timeout, int) and timeout > 120:
            warning_messages.append(
                f"Large http_request_timeout ({timeout}s) delays failure reporting"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages through the warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
