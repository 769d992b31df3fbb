"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        sheet_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.sheet_url = sheet_url
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """Load and validate environment variables.

    All variables are optional:
    - GOOGLE_SHEET_URL: listing sheet used when the config file sets no source.url
    - LOG_LEVEL: overrides the config file log level
    - ENVIRONMENT: label attached to log records (default: local)

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    sheet_url = (os.getenv("GOOGLE_SHEET_URL") or "").strip() or None
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if sheet_url and not (
        sheet_url.startswith("http://") or sheet_url.startswith("https://")
    ):
        errors.append(
            f"Invalid GOOGLE_SHEET_URL: '{sheet_url}'. Must be an http(s) URL."
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your values",
                "Use the sharing URL of the listing spreadsheet for GOOGLE_SHEET_URL",
            ],
        )

    return EnvironmentConfig(
        sheet_url=sheet_url,
        log_level=log_level.upper() if log_level else None,
        environment=environment,
    )
