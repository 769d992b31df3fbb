"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range

DEFAULT_CACHE_TTL = "5m"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SourceSettings(BaseModel):
    """Where the listing sheet lives."""

    url: Optional[str] = Field(
        None,
        description="Google Sheets URL, CSV export URL or local CSV path "
        "(falls back to GOOGLE_SHEET_URL)",
    )

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None


class CacheSettings(BaseModel):
    """In-memory listing cache settings."""

    ttl: str = Field(DEFAULT_CACHE_TTL, description="Freshness window for fetched listings")

    # Computed field
    ttl_seconds: Optional[int] = None

    @field_validator("ttl")
    @classmethod
    def validate_ttl(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def compute_ttl_seconds(self):
        self.ttl_seconds = parse_duration(self.ttl)
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """HTTP settings for fetching the listing sheet."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for sheet downloads (seconds)"
    )
    user_agent: str = Field(
        "AnkenMatcher/0.1",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for Anken Matcher."""

    source: SourceSettings = Field(default_factory=SourceSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="HTTP settings"
    )

    def resolve_source_url(self, env_url: Optional[str] = None) -> Optional[str]:
        """Config file URL first, then the GOOGLE_SHEET_URL value."""
        return self.source.url or env_url
