"""Integration tests for configuration module."""

from pathlib import Path

import pytest

from anken_matcher.config import (
    AppConfig,
    ConfigurationError,
    load_config,
    load_environment_config,
    read_yaml_file,
)
from anken_matcher.config.duration import DurationParseError, parse_duration, validate_duration_range
from anken_matcher.config.validators import check_for_warnings

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables the loader reads."""
    for name in ("GOOGLE_SHEET_URL", "LOG_LEVEL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, clean_env):
        """Test loading a valid configuration file."""
        app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.source.url.startswith("https://docs.google.com/spreadsheets/d/")
        assert app_config.cache.ttl == "10m"
        assert app_config.cache.ttl_seconds == 600
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert app_config.advanced.http_request_timeout == 20
        assert app_config.advanced.user_agent == "AnkenMatcherTest/1.0"
        assert env_config.environment == "local"

    def test_load_minimal_config(self, clean_env):
        """Test loading a minimal configuration with defaults."""
        with pytest.warns(UserWarning, match="source.url is not set"):
            app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.source.url is None
        assert app_config.cache.ttl_seconds == 300
        assert app_config.logging.level == "INFO"  # Default
        assert app_config.logging.format == "key-value"  # Default
        assert app_config.advanced.http_request_timeout == 30  # Default

    def test_load_iso8601_duration_config(self, clean_env):
        """Test loading config with ISO-8601 duration format."""
        app_config, _ = load_config(FIXTURES_DIR / "iso8601_duration_config.yaml")

        assert app_config.cache.ttl == "PT15M"
        assert app_config.cache.ttl_seconds == 900

    def test_config_file_not_found(self, clean_env):
        """Test error when config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value).lower()

    def test_default_location_not_found(self, clean_env, tmp_path, monkeypatch):
        """Test error listing the default locations when none exists."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            load_config()

        assert "config.example.yaml" in str(exc_info.value)
        assert len(exc_info.value.errors) == 2

    def test_default_location_is_used(self, clean_env, tmp_path, monkeypatch):
        """Test that ./config.yaml is picked up without --config."""
        (tmp_path / "config.yaml").write_text("source:\n  url: listings.csv\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config.source.url == "listings.csv"

    def test_invalid_yaml_syntax(self, tmp_path, clean_env):
        """Test error when YAML syntax is invalid."""
        invalid_yaml = tmp_path / "invalid.yaml"
        invalid_yaml.write_text("source:\n  url: 'test\n    invalid yaml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(invalid_yaml)

        assert "parse" in str(exc_info.value).lower()

    def test_empty_file(self, tmp_path, clean_env):
        """Test error when the config file is empty."""
        empty = tmp_path / "empty.yaml"
        empty.write_text("")

        with pytest.raises(ConfigurationError, match="empty"):
            load_config(empty)

    def test_top_level_must_be_mapping(self, tmp_path):
        """Test error when the YAML document is a list."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            read_yaml_file(path)


class TestConfigurationValidation:
    """Test configuration validation rules."""

    def test_cache_ttl_too_short(self, clean_env):
        """Test error when the cache TTL is below the minimum."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_cache_ttl.yaml")

        error_msg = str(exc_info.value)
        assert "cache -> ttl" in error_msg
        assert "short" in error_msg.lower()

    def test_invalid_log_level(self, clean_env):
        """Test error when the log level is not a known level."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_log_level.yaml")

        assert "logging -> level" in str(exc_info.value)

    def test_timeout_out_of_range(self):
        """Test that the HTTP timeout is bounded."""
        with pytest.raises(ValueError):
            AppConfig.model_validate({"advanced": {"http_request_timeout": 1}})

    def test_blank_user_agent(self):
        """Test that a whitespace-only user agent is rejected."""
        with pytest.raises(ValueError):
            AppConfig.model_validate({"advanced": {"user_agent": "   "}})

    def test_blank_source_url_is_unset(self):
        """Test that a blank source.url counts as absent."""
        app_config = AppConfig.model_validate({"source": {"url": "  "}})

        assert app_config.source.url is None


class TestConfigurationWarnings:
    """Test non-fatal configuration warnings."""

    def test_missing_source_url(self):
        warnings = check_for_warnings({"cache": {"ttl": "5m"}})

        assert any("source.url" in w for w in warnings)

    def test_long_cache_ttl(self):
        warnings = check_for_warnings({"source": {"url": "a.csv"}, "cache": {"ttl": "2h"}})

        assert warnings == ["Long cache.ttl (2h) may serve stale listings"]

    def test_large_timeout(self):
        warnings = check_for_warnings(
            {"source": {"url": "a.csv"}, "advanced": {"http_request_timeout": 200}}
        )

        assert len(warnings) == 1
        assert "http_request_timeout" in warnings[0]

    def test_unparseable_ttl_is_left_to_validation(self):
        assert check_for_warnings({"source": {"url": "a.csv"}, "cache": {"ttl": "soon"}}) == []


class TestDurationParsing:
    """Test duration parsing utilities."""

    def test_parse_human_readable_minutes(self):
        """Test parsing minutes in human-readable format."""
        assert parse_duration("5m") == 300
        assert parse_duration("15m") == 900

    def test_parse_human_readable_hours_and_days(self):
        """Test parsing hours and days in human-readable format."""
        assert parse_duration("1h") == 3600
        assert parse_duration("1d") == 86400

    def test_parse_human_readable_seconds(self):
        """Test parsing seconds in human-readable format."""
        assert parse_duration("30s") == 30

    def test_parse_human_readable_combined(self):
        """Test parsing combined units."""
        assert parse_duration("1h30m") == 5400

    def test_parse_iso8601(self):
        """Test parsing ISO-8601 durations."""
        assert parse_duration("PT5M") == 300
        assert parse_duration("PT1H30M") == 5400
        assert parse_duration("P1D") == 86400

    @pytest.mark.parametrize("value", ["invalid", "15x", "5m later", "", "0m"])
    def test_parse_invalid(self, value):
        """Test error on malformed, empty or zero durations."""
        with pytest.raises(DurationParseError):
            parse_duration(value)

    def test_validate_duration_range_too_short(self):
        """Test validation error when duration is too short."""
        with pytest.raises(DurationParseError) as exc_info:
            validate_duration_range(10)

        assert "Cache TTL too short" in str(exc_info.value)

    def test_validate_duration_range_too_long(self):
        """Test validation error when duration is too long."""
        with pytest.raises(DurationParseError) as exc_info:
            validate_duration_range(172800, max_seconds=86400)

        assert "long" in str(exc_info.value).lower()

    def test_validate_duration_range_valid(self):
        """Test validation passes for valid duration."""
        # Should not raise
        validate_duration_range(300)


class TestEnvironmentVariables:
    """Test environment variable loading and validation."""

    def test_defaults(self, clean_env):
        env_config = load_environment_config()

        assert env_config.sheet_url is None
        assert env_config.log_level is None
        assert env_config.environment == "local"

    def test_load_valid_environment_config(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SHEET_URL", " https://example.com/listings.csv ")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ENVIRONMENT", "staging")

        env_config = load_environment_config()

        assert env_config.sheet_url == "https://example.com/listings.csv"
        assert env_config.log_level == "DEBUG"
        assert env_config.environment == "staging"

    def test_invalid_values_are_collected(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SHEET_URL", "docs.google.com/spreadsheets")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2
        assert "LOG_LEVEL" in str(exc_info.value)
        assert "GOOGLE_SHEET_URL" in str(exc_info.value)


class TestConfigurationHelpers:
    """Test configuration helper methods."""

    def test_config_url_wins_over_environment(self):
        app_config = AppConfig.model_validate({"source": {"url": "sheet.csv"}})

        assert app_config.resolve_source_url("https://example.com/env.csv") == "sheet.csv"

    def test_environment_url_fallback(self):
        assert AppConfig().resolve_source_url("https://example.com/env.csv") == (
            "https://example.com/env.csv"
        )

    def test_error_message_lists_errors_and_suggestions(self):
        error = ConfigurationError("Broken", errors=["first", "second"], suggestions=["fix it"])

        assert str(error) == (
            "Broken\n\nValidation Errors:\n  1. first\n  2. second\n\nSuggestions:\n  - fix it"
        )
