"""Command-line entry point for Anken Matcher."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from anken_matcher.config.environment import EnvironmentConfig
from anken_matcher.config.exceptions import ConfigurationError
from anken_matcher.config.loader import format_validation_errors, load_config, read_yaml_file
from anken_matcher.config.models import AppConfig
from anken_matcher.domain.models import SearchCondition, SkillProfile
from anken_matcher.logging import get_logger
from anken_matcher.logging.config import configure_logging
from anken_matcher.pipeline import MatchingPipeline
from anken_matcher.reporting import EXPORT_TEMPLATE, ReportRenderer, ReportRenderError
from anken_matcher.skills import parse_skill_profile_response
from anken_matcher.sources import ListingCache, ListingStore, SheetSource, SourceError

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI flag > LOG_LEVEL > config file > INFO.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def load_request(path: Path) -> Tuple[SearchCondition, Optional[SkillProfile]]:
    """
    Read a matching request file.

    The file is a YAML mapping with a ``condition`` section and an optional
    ``skill_profile``. The skill profile may be a mapping, or the raw text of a
    skill-sheet analysis reply which is parsed leniently.

    Raises:
        ConfigurationError: If the file cannot be read or the skill profile
            mapping is invalid
    """
    data: Dict[str, Any] = read_yaml_file(path)
    condition_data = data.get("condition") or {}
    if not isinstance(condition_data, dict):
        raise ConfigurationError(
            f"'condition' in {path} must be a mapping",
            suggestions=["See request.example.yaml"],
        )
    # Unreadable values in a condition degrade to "absent" rather than failing
    condition = SearchCondition.model_validate(condition_data)

    profile_data = data.get("skill_profile")
    if profile_data is None:
        return condition, None
    if isinstance(profile_data, str):
        raw_text = data.get("skill_sheet_text") or ""
        return condition, parse_skill_profile_response(profile_data, str(raw_text))
    try:
        return condition, SkillProfile.model_validate(profile_data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid skill_profile in {path}",
            errors=format_validation_errors(e),
        ) from e


def build_pipeline(
    app_config: AppConfig, env_config: EnvironmentConfig, source_override: Optional[str]
) -> MatchingPipeline:
    source = SheetSource(
        timeout=app_config.advanced.http_request_timeout,
        user_agent=app_config.advanced.user_agent,
    )
    store = ListingStore(source, ListingCache(ttl_seconds=app_config.cache.ttl_seconds))
    source_ref = source_override or app_config.resolve_source_url(env_config.sheet_url)
    return MatchingPipeline(store=store, source_ref=source_ref)


def main(argv: Optional[list] = None) -> int:
    """
    Run one matching request and print the result.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()
    parser = argparse.ArgumentParser(
        description="Anken Matcher - rank job listings against a candidate's conditions"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--request",
        type=Path,
        required=True,
        help="YAML file with the search condition and optional skill profile",
    )
    parser.add_argument(
        "--source",
        default=None,
        help="Listing sheet URL or CSV path (overrides config and GOOGLE_SHEET_URL)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        default="text",
        choices=["text", "json", "export"],
        help="Output format: report text, JSON, or matched listing texts for export (default: text)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        condition, skill_profile = load_request(args.request)
        pipeline = build_pipeline(app_config, env_config, args.source)

        logger.info(
            "Anken Matcher starting",
            extra={
                "event": "service.starting",
                "request_path": str(args.request),
                "cache_ttl_seconds": app_config.cache.ttl_seconds,
                "output_format": args.output_format,
            },
        )

        result = pipeline.run_matching(condition, skill_profile)

        if args.output_format == "json":
            print(result.model_dump_json(by_alias=True, indent=2))
        elif args.output_format == "export":
            print(ReportRenderer(template_name=EXPORT_TEMPLATE).render(result, condition), end="")
        else:
            print(ReportRenderer().render(result, condition), end="")

        logger.info(
            f"Matching completed: {result.total_count} matched, {len(result.excluded)} excluded",
            extra={
                "event": "service.completed",
                "duration_seconds": round(time.time() - start_time, 3),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except SourceError as e:
        print(f"Listing source error: {e}", file=sys.stderr)
        logger.error(
            f"Listing source error: {e}",
            extra={"event": "source.error", "error_type": type(e).__name__},
        )
        return 2
    except ReportRenderError as e:
        print(f"Report error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
