"""Plain-text report rendering for matching results using Jinja2.

The CLI prints this report, or the export template with one block per
matched listing; JSON output bypasses both.
"""

import logging
from typing import Any, Dict, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from anken_matcher.domain.models import SearchCondition
from anken_matcher.matching.models import BadgeStatus, MatchResult
from anken_matcher.matching.explanation import INFO_MARK, MATCH_MARK, WARN_MARK
from anken_matcher.utils.text import build_full_text, format_yen

logger = logging.getLogger(__name__)

EXPORT_TEMPLATE = "match_export.txt.j2"

BADGE_MARKS = {
    BadgeStatus.MATCH: MATCH_MARK,
    BadgeStatus.WARN: WARN_MARK,
    BadgeStatus.INFO: INFO_MARK,
}


class ReportRenderError(Exception):
    """Raised when the report template fails to load or render."""


def describe_condition(condition: SearchCondition) -> Dict[str, Optional[str]]:
    """Condition fields as display strings, None where the field is absent."""
    price = None
    if condition.has_price_rule:
        price = f"{condition.price_type.label} {format_yen(condition.min_price)}円以上"
    return {
        "location": condition.location,
        "price": price,
        "remarks": condition.remarks,
    }


def build_report_context(result: MatchResult, condition: SearchCondition) -> Dict[str, Any]:
    """Flatten a MatchResult into template variables."""
    matched = []
    for rank, anken in enumerate(result.matched, start=1):
        matched.append(
            {
                "rank": rank,
                "id": anken.id,
                "name": anken.name,
                "score": anken.score,
                "match_reason": anken.match_reason or "",
                "detail_lines": (anken.match_reason_detail or "").splitlines(),
                "badges": [f"{BADGE_MARKS[b.status]} {b.label}" for b in anken.condition_badges],
                "warning_messages": list(anken.warning_messages),
                "export_text": build_full_text(anken.name, anken.full_text),
            }
        )
    excluded = [
        {"id": e.id, "name": e.name, "reason": e.exclude_reason.value, "message": e.exclude_reason_message}
        for e in result.excluded
    ]
    return {
        "condition": describe_condition(condition),
        "skill_summary": result.skill_summary,
        "total_count": result.total_count,
        "excluded_count": len(result.excluded),
        "matched": matched,
        "excluded": excluded,
    }


class ReportRenderer:
    """Renders the text report template from the anken_matcher.reporting package.

    Templates are cached by the Jinja2 environment across renders.
    """

    def __init__(self, template_dir: str = "templates", template_name: str = "match_report.txt.j2"):
        self.template_name = template_name
        self.env = Environment(
            loader=PackageLoader("anken_matcher.reporting", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, result: MatchResult, condition: SearchCondition) -> str:
        """Render the report for one matching run.

        Raises:
            ReportRenderError: If the template is missing or references an
                undefined variable
        """
        context = build_report_context(result, condition)
        try:
            template = self.env.get_template(self.template_name)
            return template.render(context)
        except TemplateError as e:
            logger.error(
                f"Report rendering failed: {e}",
                extra={"event": "report.render.failed", "template": self.template_name},
            )
            raise ReportRenderError(f"Failed to render {self.template_name}: {e}") from e
