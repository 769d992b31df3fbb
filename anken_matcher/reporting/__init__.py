"""Text reports for matching results."""

from .renderer import EXPORT_TEMPLATE, ReportRenderError, ReportRenderer, build_report_context

__all__ = ["EXPORT_TEMPLATE", "ReportRenderError", "ReportRenderer", "build_report_context"]
