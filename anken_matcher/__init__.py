"""Anken Matcher: rule-based matching of job listings against candidate conditions."""

__version__ = "0.1.0"
