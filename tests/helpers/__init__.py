"""Test helper utilities for Anken Matcher tests."""

from .fixture_source import FIXTURES_DIR, FixtureSource, load_fixture_sheets

__all__ = ["FIXTURES_DIR", "FixtureSource", "load_fixture_sheets"]
