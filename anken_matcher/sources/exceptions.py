"""Custom exceptions for listing sources."""


class SourceError(Exception):
    """Base exception for all listing source errors."""


class SourceUnavailable(SourceError):
    """The listing source could not be reached.

    Covers connection failures, timeouts, HTTP error statuses and unreadable
    local files. Not retried; the matching run is aborted.
    """

    def __init__(self, message: str, source_ref: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.source_ref = source_ref
        self.status_code = status_code


class SourceMalformed(SourceError):
    """The tabular data has fewer than the two required rows (names, texts)."""

    def __init__(self, message: str, row_count: int) -> None:
        super().__init__(message)
        self.row_count = row_count


class InvalidSourceReference(SourceError):
    """The source reference is missing or cannot be resolved to a location."""
