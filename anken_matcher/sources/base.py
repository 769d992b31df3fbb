"""Base class for listing sources.

A source turns a source reference into raw tabular rows; turning rows into
Listing records is shared by every source and lives here as well.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import requests

from anken_matcher.domain.models import Listing
from anken_matcher.logging import get_logger

from .exceptions import InvalidSourceReference, SourceMalformed, SourceUnavailable

logger = get_logger(__name__, component="listing_store")

MIN_ROWS = 2


def rows_to_listings(rows: Sequence[Sequence[str]]) -> List[Listing]:
    """Convert a names row and a texts row into column-aligned listings.

    Row 1 holds listing names and row 2 the full texts. A column with both cells
    empty is skipped; an empty name becomes ``案件<column>``.

    Raises:
        SourceMalformed: If fewer than two rows are present
    """
    if len(rows) < MIN_ROWS:
        raise SourceMalformed(
            f"Listing sheet needs at least {MIN_ROWS} rows (names, texts), got {len(rows)}",
            row_count=len(rows),
        )

    name_row, text_row = rows[0], rows[1]
    listings: List[Listing] = []
    for index, raw_name in enumerate(name_row):
        column = index + 1
        name = (raw_name or "").strip()
        full_text = (text_row[index] if index < len(text_row) else "").strip()
        if not name and not full_text:
            continue
        listings.append(Listing(id=f"anken_{column}", name=name or f"案件{column}", full_text=full_text))
    return listings


class BaseSource(ABC):
    """Shared HTTP handling for listing sources.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(self, timeout: int = 30, user_agent: str = "AnkenMatcher/0.1") -> None:
        if not 5 <= timeout <= 300:
            raise ValueError(f"Timeout must be between 5 and 300 seconds, got: {timeout}")
        self.timeout = timeout
        self.user_agent = user_agent.strip() or "AnkenMatcher/0.1"
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @abstractmethod
    def fetch_rows(self, source_ref: str) -> List[List[str]]:
        """Return the raw rows behind ``source_ref``.

        Raises:
            InvalidSourceReference: If the reference cannot be resolved
            SourceUnavailable: If the data cannot be retrieved
        """

    def fetch_listings(self, source_ref: Optional[str]) -> List[Listing]:
        """Fetch rows and convert them to listings.

        Raises:
            InvalidSourceReference: If ``source_ref`` is empty or unresolvable
            SourceUnavailable: If the data cannot be retrieved
            SourceMalformed: If fewer than two rows are returned
        """
        if not source_ref or not source_ref.strip():
            raise InvalidSourceReference("No listing source configured (set GOOGLE_SHEET_URL)")
        rows = self.fetch_rows(source_ref.strip())
        listings = rows_to_listings(rows)
        logger.info(
            "Listings loaded",
            extra={
                "event": "listing_store.fetch.succeeded",
                "row_count": len(rows),
                "listing_count": len(listings),
            },
        )
        return listings

    def _get_text(self, url: str, accept: str = "text/csv") -> str:
        """GET ``url`` and return the decoded body.

        Raises:
            SourceUnavailable: On timeouts, connection errors and HTTP >= 400
        """
        logger.debug(
            f"HTTP GET {url}",
            extra={"event": "listing_store.fetch.request", "url": url, "timeout": self.timeout},
        )
        try:
            response = self._session.get(url, headers={"Accept": accept}, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "listing_store.fetch.error", "error_type": "Timeout", "url": url},
            )
            raise SourceUnavailable(
                f"Request to {url} timed out after {self.timeout} seconds", source_ref=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "listing_store.fetch.error", "error_type": type(e).__name__, "url": url},
            )
            raise SourceUnavailable(f"Request to {url} failed: {e}", source_ref=url) from e

        if response.status_code >= 400:
            logger.error(
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "listing_store.fetch.error",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise SourceUnavailable(
                f"スプレッドシートの取得に失敗しました: {response.status_code} {response.reason}",
                source_ref=url,
                status_code=response.status_code,
            )

        # Sheets exports are UTF-8 but are not always labelled as such
        response.encoding = "utf-8"
        return response.text
