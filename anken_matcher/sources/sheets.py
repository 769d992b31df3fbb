"""CSV listing source for Google Sheets exports, plain CSV URLs and local files."""

import csv
import io
import re
from pathlib import Path
from typing import List

from anken_matcher.logging import get_logger

from .base import BaseSource
from .exceptions import InvalidSourceReference, SourceUnavailable

logger = get_logger(__name__, component="listing_store")

SHEETS_EXPORT_TEMPLATE = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv{gid}"

_SHEET_ID_PATTERN = re.compile(r"/spreadsheets/d/([^/?#]+)")
_GID_PATTERN = re.compile(r"[?&#]gid=(\d+)")


def is_url(source_ref: str) -> bool:
    return source_ref.lower().startswith(("http://", "https://"))


def to_export_url(url: str) -> str:
    """Resolve a listing URL to the URL that serves CSV.

    Export URLs are returned unchanged. Google Sheets editor URLs are rewritten
    to the CSV export endpoint, keeping the ``gid`` of the selected tab. Any
    other http(s) URL is assumed to serve CSV already.

    Raises:
        InvalidSourceReference: If ``url`` is not an http(s) URL
    """
    if not is_url(url):
        raise InvalidSourceReference(f"Not an http(s) URL: {url}")
    if "/export" in url:
        return url

    sheet_match = _SHEET_ID_PATTERN.search(url)
    if not sheet_match:
        return url

    gid_match = _GID_PATTERN.search(url)
    gid = f"&gid={gid_match.group(1)}" if gid_match else ""
    return SHEETS_EXPORT_TEMPLATE.format(sheet_id=sheet_match.group(1), gid=gid)


def parse_csv_rows(csv_text: str) -> List[List[str]]:
    """Parse CSV text into rows. Quoted cells may span lines."""
    if csv_text.startswith("\ufeff"):
        csv_text = csv_text[1:]
    return list(csv.reader(io.StringIO(csv_text, newline="")))


class SheetSource(BaseSource):
    """Reads the two-row listing sheet from a URL or a local CSV file."""

    def fetch_rows(self, source_ref: str) -> List[List[str]]:
        if is_url(source_ref):
            export_url = to_export_url(source_ref)
            csv_text = self._get_text(export_url)
        else:
            csv_text = self._read_file(source_ref)
        return parse_csv_rows(csv_text)

    @staticmethod
    def _read_file(source_ref: str) -> str:
        path = Path(source_ref).expanduser()
        if "://" in source_ref:
            raise InvalidSourceReference(f"Unsupported listing source scheme: {source_ref}")
        if not path.is_file():
            raise SourceUnavailable(f"Listing file not found: {path}", source_ref=source_ref)

        logger.debug(
            f"Reading listings from {path}",
            extra={"event": "listing_store.fetch.request", "path": str(path)},
        )
        try:
            return path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailable(f"Failed to read listing file {path}: {e}", source_ref=source_ref) from e
