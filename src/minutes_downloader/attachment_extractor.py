"""Recover the PDF attachment link embedded in an entry's HTML content."""

import logging
import re
from typing import Optional

from .models import AttachmentRef

DEFAULT_ATTACHMENT_HOST = "town.plattekill.ny.us"


def build_attachment_pattern(host: str) -> "re.Pattern[str]":
    """Compile the WordPress upload URL pattern for the given host.

    Matches ``http(s)://<host>/wp-content/uploads/<year>/<month>/<basename>.pdf``
    with an optional query string or fragment. Groups are ``year``, ``month``
    and ``basename``.
    """
    return re.compile(
        r"https?://"
        + re.escape(host)
        + r"/wp-content/uploads/(?P<year>\d+)/(?P<month>\d+)/"
        + r"(?P<basename>[^/\s\"'<>?#]*)\.pdf"
        + r"(?:[?#][^\s\"'<>]*)?"
    )


class AttachmentExtractor:
    """Finds the first attachment URL for a fixed host in a text blob."""

    def __init__(self, host: str = DEFAULT_ATTACHMENT_HOST):
        """Initialize the extractor.

        Args:
            host: Host name the attachment URLs are served from.
        """
        self.host = host
        self._pattern = build_attachment_pattern(host)

    def extract(self, raw: Optional[str]) -> Optional[AttachmentRef]:
        """Return the first attachment referenced in ``raw``, or None.

        Only the first match is used; later candidates are ignored.
        """
        if not raw:
            logging.debug("No content to search for an attachment.")
            return None

        matches = list(self._pattern.finditer(raw))
        if not matches:
            logging.debug(f"Could not find an attachment URL for {self.host} in: {raw!r}")
            return None
        if len(matches) > 1:
            logging.debug(
                f"Found {len(matches)} attachment URLs, using the first: {matches[0].group(0)}"
            )

        first = matches[0]
        basename = first.group("basename")
        if not basename:
            logging.debug(f"Attachment URL has an empty file name: {first.group(0)}")
            return None

        return AttachmentRef(url=first.group(0), filename=f"{basename}.pdf")


_default_extractor = AttachmentExtractor()


def extract_attachment(raw: Optional[str]) -> Optional[AttachmentRef]:
    """Extract the first attachment served from the default host."""
    return _default_extractor.extract(raw)
