"""Parsers for entry publication dates."""

import datetime
import logging
import re
from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Protocol

from dateutil import parser


class DateParserProtocol(Protocol):
    """Protocol defining the interface for date parsing."""

    def parse_date(self, date_str: Optional[str]) -> Optional[datetime.datetime]:
        """Parse a date string into a timezone-aware datetime object.

        Args:
            date_str: The date string to parse.

        Returns:
            A timezone-aware datetime keeping the offset of the source text,
            or None if parsing fails.
        """
        ...


class Rfc1123DateParser(DateParserProtocol):
    """Parses RSS ``pubDate`` values such as ``Mon, 02 Jan 2006 15:04:05 -0700``."""

    def parse_date(self, date_str: Optional[str]) -> Optional[datetime.datetime]:
        """Parse an RFC 1123 date with a zone; anything else yields None."""
        if not date_str:
            return None

        try:
            parsed_date = parsedate_to_datetime(date_str.strip())
        except (TypeError, ValueError, IndexError):
            logging.debug(f"Could not parse date: {date_str!r}")
            return None

        # "-0000" and missing zones parse as naive datetimes
        if parsed_date is None or parsed_date.tzinfo is None:
            logging.debug(f"Date has no usable timezone: {date_str!r}")
            return None
        return parsed_date


class RobustDateParser(DateParserProtocol):
    """Lenient date parsing for feeds that do not stick to RFC 1123.

    The offset found in the text is kept; naive results are assumed to be UTC.
    """

    # Common timezone abbreviations and their UTC offsets
    _timezone_replacements = {
        "PDT": "-0700",
        "PST": "-0800",
        "EDT": "-0400",
        "EST": "-0500",
        "CDT": "-0500",
        "CST": "-0600",
        "CEST": "+0200",
        "CET": "+0100",
        "GMT": "+0000",
        "UTC": "+0000",
    }

    def _normalize_timezone(self, date_str: str) -> str:
        """Replace standalone timezone abbreviations with numeric offsets."""
        normalized_date_str = date_str
        for tz, offset in self._timezone_replacements.items():
            pattern = r"\b" + re.escape(tz) + r"\b"
            normalized_date_str = re.sub(pattern, offset, normalized_date_str)
        return normalized_date_str

    def parse_date(self, date_str: Optional[str]) -> Optional[datetime.datetime]:
        """Parse a date string, trying increasingly forgiving strategies."""
        if not date_str:
            return None

        parsed_date = None

        # Attempt 1: abbreviations normalized, standard parsing
        try:
            parsed_date = parser.parse(self._normalize_timezone(date_str))
        except (ValueError, OverflowError):
            pass

        # Attempt 2: fuzzy parsing for dates embedded in other text
        if parsed_date is None:
            try:
                parsed_date = parser.parse(self._normalize_timezone(date_str), fuzzy=True)
            except (ValueError, OverflowError):
                logging.debug(f"Could not parse date: {date_str!r}")
                return None

        if parsed_date.tzinfo is None:
            parsed_date = parsed_date.replace(tzinfo=timezone.utc)
        return parsed_date
