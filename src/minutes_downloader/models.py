"""Data models for decoded feed entries and download results."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class AttachmentRef:
    """A downloadable file referenced from an entry's content."""

    url: str  # The full matched URL, query string included
    filename: str  # Basename recovered from the URL path, always ending in .pdf


@dataclass(frozen=True)
class FeedEntry:
    """Represents a single item decoded from the feed."""

    title: str
    link: str
    description: str  # Kept as-is, never parsed
    attachment: Optional[AttachmentRef] = None
    categories: Tuple[str, ...] = ()  # Document order
    published_at: Optional[datetime] = None  # None when the pubDate was unparseable


@dataclass(frozen=True)
class FeedDocument:
    """A decoded feed and its entries."""

    entries: Tuple[FeedEntry, ...] = ()
    title: str = ""
    link: str = ""


class DownloadOutcome(Enum):
    """What happened to a single entry during a download run."""

    DOWNLOADED = "downloaded"
    ALREADY_EXISTS = "already_exists"
    NO_ATTACHMENT = "no_attachment"
    NO_PUBLICATION_DATE = "no_publication_date"
    TRANSPORT_ERROR = "transport_error"
    FILESYSTEM_ERROR = "filesystem_error"


@dataclass(frozen=True)
class EntryResult:
    """Result of processing one entry."""

    title: str
    outcome: DownloadOutcome
    filename: Optional[str] = None
    bytes_written: int = 0
    error: Optional[str] = None


@dataclass
class RunSummary:
    """Results of a whole download run, in document order."""

    results: List[EntryResult] = field(default_factory=list)

    def count(self, outcome: DownloadOutcome) -> int:
        """Return the number of entries that ended with the given outcome."""
        return sum(1 for result in self.results if result.outcome is outcome)

    def counts(self) -> Dict[DownloadOutcome, int]:
        """Return the number of entries per outcome."""
        return dict(Counter(result.outcome for result in self.results))

    @property
    def failed(self) -> int:
        """Number of entries that failed with a transport or filesystem error."""
        return self.count(DownloadOutcome.TRANSPORT_ERROR) + self.count(
            DownloadOutcome.FILESYSTEM_ERROR
        )
