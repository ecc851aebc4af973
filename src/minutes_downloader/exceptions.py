"""Exceptions raised by minutes-downloader."""

from typing import Optional


class MinutesDownloaderError(Exception):
    """Base class for all minutes-downloader errors."""


class TransportError(MinutesDownloaderError):
    """A remote resource could not be retrieved."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        """Initialize the error.

        Args:
            url: The URL that was requested.
            message: Human readable reason.
            status_code: HTTP status code, if a response was received.
        """
        super().__init__(f"{message} (url: {url})")
        self.url = url
        self.status_code = status_code


class FeedFetchError(TransportError):
    """The feed document could not be retrieved. Fatal for the run."""


class AttachmentFetchError(TransportError):
    """An entry's attachment could not be retrieved. Fatal for that entry only."""


class MalformedDocument(MinutesDownloaderError):
    """The feed document is not well-formed RSS."""
