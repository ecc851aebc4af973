"""HTTP access to the feed and its attachments."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import requests

from .exceptions import AttachmentFetchError, FeedFetchError
from .interfaces.protocols import TransportProtocol

DEFAULT_TIMEOUT = 30.0
CHUNK_SIZE = 64 * 1024


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class HttpTransport(TransportProtocol):
    """Retrieves remote resources with a shared requests session."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        chunk_size: int = CHUNK_SIZE,
    ):
        """Initialize the transport.

        Args:
            timeout: Connect and read timeout for every request, in seconds.
            session: Session to reuse. A new one is created if omitted.
            chunk_size: Size of the chunks attachments are streamed in.
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.chunk_size = chunk_size

    def fetch_feed(self, url: str) -> bytes:
        """Fetch the feed document."""
        logging.info(f"Requesting RSS feed: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FeedFetchError(url, f"Request for the feed failed: {e}") from e

        if not _is_success(response.status_code):
            raise FeedFetchError(
                url,
                f"Failed to fetch the RSS feed. Code: {response.status_code}",
                status_code=response.status_code,
            )
        return response.content

    def _iter_chunks(self, url: str, response: requests.Response) -> Iterator[bytes]:
        try:
            for chunk in response.iter_content(chunk_size=self.chunk_size):
                if chunk:
                    yield chunk
        except requests.RequestException as e:
            raise AttachmentFetchError(url, f"Reading the attachment failed: {e}") from e

    @contextmanager
    def open_attachment(self, url: str) -> Iterator[Iterator[bytes]]:
        """Open a streamed download of an attachment."""
        try:
            response = self.session.get(url, stream=True, timeout=self.timeout)
        except requests.RequestException as e:
            raise AttachmentFetchError(url, f"Request for the attachment failed: {e}") from e

        with response:
            if not _is_success(response.status_code):
                raise AttachmentFetchError(
                    url,
                    f"Failed to fetch the attachment. Code: {response.status_code}",
                    status_code=response.status_code,
                )
            yield self._iter_chunks(url, response)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
