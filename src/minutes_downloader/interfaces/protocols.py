"""Defines protocols for dependency injection and mocking core components."""

from typing import ContextManager, Iterator, Protocol


class TransportProtocol(Protocol):
    """Protocol defining the interface for retrieving remote resources."""

    def fetch_feed(self, url: str) -> bytes:
        """Return the raw feed document, raising FeedFetchError on failure."""
        ...

    def open_attachment(self, url: str) -> ContextManager[Iterator[bytes]]:
        """Open an attachment for streaming.

        Entering the context raises AttachmentFetchError if the request fails;
        iterating the chunks raises AttachmentFetchError if the body cannot be
        read. The response is released when the context exits.
        """
        ...

    def close(self) -> None:
        """Release any pooled connections."""
        ...
