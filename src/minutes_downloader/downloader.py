"""Download the attachments of decoded feed entries."""

import logging
import os
from typing import Iterable

from .exceptions import TransportError
from .filenames import DEFAULT_CATEGORY, derive_filename
from .interfaces.protocols import TransportProtocol
from .models import DownloadOutcome, EntryResult, FeedEntry, RunSummary


class AttachmentDownloader:
    """Saves each entry's attachment into the output directory.

    Entries are processed one at a time in document order. A failure on one
    entry is reported in its result and never stops the remaining entries.
    Existing files are never overwritten.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        output_dir: str = "",
        default_category: str = DEFAULT_CATEGORY,
        zero_pad: bool = False,
    ):
        """Initialize the downloader.

        Args:
            transport: Used to stream attachments.
            output_dir: Directory the files are written to, current directory if empty.
            default_category: Category that does not distinguish entries.
            zero_pad: Use fixed-width timestamp tags in file names.
        """
        self.transport = transport
        self.output_dir = output_dir
        self.default_category = default_category
        self.zero_pad = zero_pad

    def destination_path(self, filename: str) -> str:
        """Return the path a file name is saved under."""
        return os.path.join(self.output_dir, filename) if self.output_dir else filename

    def download_all(self, entries: Iterable[FeedEntry]) -> RunSummary:
        """Download the attachment of every entry.

        Returns:
            RunSummary: One result per entry, in the order given.
        """
        summary = RunSummary()
        for entry in entries:
            summary.results.append(self.download_entry(entry))

        skipped = summary.count(DownloadOutcome.NO_ATTACHMENT) + summary.count(
            DownloadOutcome.NO_PUBLICATION_DATE
        )
        logging.info(
            f"Finished downloading. Downloaded: {summary.count(DownloadOutcome.DOWNLOADED)}, "
            f"Already existing: {summary.count(DownloadOutcome.ALREADY_EXISTS)}, "
            f"Skipped: {skipped}, "
            f"Failed: {summary.failed}"
        )
        return summary

    def download_entry(self, entry: FeedEntry) -> EntryResult:
        """Download the attachment of a single entry."""
        filename = derive_filename(
            entry, default_category=self.default_category, zero_pad=self.zero_pad
        )
        if filename is None:
            logging.warning(f"No publication date for \"{entry.title}\", skipping.")
            return EntryResult(title=entry.title, outcome=DownloadOutcome.NO_PUBLICATION_DATE)

        path = self.destination_path(filename)
        if os.path.exists(path):
            logging.warning(f"File already exists, skipping: {path}")
            return EntryResult(
                title=entry.title, outcome=DownloadOutcome.ALREADY_EXISTS, filename=filename
            )

        if entry.attachment is None:
            logging.warning(f"No attachment found for \"{entry.title}\", skipping.")
            return EntryResult(
                title=entry.title, outcome=DownloadOutcome.NO_ATTACHMENT, filename=filename
            )

        try:
            written = self._save(entry.attachment.url, path)
        except TransportError as e:
            logging.error(f"Error while downloading {entry.attachment.url}: {e}")
            return EntryResult(
                title=entry.title,
                outcome=DownloadOutcome.TRANSPORT_ERROR,
                filename=filename,
                error=str(e),
            )
        except OSError as e:
            logging.error(f"Error while writing file: {path} Error: {e}")
            return EntryResult(
                title=entry.title,
                outcome=DownloadOutcome.FILESYSTEM_ERROR,
                filename=filename,
                error=str(e),
            )

        logging.info(f"Downloaded {path} ({written})")
        return EntryResult(
            title=entry.title,
            outcome=DownloadOutcome.DOWNLOADED,
            filename=filename,
            bytes_written=written,
        )

    def _save(self, url: str, path: str) -> int:
        """Stream ``url`` into a new file at ``path``, returning the bytes written.

        The file is only created once the server has answered successfully.
        A file left incomplete by a failure is removed.
        """
        written = 0
        created = False
        with self.transport.open_attachment(url) as chunks:
            try:
                with open(path, "xb") as f:
                    created = True
                    for chunk in chunks:
                        f.write(chunk)
                        written += len(chunk)
            except (TransportError, OSError):
                if created:
                    self._remove_partial(path)
                raise
        return written

    @staticmethod
    def _remove_partial(path: str) -> None:
        try:
            os.remove(path)
        except OSError as e:
            logging.error(f"Could not remove incomplete file {path}: {e}")
