"""Main entry point: fetch the feed, decode it and download the attachments."""

import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .attachment_extractor import AttachmentExtractor
from .config import DownloaderConfig, load_config, parse_cli_arguments
from .downloader import AttachmentDownloader
from .exceptions import FeedFetchError, MalformedDocument
from .feed_decoder import decode_feed
from .interfaces.protocols import TransportProtocol
from .models import RunSummary
from .transport import HttpTransport
from .utils.date_parser import Rfc1123DateParser, RobustDateParser


def run_download(config: DownloaderConfig, transport: TransportProtocol) -> RunSummary:
    """Run one download pass.

    Raises:
        FeedFetchError: If the feed cannot be fetched.
        MalformedDocument: If the feed cannot be decoded.
        OSError: If the output directory cannot be created.
    """
    document = transport.fetch_feed(config.feed_url)

    logging.info("Decoding the feed")
    feed = decode_feed(
        document,
        extractor=AttachmentExtractor(host=config.attachment_host),
        date_parser=RobustDateParser() if config.lenient_dates else Rfc1123DateParser(),
    )

    if config.output_dir:
        os.makedirs(config.output_dir, exist_ok=True)

    logging.info("Iterating over each entry to download the attachment")
    downloader = AttachmentDownloader(
        transport=transport,
        output_dir=config.output_dir,
        default_category=config.default_category,
        zero_pad=config.zero_pad_timestamps,
    )
    return downloader.download_all(feed.entries)


def main(argv: Optional[List[str]] = None) -> int:
    """Load configuration, run the download and return a process exit code."""
    load_dotenv()
    cli_args = parse_cli_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if cli_args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_config(cli_args)
    except ValueError as e:
        logging.error(f"Configuration error: {e}")
        return 1

    with HttpTransport(timeout=config.request_timeout) as transport:
        try:
            run_download(config, transport)
        except FeedFetchError as e:
            logging.error(f"Error while fetching the feed: {e}")
            return 1
        except MalformedDocument as e:
            logging.error(f"Error while decoding the feed: {e}")
            return 1
        except OSError as e:
            logging.error(f"Error while preparing the output directory: {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
