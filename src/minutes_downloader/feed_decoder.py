"""Decode an RSS document into feed entries."""

import logging
import xml.etree.ElementTree as ET
import xml.sax
from typing import Any, List, Optional, Tuple

import feedparser

from .attachment_extractor import AttachmentExtractor
from .exceptions import MalformedDocument
from .models import FeedDocument, FeedEntry
from .utils.date_parser import DateParserProtocol, Rfc1123DateParser


def _entry_content(entry: Any) -> Optional[str]:
    """Return the embedded content (``content:encoded``) of a feedparser entry."""
    contents = entry.get("content") or []
    values = [content.get("value") for content in contents if content.get("value")]
    if not values:
        return None
    return values[0]


def _entry_categories(entry: Any) -> Tuple[str, ...]:
    """Return the category terms feedparser collected for an entry."""
    categories: List[str] = []
    for tag in entry.get("tags") or []:
        term = tag.get("term")
        if term is not None:
            categories.append(term)
    return tuple(categories)


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _item_categories(document: bytes) -> Optional[List[Tuple[str, ...]]]:
    """Read the ``<category>`` texts of every item straight from the document.

    feedparser drops repeated and empty terms, so the categories are taken
    from the markup itself: one tuple per item, in document order, with
    repeats and empty strings kept. Returns None if the document cannot be
    read this way.
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        logging.debug(f"Could not read categories from the raw document: {e}")
        return None

    items = []
    for item in root.iter():
        if _local_name(item.tag) != "item":
            continue
        items.append(
            tuple(
                "".join(child.itertext())
                for child in item
                if _local_name(child.tag) == "category"
            )
        )
    return items


def decode_entry(
    entry: Any,
    extractor: AttachmentExtractor,
    date_parser: DateParserProtocol,
    categories: Optional[Tuple[str, ...]] = None,
) -> FeedEntry:
    """Build a FeedEntry from a feedparser entry.

    Field-level problems never raise: a missing attachment or an unparseable
    publication date leave the corresponding field as None. The categories
    feedparser collected are used unless ``categories`` is given.
    """
    title = entry.get("title", "")
    pub_date_str = entry.get("published")

    published_at = date_parser.parse_date(pub_date_str)
    if published_at is None:
        logging.warning(f"Could not parse publication date {pub_date_str!r} of \"{title}\".")

    attachment = extractor.extract(_entry_content(entry))
    if attachment is None:
        logging.debug(f"No attachment found in \"{title}\".")

    return FeedEntry(
        title=title,
        link=entry.get("link", ""),
        description=entry.get("summary", entry.get("description", "")),
        attachment=attachment,
        categories=categories if categories is not None else _entry_categories(entry),
        published_at=published_at,
    )


def decode_feed(
    document: bytes,
    extractor: Optional[AttachmentExtractor] = None,
    date_parser: Optional[DateParserProtocol] = None,
) -> FeedDocument:
    """Decode a raw RSS document.

    Args:
        document: The feed as returned by the server.
        extractor: Attachment extractor, defaults to the default host.
        date_parser: Publication date parser, defaults to strict RFC 1123.

    Returns:
        FeedDocument: The decoded entries in document order.

    Raises:
        MalformedDocument: If the document is not well-formed XML or not RSS.
    """
    extractor = extractor or AttachmentExtractor()
    date_parser = date_parser or Rfc1123DateParser()

    parsed_feed = feedparser.parse(document)

    if parsed_feed.bozo and isinstance(parsed_feed.bozo_exception, xml.sax.SAXException):
        raise MalformedDocument(f"Feed is not well-formed: {parsed_feed.bozo_exception}")
    if not parsed_feed.get("version", "").startswith("rss"):
        raise MalformedDocument(
            f"Expected an RSS document, got {parsed_feed.get('version') or 'unknown format'}."
        )

    item_categories = _item_categories(document)
    if item_categories is not None and len(item_categories) != len(parsed_feed.entries):
        logging.warning(
            f"Found {len(item_categories)} items but {len(parsed_feed.entries)} entries, "
            "using the categories reported by feedparser."
        )
        item_categories = None

    entries = tuple(
        decode_entry(
            entry,
            extractor=extractor,
            date_parser=date_parser,
            categories=item_categories[index] if item_categories is not None else None,
        )
        for index, entry in enumerate(parsed_feed.entries)
    )
    logging.info(f"Decoded {len(entries)} entries from the feed.")

    return FeedDocument(
        entries=entries,
        title=parsed_feed.feed.get("title", ""),
        link=parsed_feed.feed.get("link", ""),
    )
