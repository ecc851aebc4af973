"""Derive destination file names for feed entries."""

from typing import Optional

from .models import FeedEntry
from .utils.timestamp_tag import format_timestamp_tag

DEFAULT_CATEGORY = "Minutes"


def _safe_label(label: str) -> str:
    # Keep the file inside the output directory
    return label.replace("/", "-").replace("\\", "-")


def derive_filename(
    entry: FeedEntry,
    default_category: str = DEFAULT_CATEGORY,
    zero_pad: bool = False,
) -> Optional[str]:
    """Compute the file name an entry's attachment is saved under.

    The name starts from the entry's publication timestamp tag. The first
    category that differs from ``default_category`` is used as a prefix and
    only then is a ``.pdf`` suffix appended: ``<label>_<tag>.pdf``. Entries
    whose categories are all the default keep the bare ``<tag>``.

    Args:
        entry: The decoded entry.
        default_category: Category every entry of the feed carries.
        zero_pad: Render the timestamp tag with fixed-width fields.

    Returns:
        The file name, or None when the entry has no publication date.
    """
    if entry.published_at is None:
        return None

    filename = format_timestamp_tag(entry.published_at, zero_pad=zero_pad)
    for category in entry.categories:
        if category != default_category:
            return f"{_safe_label(category)}_{filename}.pdf"
    return filename
