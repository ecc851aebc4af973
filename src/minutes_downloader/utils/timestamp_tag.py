"""Render publication timestamps as compact file name tags."""

import datetime


def format_timestamp_tag(timestamp: datetime.datetime, zero_pad: bool = False) -> str:
    """Render a timestamp as ``<year><month><day>-<hour><minute><second>``.

    The value is rendered in its own offset; no timezone conversion happens.

    By default every field is unpadded, so ``2006-01-02 15:04:05`` becomes
    ``200612-1545``. Unpadded tags can collide (day 1 hour 23 and day 12 hour 3
    share a rendering); pass ``zero_pad=True`` for ``20060102-150405``.

    Args:
        timestamp: The point in time to render.
        zero_pad: Render fixed-width fields.

    Returns:
        str: The rendered tag.
    """
    if zero_pad:
        return (
            f"{timestamp.year:04d}{timestamp.month:02d}{timestamp.day:02d}"
            f"-{timestamp.hour:02d}{timestamp.minute:02d}{timestamp.second:02d}"
        )
    return (
        f"{timestamp.year}{timestamp.month}{timestamp.day}"
        f"-{timestamp.hour}{timestamp.minute}{timestamp.second}"
    )
