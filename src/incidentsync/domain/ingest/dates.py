"""Provider date formats, normalized to aware UTC datetimes."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Final

from incidentsync.domain.model import DateParseFailure, DateStyle

if TYPE_CHECKING:
    from datetime import tzinfo

SLASHED_FORMAT: Final[str] = "%Y/%m/%d %H:%M:%S%z"
UPDATED_FORMAT: Final[str] = "%d %b %Y %H:%M"

_HOUR_ONLY_OFFSET = re.compile(r"([+-]\d{2})$")


def parse_published_at(value: str, style: DateStyle = DateStyle.SLASHED) -> datetime:
    """Parse a ``pubDate`` value; failures raise :class:`DateParseFailure`."""

    text = value.strip()
    if not text:
        raise DateParseFailure(value, style.value)
    if style is DateStyle.RFC822:
        return _parse_rfc822(text)
    return _parse_slashed(text)


def _parse_slashed(text: str) -> datetime:
    # strptime wants +HHMM; the feed writes +HH
    padded = _HOUR_ONLY_OFFSET.sub(r"\g<1>00", text)
    try:
        parsed = datetime.strptime(padded, SLASHED_FORMAT)
    except ValueError as exc:
        raise DateParseFailure(text, SLASHED_FORMAT) from exc
    return parsed.astimezone(UTC)


def _parse_rfc822(text: str) -> datetime:
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError) as exc:
        raise DateParseFailure(text, "RFC 822") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_updated_at(value: str, *, zone: tzinfo) -> datetime:
    """Parse the free-text ``UPDATED`` attribute written in ``zone`` local time."""

    text = value.strip()
    try:
        parsed = datetime.strptime(text, UPDATED_FORMAT)
    except ValueError as exc:
        raise DateParseFailure(text, UPDATED_FORMAT) from exc
    return parsed.replace(tzinfo=zone).astimezone(UTC)
