"""Raw feed entries as handed over by the wire adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class DateStyle(StrEnum):
    """Provider date formats for the ``pubDate`` field."""

    SLASHED = "slashed"  # 2013/10/31 00:00:00+00
    RFC822 = "rfc822"  # Thu, 31 Oct 2013 00:00:00 GMT


@dataclass(frozen=True, slots=True, kw_only=True)
class FeedEntry:
    """One feed item: a GeoJSON-shaped geometry plus its free-text properties."""

    geometry: Mapping[str, object] | None
    guid: str = ""
    title: str = ""
    link: str = ""
    category: str = ""
    pub_date: str = ""
    description: str = ""
    date_style: DateStyle = DateStyle.SLASHED
