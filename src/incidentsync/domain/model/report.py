"""Report value object: one observation of an incident."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from .geometry import Geometry


@dataclass(frozen=True, slots=True, kw_only=True)
class Report:
    """Immutable snapshot of one feed entry after normalization."""

    content_hash: str
    external_id: str
    title: str
    category: str
    link: str
    published_at: datetime
    updated_at: datetime | None
    description_raw: str
    geometry: Geometry
    attributes: Mapping[str, str] = field(default_factory=dict[str, str])

    @property
    def alert_level(self) -> str | None:
        return self.attributes.get("alert_level")

    @property
    def location(self) -> str | None:
        return self.attributes.get("location")

    @property
    def council_area(self) -> str | None:
        return self.attributes.get("council_area")

    @property
    def status(self) -> str | None:
        return self.attributes.get("status")

    @property
    def fire_type(self) -> str | None:
        # "type" is the feed's label; renamed to avoid the builtin
        return self.attributes.get("type")

    @property
    def fire(self) -> bool | None:
        value = self.attributes.get("fire")
        if value is None:
            return None
        return value == "Yes"

    @property
    def size(self) -> str | None:
        return self.attributes.get("size")

    @property
    def responsible_agency(self) -> str | None:
        return self.attributes.get("responsible_agency")

    @property
    def extra(self) -> str | None:
        return self.attributes.get("extra")

    @property
    def has_unparsed_update(self) -> bool:
        """True when the feed carried an ``updated`` value that could not be parsed.

        Distinguishes "no update information" (no attribute) from "update
        information present but unusable" (attribute present, ``updated_at`` unset).
        """
        return self.updated_at is None and bool(self.attributes.get("updated"))
