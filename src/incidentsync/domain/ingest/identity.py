"""Derive the stable incident key from a feed guid."""

from __future__ import annotations

import re

from incidentsync.domain.model import MalformedIdentifier

_DIGITS = re.compile(r"\d+")


def resolve_incident_key(external_id: str) -> int:
    """Return the trailing integer of a colon-delimited identifier.

    ``"tag:www.rfs.nsw.gov.au,2013-11-02:80707"`` resolves to ``80707``.
    """

    segment = external_id.rsplit(":", 1)[-1].strip()
    if not _DIGITS.fullmatch(segment):
        raise MalformedIdentifier(external_id)
    return int(segment)
