"""Extract ``LABEL: value`` attributes from feed description markup."""

from __future__ import annotations

import re
from typing import Final

BREAK_MARKER: Final[str] = "<br />"
EXTRA_KEY: Final[str] = "extra"
UPDATED_KEY: Final[str] = "updated"

_FIELD = re.compile(r"([\w\s]+):\s(.*)", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")
_MARKUP = re.compile(r"<\s*a\b", re.IGNORECASE)


def normalize_label(label: str) -> str:
    """``"ALERT LEVEL"`` -> ``"alert_level"``."""

    return _WHITESPACE.sub("_", label.strip().lower())


def parse_description(text: str, *, marker: str = BREAK_MARKER) -> dict[str, str]:
    """Split ``text`` on ``marker`` and collect the labelled segments.

    Segments that do not look like ``LABEL: value`` land in ``extra``; only the
    last such segment is kept. Blank segments are ignored. Never raises.
    """

    attributes: dict[str, str] = {}
    for segment in text.split(marker):
        if not segment.strip():
            continue
        match = _FIELD.fullmatch(segment.strip())
        if match is None:
            attributes[EXTRA_KEY] = segment
            continue
        label, value = match.groups()
        attributes[normalize_label(label)] = value.strip()

    updated = attributes.get(UPDATED_KEY)
    if updated is not None:
        attributes[UPDATED_KEY] = strip_trailing_markup(updated)
    return attributes


def strip_trailing_markup(value: str) -> str:
    """Drop an embedded anchor and everything after it."""

    match = _MARKUP.search(value)
    if match is None:
        return value
    return value[: match.start()].strip()
