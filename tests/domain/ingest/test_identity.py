from __future__ import annotations

import pytest

from incidentsync.domain.ingest import resolve_incident_key
from incidentsync.domain.model import MalformedIdentifier


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("tag:www.rfs.nsw.gov.au,2013-11-02:80707", 80707),
        ("urn:incident:7", 7),
        ("42", 42),
    ],
)
def test_trailing_integer_segment_is_the_key(identifier: str, expected: int) -> None:
    assert resolve_incident_key(identifier) == expected


@pytest.mark.parametrize(
    "identifier",
    ["", "tag:www.rfs.nsw.gov.au,2013-11-02:", "tag:www.rfs.nsw.gov.au:abc", "urn:x:-5", "urn:x:1.5"],
)
def test_malformed_identifiers_are_rejected(identifier: str) -> None:
    with pytest.raises(MalformedIdentifier) as excinfo:
        resolve_incident_key(identifier)

    assert excinfo.value.identifier == identifier
    assert excinfo.value.reason == "malformed_identifier"
