from __future__ import annotations

from incidentsync.domain.ingest import ContentChange, classify_change
from tests.helpers.feeds import make_report, pub_date


def test_same_content_hashes_the_same() -> None:
    assert make_report().content_hash == make_report().content_hash


def test_hash_tracks_semantic_content() -> None:
    base = make_report()

    assert make_report(title="Mount Victoria (2)").content_hash != base.content_hash
    assert make_report(pub=pub_date(hour=3)).content_hash != base.content_hash
    assert (
        make_report(geometry={"type": "Point", "coordinates": [150.0, -33.6]}).content_hash
        != base.content_hash
    )


def test_hash_is_sha1_hex() -> None:
    content_hash = make_report().content_hash

    assert len(content_hash) == 40
    int(content_hash, 16)


def test_classify_change() -> None:
    assert classify_change("a", None) is ContentChange.CHANGED
    assert classify_change("a", "b") is ContentChange.CHANGED
    assert classify_change("a", "a") is ContentChange.UNCHANGED
