"""Error taxonomy for feed normalization and reconciliation."""

from __future__ import annotations


class IncidentSyncError(Exception):
    """Base class for all domain errors."""


class EntryError(IncidentSyncError):
    """A single feed entry cannot be processed; the batch carries on without it."""

    reason: str = "invalid_entry"


class MalformedIdentifier(EntryError):
    """The external identifier does not end in an integer segment."""

    reason = "malformed_identifier"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Identifier does not end in an integer segment: {identifier!r}")
        self.identifier = identifier


class UnrecognizedGeometryKind(EntryError):
    """The geometry type tag is not one of the supported kinds."""

    reason = "unrecognized_geometry"

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unrecognized geometry kind: {kind!r}")
        self.kind = kind


class InvalidGeometry(EntryError):
    """The geometry kind is known but its coordinate payload is unusable."""

    reason = "invalid_geometry"


class DateParseFailure(EntryError):
    """A date field does not match its provider format."""

    reason = "date_parse_failure"

    def __init__(self, value: str, expected: str) -> None:
        super().__init__(f"Cannot parse {value!r} as {expected}")
        self.value = value
        self.expected = expected


class StoreError(IncidentSyncError):
    """Persistence failures; these abort the whole batch."""


class StoreUnavailable(StoreError):
    """The incident store cannot be reached or rejected a command."""


class DuplicateInsertAttempted(StoreError):
    """An incident was about to be inserted for a key that already has one."""

    def __init__(self, incident_key: int) -> None:
        super().__init__(f"Incident {incident_key} already exists in the store")
        self.incident_key = incident_key


class FeedDecodeError(IncidentSyncError):
    """A whole feed snapshot cannot be bound into entries."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Cannot decode feed {source}: {message}")
        self.source = source


class FeedFetchError(IncidentSyncError):
    """A feed source cannot be read."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Cannot fetch feed {source}: {message}")
        self.source = source
