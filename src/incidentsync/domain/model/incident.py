"""Incident aggregate and its validity interval."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class ValidityInterval:
    """Closed interval ``[lower, upper]`` between first and latest publish time."""

    lower: datetime
    upper: datetime

    def __post_init__(self) -> None:
        if self.upper < self.lower:
            raise ValueError("Validity upper bound must not precede the lower bound")

    @classmethod
    def starting_at(cls, instant: datetime) -> ValidityInterval:
        return cls(lower=instant, upper=instant)

    def extended_to(self, instant: datetime) -> ValidityInterval:
        """Return the interval with ``upper`` advanced to ``instant``; never shrinks."""
        if instant <= self.upper:
            return self
        return replace(self, upper=instant)


@dataclass(slots=True, kw_only=True)
class Incident:
    """One real-world event across its reporting lifetime, keyed by ``incident_key``."""

    incident_key: int
    storage_id: UUID
    is_current: bool
    validity: ValidityInterval
