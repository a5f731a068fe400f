"""Unit-of-work abstraction around the persistence gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from .persistence import PersistenceGateway


@runtime_checkable
class UnitOfWork(Protocol):
    """Transaction boundary for one reconciliation batch."""

    @property
    def gateway(self) -> PersistenceGateway: ...

    def __enter__(self) -> UnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
