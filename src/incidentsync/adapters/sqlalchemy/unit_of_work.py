"""Engine lifecycle and the per-batch SQLAlchemy unit of work."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine, event
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from incidentsync.config.storage import get_database_uri
from incidentsync.domain.model import StoreUnavailable

from .gateway import SqlAlchemyPersistenceGateway
from .mappings import create_all_tables

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """The adapter is used before :func:`startup` or configured twice."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.session_factory = (
            None if engine is None else sessionmaker(bind=engine, expire_on_commit=False)
        )

    def require_session_factory(self) -> sessionmaker[Session]:
        if self.session_factory is None:
            raise StartupError(
                "Incident store not initialised; call "
                "incidentsync.adapters.sqlalchemy.startup() first."
            )
        return self.session_factory


_STATE = _AdapterState()


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: object) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_uri: str) -> Engine:
    engine = create_engine(database_uri)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or one built from ``database_uri``) and create tables.

    Raises :class:`StoreUnavailable` when the database cannot be reached.
    """

    if _STATE.engine is not None and not force:
        raise StartupError("Incident store already initialised; pass force=True to rebind.")

    resolved = engine or build_engine(database_uri or get_database_uri())
    try:
        create_all_tables(resolved)
    except OperationalError as exc:
        resolved.dispose()
        raise StoreUnavailable(f"Cannot initialise incident store: {exc.orig}") from exc

    if _STATE.engine is not None and _STATE.engine is not resolved:
        _STATE.engine.dispose()
    _STATE.bind(resolved)
    log.debug("Incident store bound to %s", resolved.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and forget it."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyUnitOfWork:
    """One session, and so one transaction, per reconciliation batch.

    Leaving the block with an exception rolls back; nothing is committed
    unless :meth:`commit` is called.
    """

    def __init__(self) -> None:
        self.session_factory = _STATE.require_session_factory()
        self._session: Session | None = None
        self._gateway: SqlAlchemyPersistenceGateway | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self.session_factory()
        self._gateway = SqlAlchemyPersistenceGateway(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            self.session.close()
            self._session = None
            self._gateway = None
        return False

    def commit(self) -> None:
        try:
            self.session.commit()
        except DBAPIError as exc:
            raise StoreUnavailable(f"Commit failed: {exc.orig}") from exc

    def rollback(self) -> None:
        try:
            self.session.rollback()
        except DBAPIError as exc:
            raise StoreUnavailable(f"Rollback failed: {exc.orig}") from exc

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._session

    @property
    def gateway(self) -> SqlAlchemyPersistenceGateway:
        if self._gateway is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._gateway


if TYPE_CHECKING:
    from incidentsync.domain.ports import UnitOfWork

    _uow_check: UnitOfWork = SqlAlchemyUnitOfWork()
