"""SQLAlchemy-backed unit of work for the catalog.

``startup()`` binds the adapter to one engine per process and migrates it;
every ``SqlAlchemyCatalogUnitOfWork`` then opens a short-lived session on that
engine. Leaving the ``with`` block closes the session and rolls back whatever
was not committed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from stockroom.adapters.sqlalchemy.mappings import start_mappers
from stockroom.adapters.sqlalchemy.migrations import upgrade_head
from stockroom.adapters.sqlalchemy.repositories import SqlAlchemyProductRepository
from stockroom.config import get_database_config
from stockroom.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the adapter is used before ``startup()`` or started twice."""


class _Adapter:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    @classmethod
    def bind(cls, engine: Engine | None) -> None:
        cls.engine = engine
        cls.sessions = None if engine is None else sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def open_session(cls) -> Session:
        if cls.sessions is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised; call "
                "stockroom.adapters.sqlalchemy.startup() first."
            )
        return cls.sessions()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Map the model, migrate the database and make it the adapter's engine."""

    if _Adapter.engine is not None and not force:
        raise StartupError("SQLAlchemy adapter already initialised; pass force=True to rebind.")

    target = engine or create_engine(database_uri or get_database_config().uri)
    start_mappers()
    upgrade_head(engine=target)
    if _Adapter.engine is not None and _Adapter.engine is not target:
        _Adapter.engine.dispose()
    _Adapter.bind(target)
    log.debug("SQLAlchemy adapter bound to %s", target.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _Adapter.engine


def is_started() -> bool:
    return _Adapter.engine is not None


def shutdown() -> None:
    """Dispose the engine and forget it; safe to call when not started."""

    if _Adapter.engine is not None:
        _Adapter.engine.dispose()
    _Adapter.bind(None)


class SqlAlchemyCatalogUnitOfWork:
    """One session and one ``CatalogRepositories`` per ``with`` block."""

    def __init__(self) -> None:
        if _Adapter.sessions is None:
            raise StartupError("SQLAlchemy adapter not initialised; call startup() first.")
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = _Adapter.open_session()
        self._repositories = CatalogRepositories(
            products=SqlAlchemyProductRepository(self._session)
        )
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
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised; enter it with 'with'")
        return self._session

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not initialised; enter it with 'with'")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from stockroom.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
