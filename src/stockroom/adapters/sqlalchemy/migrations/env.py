"""Alembic environment for the stockroom catalog schema."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from stockroom.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from stockroom.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

log = logging.getLogger("alembic.env")

start_mappers()
target_metadata = mapper_registry.metadata
config = context.config

# SQLite needs batch mode for ALTER TABLE.
_OPTIONS: dict[str, bool] = {"render_as_batch": True, "compare_type": True}


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


def _run(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, **_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    context.configure(
        url=_database_url(), target_metadata=target_metadata, literal_binds=True, **_OPTIONS
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    shared: Connection | None = config.attributes.get("connection")
    if shared is not None:
        _run(shared)
        return

    engine = create_engine(_database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _run(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    log.info("Rendering catalog migrations as SQL")
    run_migrations_offline()
else:
    run_migrations_online()
