"""Alembic entry points for the catalog schema.

The revision scripts ship inside the package, so ``script_location`` always
points here. Extra Alembic options may be given in ``[tool.alembic]`` of a
source checkout's ``pyproject.toml``.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

from stockroom.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent
PYPROJECT_PATH: Final[Path] = MIGRATIONS_PATH.parents[4] / "pyproject.toml"
_MANAGED_OPTIONS: Final[frozenset[str]] = frozenset(
    {"script_location", "prepend_sys_path", "sqlalchemy.url"}
)


def _pyproject_options() -> dict[str, str]:
    if not PYPROJECT_PATH.is_file():
        return {}
    with PYPROJECT_PATH.open("rb") as handle:
        section = tomllib.load(handle).get("tool", {}).get("alembic", {})
    return {str(key): str(value) for key, value in section.items() if key not in _MANAGED_OPTIONS}


def alembic_config(*, database_uri: str | None = None) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    for key, value in _pyproject_options().items():
        config.set_main_option(key, value)
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Bring the schema to the latest revision.

    With ``engine`` the upgrade runs on one of its connections (needed for
    in-memory SQLite); otherwise Alembic connects to ``database_uri`` or the
    configured database.
    """

    if engine is None:
        uri = database_uri or get_database_config().uri
        command.upgrade(alembic_config(database_uri=uri), "head")
        return

    config = alembic_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")


def current_revision(engine: Engine) -> str | None:
    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()
