"""Root logger setup for the command line."""

from __future__ import annotations

import logging
from typing import Final

from .env import optional_env_var

LOG_LEVEL_ENV: Final[str] = "STOCKROOM_LOG_LEVEL"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Configure the root logger once.

    Without an explicit ``level`` the ``STOCKROOM_LOG_LEVEL`` variable is used,
    falling back to INFO. ``force=True`` replaces handlers installed earlier.
    """

    resolved = level if level is not None else optional_env_var(LOG_LEVEL_ENV) or logging.INFO
    if isinstance(resolved, str):
        resolved = resolved.upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
