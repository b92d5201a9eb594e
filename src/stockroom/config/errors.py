"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """An environment setting is present but unusable."""

    def __init__(self, message: str, *, variable: str | None = None) -> None:
        super().__init__(message)
        self.variable = variable
