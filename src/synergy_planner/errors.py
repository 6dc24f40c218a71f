"""Exceptions raised while loading a dataset."""

from __future__ import annotations


class DataIntegrityError(ValueError):
    """The static dataset is corrupt (bad threshold key, clashing names, ...).

    Raised only at load time; query-time functions assume a validated dataset.
    """

    def __init__(self, message: str, *, where: str | None = None):
        self.where = where
        super().__init__(f"{where}: {message}" if where else message)
