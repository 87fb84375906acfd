from __future__ import annotations

from django.db import DatabaseError
from django.db.backends.base.base import BaseDatabaseWrapper


class GenericSessionBackend:
    """
    Fallback for databases without a per-transaction lock wait (e.g. SQLite).

    SQLite serializes writers on the whole database and Django ignores
    ``select_for_update()`` there, so there is no row lock to bound.
    """

    def apply_lock_timeout(
        self, connection: BaseDatabaseWrapper, timeout: float | None
    ) -> None:
        return None

    def is_lock_timeout(self, exc: DatabaseError) -> bool:
        return False

    def is_deadlock(self, exc: DatabaseError) -> bool:
        return False
