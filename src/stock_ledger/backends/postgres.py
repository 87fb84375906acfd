from __future__ import annotations

from django.db import DatabaseError
from django.db.backends.base.base import BaseDatabaseWrapper

# SQLSTATE codes, see https://www.postgresql.org/docs/current/errcodes-appendix.html
LOCK_NOT_AVAILABLE = "55P03"
DEADLOCK_DETECTED = "40P01"


def _sqlstate(exc: BaseException) -> str | None:
    """
    Return the SQLSTATE of the driver error behind a Django DatabaseError.

    Django wraps driver exceptions and chains the original as ``__cause__``.
    psycopg 3 exposes the code as ``sqlstate``; psycopg2 as ``pgcode``.
    """
    cause = exc.__cause__ or exc
    return getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)


class PostgresSessionBackend:
    """
    PostgreSQL session backend.

    Row locks taken with ``SELECT ... FOR UPDATE`` are held until the
    transaction ends. By default PostgreSQL waits for a conflicting row lock
    forever; this backend bounds that wait with the transaction-local
    ``lock_timeout`` setting.

    Timeout behavior
    ----------------
    - timeout=None:
        No bound, the server default applies.

    - timeout=float:
        Seconds to wait for any single lock before the statement fails with
        SQLSTATE 55P03 (lock_not_available).

    The setting is applied with ``set_config(..., is_local => true)`` so it
    ends with the transaction and never leaks into a reused connection.
    """

    def apply_lock_timeout(
        self, connection: BaseDatabaseWrapper, timeout: float | None
    ) -> None:
        if timeout is None:
            return

        millis = max(int(timeout * 1000), 1)

        with connection.cursor() as cursor:
            cursor.execute(
                "SELECT set_config('lock_timeout', %s, true)", [f"{millis}ms"]
            )

    def is_lock_timeout(self, exc: DatabaseError) -> bool:
        return _sqlstate(exc) == LOCK_NOT_AVAILABLE

    def is_deadlock(self, exc: DatabaseError) -> bool:
        return _sqlstate(exc) == DEADLOCK_DETECTED
