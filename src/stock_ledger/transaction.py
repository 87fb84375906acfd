from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Protocol, TypeVar

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, DatabaseError, InterfaceError, connections, transaction
from django.db.backends.base.base import BaseDatabaseWrapper

from .backends import backend_for_vendor
from .exceptions import LockTimeout, StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_LOCK_TIMEOUT = 3.0

_UNSET: Any = object()


class SessionBackend(Protocol):
    """
    Protocol describing the per-vendor hooks used by `run`.

    This keeps the transaction helper independent of the database engine:
    PostgreSQL bounds row-lock waits, other engines do nothing.
    """
    def apply_lock_timeout(
        self, connection: BaseDatabaseWrapper, timeout: float | None
    ) -> None: ...
    def is_lock_timeout(self, exc: DatabaseError) -> bool: ...
    def is_deadlock(self, exc: DatabaseError) -> bool: ...


def default_lock_timeout() -> float | None:
    return getattr(settings, "STOCK_LEDGER_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT)


def release(connection: BaseDatabaseWrapper) -> None:
    """
    Hand the connection back once an operation is over.

    Broken connections and connections older than ``CONN_MAX_AGE`` are
    closed; healthy ones stay open for reuse. Nothing happens while an outer
    atomic block is still running on the connection.
    """
    if connection.in_atomic_block:
        return
    connection.close_if_unusable_or_obsolete()


@contextmanager
def store_errors(backend: SessionBackend | None = None) -> Iterator[None]:
    """
    Translate driver errors raised in the block into ledger exceptions.

    Raises
    ------
    LockTimeout
        If the backend recognises the error as an exceeded lock wait.
    StoreUnavailable
        For any other ``DatabaseError`` or ``InterfaceError``.
    """
    try:
        yield
    except (DatabaseError, InterfaceError) as exc:
        if backend is not None and backend.is_lock_timeout(exc):
            raise LockTimeout() from exc
        if backend is not None and backend.is_deadlock(exc):
            logger.warning("Deadlock detected, transaction rolled back")
        raise StoreUnavailable(str(exc)) from exc


def run(
    fn: Callable[..., T],
    /,
    *args: Any,
    lock_timeout: float | None = _UNSET,
    backend: SessionBackend | None = None,
    **kwargs: Any,
) -> T:
    """
    Execute ``fn(*args, **kwargs)`` inside a single database transaction.

    The transaction commits when ``fn`` returns and rolls back when it
    raises; the exception then propagates. Driver errors are translated to
    `StoreUnavailable` (or `LockTimeout`) after the rollback. The connection
    is released on every exit path.

    The transaction always runs on the default database, which is where
    the ledger models read and write.

    Parameters
    ----------
    fn : callable
        Unit of work. It must not commit or roll back by itself.

    lock_timeout : float | None
        Maximum time (in seconds) to wait for each row lock. Defaults to the
        ``STOCK_LEDGER_LOCK_TIMEOUT`` setting. None waits indefinitely.

    backend : SessionBackend | None
        Optional backend override. Defaults to the backend matching the
        connection vendor.

    Example
    -------
    >>> record = run(_borrow, command)
    """
    connection = connections[DEFAULT_DB_ALIAS]
    be = backend or backend_for_vendor(connection.vendor)

    if lock_timeout is _UNSET:
        lock_timeout = default_lock_timeout()

    try:
        with store_errors(be):
            with transaction.atomic(using=DEFAULT_DB_ALIAS):
                be.apply_lock_timeout(connection, lock_timeout)
                return fn(*args, **kwargs)
    finally:
        release(connection)
