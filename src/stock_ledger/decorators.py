from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from .transaction import _UNSET, run


def transactional(
    fn: Callable[..., Any] | None = None,
    *,
    lock_timeout: float | None = _UNSET,
):
    """
    Decorator that runs every call of the wrapped function through `run`.

    Examples
    --------
    @transactional
    def borrow(command):
        ...

    @transactional(lock_timeout=0.5)
    def return_item(command):
        ...
    """

    def decorator(fn: Callable[..., Any]):
        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any):
            return run(fn, *args, lock_timeout=lock_timeout, **kwargs)

        return wrapper

    if fn is not None:
        return decorator(fn)
    return decorator
