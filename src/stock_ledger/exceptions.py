"""
Exception hierarchy for stock_ledger.

Every failure the ledger can report is a subclass of `StockLedgerError`.
Business-rule rejections (`InvalidArgument`, `NotFound`, `InsufficientStock`,
`AlreadyReturned`, `OverReturn`) are raised before anything is written, or
inside a transaction that is rolled back. `StoreUnavailable` wraps driver
errors raised while talking to the database.

Each class carries a stable `code` for programmatic handling and a default
message, which is what HTTP clients receive in the ``error`` field.
"""


class StockLedgerError(Exception):
    """
    Base exception for all stock_ledger errors.

    Example
    -------
    >>> try:
    ...     borrow(command)
    ... except StockLedgerError as exc:
    ...     report(exc.code, str(exc))
    """

    code: str = "stock_ledger_error"
    default_message: str = "An unspecified stock ledger error occurred."

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = self.default_message
        super().__init__(message)


class InvalidArgument(StockLedgerError):
    """Raised when request input is missing, malformed, zero or negative."""

    code = "invalid_argument"
    default_message = "Invalid request data"


class NotFound(StockLedgerError):
    """Raised when the product or borrow record does not exist."""

    code = "not_found"
    default_message = "Resource not found"


class InsufficientStock(StockLedgerError):
    """Raised when a borrow asks for more than the product's current stock."""

    code = "insufficient_stock"
    default_message = "Not enough stock available"


class AlreadyReturned(StockLedgerError):
    """Raised when a return targets a borrow record that is already closed."""

    code = "already_returned"
    default_message = "This item has already been fully returned."


class OverReturn(StockLedgerError):
    """Raised when the returned quantity exceeds the quantity borrowed."""

    code = "over_return"
    default_message = "Quantity returned exceeds quantity borrowed."


class StoreUnavailable(StockLedgerError):
    """
    Raised when the database cannot complete an operation.

    Covers connection failures, constraint violations, deadlocks and any
    other driver error. The original driver exception is chained as
    ``__cause__``.
    """

    code = "store_unavailable"
    default_message = "The store could not complete the operation."


class LockTimeout(StoreUnavailable):
    """
    Raised when a row lock cannot be acquired within the configured wait.

    This typically means another request holds the same product or borrow
    record row. Retrying later is safe: the transaction was rolled back.
    """

    code = "lock_timeout"
    default_message = "Resource is busy, try again"
