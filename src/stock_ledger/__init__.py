from .commands import BorrowCommand, ReturnCommand, parse_borrow, parse_return
from .exceptions import (
    AlreadyReturned,
    InsufficientStock,
    InvalidArgument,
    LockTimeout,
    NotFound,
    OverReturn,
    StockLedgerError,
    StoreUnavailable,
)

__all__ = [
    "BorrowCommand",
    "ReturnCommand",
    "parse_borrow",
    "parse_return",
    "StockLedgerError",
    "InvalidArgument",
    "NotFound",
    "InsufficientStock",
    "AlreadyReturned",
    "OverReturn",
    "StoreUnavailable",
    "LockTimeout",
]
