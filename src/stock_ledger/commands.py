"""
Typed request commands and the pure functions that build them.

Parsing never touches the database: a raw mapping (usually a decoded JSON
body) either becomes a command or raises `InvalidArgument`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .exceptions import InvalidArgument


@dataclass(frozen=True)
class BorrowCommand:
    product_id: int
    user_id: int
    quantity: int


@dataclass(frozen=True)
class ReturnCommand:
    borrow_id: int
    quantity_returned: int


def _positive_int(data: Mapping[str, Any], field: str) -> int:
    """
    Read ``data[field]`` as a positive integer.

    Accepts ints and strings of ASCII digits. Booleans, floats, missing
    values, zero and negatives are rejected.
    """
    value = data.get(field)

    if isinstance(value, bool):
        raise InvalidArgument()

    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise InvalidArgument()
        value = int(value)

    if not isinstance(value, int) or value <= 0:
        raise InvalidArgument()

    return value


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidArgument()
    return data


def parse_borrow(data: Any) -> BorrowCommand:
    """
    Build a `BorrowCommand` from ``{"productId", "userId", "quantity"}``.

    Raises
    ------
    InvalidArgument
        If the payload is not a mapping or any field is not a positive
        integer.
    """
    data = _require_mapping(data)
    return BorrowCommand(
        product_id=_positive_int(data, "productId"),
        user_id=_positive_int(data, "userId"),
        quantity=_positive_int(data, "quantity"),
    )


def parse_return(data: Any) -> ReturnCommand:
    """
    Build a `ReturnCommand` from ``{"borrowId", "quantityReturned"}``.

    Raises
    ------
    InvalidArgument
        If the payload is not a mapping or any field is not a positive
        integer.
    """
    data = _require_mapping(data)
    return ReturnCommand(
        borrow_id=_positive_int(data, "borrowId"),
        quantity_returned=_positive_int(data, "quantityReturned"),
    )
