import pytest

from stock_ledger.commands import BorrowCommand, ReturnCommand, parse_borrow, parse_return
from stock_ledger.exceptions import InvalidArgument


def test_parse_borrow_builds_command():
    cmd = parse_borrow({"productId": 1, "userId": 9, "quantity": 3})

    assert cmd == BorrowCommand(product_id=1, user_id=9, quantity=3)


def test_parse_borrow_accepts_digit_strings():
    cmd = parse_borrow({"productId": "4", "userId": " 2 ", "quantity": "1"})

    assert cmd == BorrowCommand(product_id=4, user_id=2, quantity=1)


@pytest.mark.parametrize(
    "payload",
    [
        {"userId": 1, "quantity": 1},
        {"productId": 1, "quantity": 1},
        {"productId": 1, "userId": 1},
        {"productId": 1, "userId": 1, "quantity": 0},
        {"productId": 1, "userId": 1, "quantity": -2},
        {"productId": 0, "userId": 1, "quantity": 1},
        {"productId": 1, "userId": None, "quantity": 1},
        {"productId": 1, "userId": 1, "quantity": 1.5},
        {"productId": 1, "userId": 1, "quantity": True},
        {"productId": "abc", "userId": 1, "quantity": 1},
        {"productId": "-1", "userId": 1, "quantity": 1},
        {"productId": "²", "userId": 1, "quantity": 1},
        {"productId": 1, "userId": "١", "quantity": 1},
    ],
)
def test_parse_borrow_rejects_invalid_payloads(payload):
    with pytest.raises(InvalidArgument) as excinfo:
        parse_borrow(payload)

    assert str(excinfo.value) == "Invalid request data"


@pytest.mark.parametrize("payload", [None, [], "productId=1", 42])
def test_parse_rejects_non_mapping_bodies(payload):
    with pytest.raises(InvalidArgument):
        parse_borrow(payload)
    with pytest.raises(InvalidArgument):
        parse_return(payload)


def test_parse_return_builds_command():
    cmd = parse_return({"borrowId": 7, "quantityReturned": 2})

    assert cmd == ReturnCommand(borrow_id=7, quantity_returned=2)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"borrowId": 7},
        {"quantityReturned": 1},
        {"borrowId": 7, "quantityReturned": 0},
        {"borrowId": -7, "quantityReturned": 1},
        {"borrowId": False, "quantityReturned": 1},
    ],
)
def test_parse_return_rejects_invalid_payloads(payload):
    with pytest.raises(InvalidArgument):
        parse_return(payload)


def test_parse_ignores_unknown_fields():
    cmd = parse_return({"borrowId": 1, "quantityReturned": 1, "note": "late"})

    assert cmd.borrow_id == 1
