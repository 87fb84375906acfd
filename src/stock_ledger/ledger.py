"""
Stock ledger protocol: list products, borrow stock, return stock.

Borrow and return each run as one transaction that locks the row they decide
on (``SELECT ... FOR UPDATE``) before checking it, so concurrent requests on
the same product or borrow record are serialized by the database. Any
rejection raises inside the transaction and rolls it back, leaving the store
exactly as it was.
"""

from __future__ import annotations

import logging

from django.db import DEFAULT_DB_ALIAS, connections
from django.db.models import F

from .backends import backend_for_vendor
from .commands import BorrowCommand, ReturnCommand
from .decorators import transactional
from .exceptions import AlreadyReturned, InsufficientStock, NotFound, OverReturn
from .models import BorrowingRecord, Product, ReturningRecord
from .transaction import release, store_errors

logger = logging.getLogger(__name__)


def list_products(using: str = DEFAULT_DB_ALIAS) -> list[Product]:
    """Return every product ordered by name. Reads only, takes no locks."""
    connection = connections[using]
    try:
        with store_errors(backend_for_vendor(connection.vendor)):
            return list(Product.objects.using(using).order_by("product_name"))
    finally:
        release(connection)


@transactional
def borrow(command: BorrowCommand) -> BorrowingRecord:
    """
    Take ``command.quantity`` units out of stock and open a borrow record.

    Raises
    ------
    NotFound
        If the product does not exist.
    InsufficientStock
        If the product has fewer units than requested.
    """
    try:
        product = Product.objects.select_for_update().get(pk=command.product_id)
    except Product.DoesNotExist:
        raise NotFound("Product not found") from None

    if product.current_stock < command.quantity:
        raise InsufficientStock()

    Product.objects.filter(pk=product.pk).update(
        current_stock=F("current_stock") - command.quantity
    )

    record = BorrowingRecord.objects.create(
        product_id=product.pk,
        user_id=command.user_id,
        quantity_borrowed=command.quantity,
        status=BorrowingRecord.Status.OPEN,
    )

    logger.info(
        "Borrowed %s of product %s for user %s (borrow %s)",
        command.quantity,
        product.pk,
        command.user_id,
        record.borrow_id,
    )
    return record


@transactional
def return_item(command: ReturnCommand) -> bool:
    """
    Put ``command.quantity_returned`` units back and log the return.

    The borrow record is closed only when this single return equals the
    quantity originally borrowed. Earlier partial returns are not summed.
    Returns True when this return closed the record.

    Raises
    ------
    NotFound
        If the borrow record does not exist.
    AlreadyReturned
        If the borrow record is already closed.
    OverReturn
        If more units are returned than were borrowed.
    """
    try:
        record = BorrowingRecord.objects.select_for_update().get(
            pk=command.borrow_id
        )
    except BorrowingRecord.DoesNotExist:
        raise NotFound("Borrow record not found") from None

    if record.status == BorrowingRecord.Status.RETURNED:
        raise AlreadyReturned()

    if command.quantity_returned > record.quantity_borrowed:
        raise OverReturn()

    Product.objects.filter(pk=record.product_id).update(
        current_stock=F("current_stock") + command.quantity_returned
    )

    ReturningRecord.objects.create(
        borrow_id=record.borrow_id,
        quantity_returned=command.quantity_returned,
        returned_by_user_id=record.user_id,
    )

    closed = command.quantity_returned == record.quantity_borrowed
    if closed:
        record.status = BorrowingRecord.Status.RETURNED
        record.save(update_fields=["status"])

    logger.info(
        "Returned %s against borrow %s (closed=%s)",
        command.quantity_returned,
        record.borrow_id,
        closed,
    )
    return closed


def check_store(using: str = DEFAULT_DB_ALIAS) -> None:
    """
    Verify the store is reachable by running a trivial query.

    Raises
    ------
    StoreUnavailable
        If the connection or the query fails.
    """
    connection = connections[using]
    try:
        with store_errors():
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
    finally:
        connection.close()
