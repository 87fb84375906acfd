from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from . import ledger
from .commands import parse_borrow, parse_return
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

logger = logging.getLogger(__name__)

# Rejections the client can act on. Checked in order, so subclasses first.
_CLIENT_ERRORS: tuple[tuple[type[StockLedgerError], int], ...] = (
    (InvalidArgument, 400),
    (InsufficientStock, 400),
    (AlreadyReturned, 400),
    (OverReturn, 400),
    (NotFound, 404),
    (LockTimeout, 409),
)


def _error(message: str, *, status: int, details: str | None = None) -> JsonResponse:
    """
    Small helper to keep error bodies consistent across endpoints.
    """
    payload = {"error": message}
    if details:
        payload["details"] = details
    return JsonResponse(payload, status=status)


def _client_status(exc: StockLedgerError) -> int | None:
    for cls, status in _CLIENT_ERRORS:
        if isinstance(exc, cls):
            return status
    return None


def _json_body(request: HttpRequest) -> Any:
    try:
        return json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise InvalidArgument() from None


def _handle(exc: StockLedgerError, failure: str) -> JsonResponse:
    """
    Map a ledger error to a response.

    Rejections are expected traffic and logged without a traceback; store
    failures are logged with one and answered with 500 plus details.
    """
    status = _client_status(exc)
    if status is not None:
        logger.info("Rejected (%s): %s", exc.code, exc)
        return _error(str(exc), status=status)

    logger.exception("%s: %s", failure, exc)
    return _error(failure, status=500, details=str(exc))


@csrf_exempt
@require_GET
def products(request: HttpRequest) -> HttpResponse:
    """List all products ordered by name."""
    try:
        items = ledger.list_products()
    except StoreUnavailable as exc:
        logger.exception("Error fetching products: %s", exc)
        return _error("Failed to fetch products", status=500)

    return JsonResponse([p.as_dict() for p in items], safe=False)


@csrf_exempt
@require_POST
def borrow(request: HttpRequest) -> HttpResponse:
    """
    Borrow stock. Body: ``{"productId": 1, "userId": 1, "quantity": 2}``.
    """
    try:
        command = parse_borrow(_json_body(request))
        record = ledger.borrow(command)
    except StockLedgerError as exc:
        return _handle(exc, "Failed to borrow item")

    return JsonResponse(
        {"message": "Item borrowed successfully", "record": record.as_dict()},
        status=201,
    )


@csrf_exempt
@require_POST
def return_item(request: HttpRequest) -> HttpResponse:
    """
    Return stock. Body: ``{"borrowId": 1, "quantityReturned": 1}``.
    """
    try:
        command = parse_return(_json_body(request))
        ledger.return_item(command)
    except StockLedgerError as exc:
        return _handle(exc, "Failed to return item")

    return JsonResponse({"message": "Item returned successfully"})
