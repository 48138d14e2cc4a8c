from __future__ import annotations

import json
from typing import Any

from django.db import connection
from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_safe

from .cache import ORDERS_NAMESPACE, get_or_load
from .conf import get_setting
from .exceptions import OrderPlacementError, OrderTransactionFailed
from .models import Order
from .responses import (
    DATABASE_UNAVAILABLE,
    ORDERS_FETCH_FAILED,
    VALIDATION_ERROR,
    error_response,
    handle_error,
    success_response,
)
from .transactions import place_order


class _BadRequest(Exception):
    pass


# Primary keys and offsets are signed 64-bit integers in every backend.
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def _int_param(value: Any, name: str, *, required: bool = False) -> int | None:
    """
    Accept JSON integers and plain ASCII digit strings within the signed
    64-bit range; reject booleans, floats and anything else.
    """
    if value is None or value == "":
        if required:
            raise _BadRequest(f"{name} is required.")
        return None
    if isinstance(value, bool):
        raise _BadRequest(f"{name} must be an integer.")
    if isinstance(value, str):
        digits = value[1:] if value.startswith("-") else value
        if not (digits.isascii() and digits.isdigit()):
            raise _BadRequest(f"{name} must be an integer.")
        value = int(value)
    if not isinstance(value, int):
        raise _BadRequest(f"{name} must be an integer.")
    if not INT64_MIN <= value <= INT64_MAX:
        raise _BadRequest(f"{name} is out of range.")
    return value


def _str_param(value: Any, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _BadRequest(f"{name} must be a string.")
    return value or None


def _serialize_order(order: Order) -> dict[str, Any]:
    return {
        "id": order.pk,
        "status": order.status,
        "quantity": order.quantity,
        "total": f"{order.total:.2f}",
        "createdAt": order.created_at.isoformat(),
        "product": {
            "id": order.product_id,
            "name": order.product.name,
            "sku": order.product.sku,
        },
        "user": {
            "id": order.buyer_id,
            "username": order.buyer.get_username(),
            "email": getattr(order.buyer, "email", ""),
        },
    }


def _list_orders(request: HttpRequest) -> HttpResponse:
    try:
        skip = _int_param(request.GET.get("skip"), "skip") or 0
        take = _int_param(request.GET.get("take"), "take")
        user_id = _int_param(request.GET.get("userId"), "userId")
    except _BadRequest as exc:
        return error_response(str(exc), status=400, code=VALIDATION_ERROR)

    if skip < 0:
        return error_response("skip must not be negative.", status=400, code=VALIDATION_ERROR)

    if take is None:
        take = get_setting("ORDER_LIST_DEFAULT_PAGE_SIZE")
    take = min(max(take, 1), get_setting("ORDER_LIST_MAX_PAGE_SIZE"))
    status = request.GET.get("status") or None

    def load() -> dict[str, Any]:
        qs = Order.objects.all()
        if status:
            qs = qs.filter(status=status)
        if user_id is not None:
            qs = qs.filter(buyer_id=user_id)

        page = qs.select_related("product", "buyer").order_by("-created_at", "-id")[
            skip : skip + take
        ]
        return {
            "orders": [_serialize_order(order) for order in page],
            "meta": {"skip": skip, "take": take, "total": qs.count()},
        }

    params = {"skip": skip, "take": take, "status": status, "userId": user_id}

    try:
        payload, hit = get_or_load(ORDERS_NAMESPACE, params, load)
    except Exception as exc:
        return handle_error(exc, "orders.list", code=ORDERS_FETCH_FAILED)

    response = success_response(
        "Orders retrieved successfully",
        {"orders": payload["orders"]},
        meta=payload["meta"],
    )
    response["X-Cache"] = "HIT" if hit else "MISS"
    return response


def _place_order(request: HttpRequest) -> HttpResponse:
    try:
        body = json.loads(request.body or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response("Request body must be valid JSON.", status=400, code=VALIDATION_ERROR)

    if not isinstance(body, dict):
        return error_response("Request body must be a JSON object.", status=400, code=VALIDATION_ERROR)

    try:
        buyer_id = _int_param(body.get("userId"), "userId", required=True)
        product_id = _int_param(body.get("productId"), "productId", required=True)
        quantity = _int_param(body.get("quantity"), "quantity")
        payment_provider = _str_param(body.get("paymentProvider"), "paymentProvider")
        payment_reference = _str_param(body.get("paymentReference"), "paymentReference")
        simulate_failure = body.get("simulateFailure", False)
        if not isinstance(simulate_failure, bool):
            raise _BadRequest("simulateFailure must be a boolean.")
    except _BadRequest as exc:
        return error_response(str(exc), status=400, code=VALIDATION_ERROR)

    if quantity is not None and quantity < 1:
        return error_response("Quantity must be at least 1.", status=400, code=VALIDATION_ERROR)

    if simulate_failure and not get_setting("ALLOW_SIMULATED_FAILURE"):
        return error_response(
            "Simulated failures are disabled.", status=400, code=VALIDATION_ERROR
        )

    try:
        result = place_order(
            buyer_id=buyer_id,
            product_id=product_id,
            quantity=1 if quantity is None else quantity,
            payment_provider=payment_provider,
            payment_reference=payment_reference,
            simulate_failure=simulate_failure,
        )
    except OrderPlacementError as exc:
        return error_response(str(exc), status=exc.status, code=exc.code)
    except Exception as exc:
        return handle_error(exc, "orders.place", code=OrderTransactionFailed.code)

    return success_response("Order placed successfully", result.as_dict(), status=201)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def orders(request: HttpRequest) -> HttpResponse:
    """
    GET lists orders (cached), POST places one.
    """
    if request.method == "POST":
        return _place_order(request)
    return _list_orders(request)


@require_safe
def health_database(request: HttpRequest) -> HttpResponse:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except Exception as exc:
        return handle_error(exc, "health.database", status=503, code=DATABASE_UNAVAILABLE)

    return success_response("Database reachable", {"database": "ok"})
