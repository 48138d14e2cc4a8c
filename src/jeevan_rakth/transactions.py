from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog
from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.db.models import F

from .cache import invalidate_order_lists
from .conf import get_setting
from .exceptions import (
    InsufficientStock,
    InvalidOrderRequest,
    OrderPlacementError,
    OrderTransactionFailed,
    ProductNotFound,
    RollbackRequested,
)
from .models import Order, Payment, Product
from .references import synthesize_payment_reference

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PlacedOrder:
    """
    Result of a committed order placement.
    """

    order_id: int
    status: str
    total: Decimal
    created_at: datetime
    payment_id: int
    payment_status: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "order": {
                "id": self.order_id,
                "status": self.status,
                "total": f"{self.total:.2f}",
                "createdAt": self.created_at.isoformat(),
            },
            "payment": {
                "id": self.payment_id,
                "status": self.payment_status,
            },
        }


def _validate_quantity(quantity: Any) -> int:
    # bool is an int subclass; True must not mean "one unit".
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidOrderRequest("Quantity must be an integer.")
    if quantity < 1:
        raise InvalidOrderRequest("Quantity must be at least 1.")
    return quantity


def _fits_column(value: Decimal, model, field_name: str) -> bool:
    field = model._meta.get_field(field_name)
    return len(value.as_tuple().digits) <= field.max_digits


def place_order(
    *,
    buyer_id: int,
    product_id: int,
    quantity: int = 1,
    payment_provider: str | None = None,
    payment_reference: str | None = None,
    simulate_failure: bool = False,
    using: str | None = None,
) -> PlacedOrder:
    """
    Place an order as a single all-or-nothing unit of work.

    Inside one database transaction this checks stock, creates the order,
    decrements the product stock and records a captured payment. Either every
    write commits or none does.

    Parameters
    ----------
    buyer_id : int
        Primary key of the buying user. Not checked up front: an unknown
        buyer surfaces as ``OrderTransactionFailed`` when the foreign key is
        enforced.

    product_id : int
        Primary key of the product to buy.

    quantity : int, default=1
        Units to buy. Must be a positive integer.

    payment_provider : str | None
        Free-form provider label. Defaults to
        ``JEEVAN_RAKTH["DEFAULT_PAYMENT_PROVIDER"]``.

    payment_reference : str | None
        Payment reference. Synthesized from the order id when omitted.

    simulate_failure : bool, default=False
        Abort after every write has been issued, to prove rollback.

    using : str | None
        Database alias. Defaults to the default database.

    Returns
    -------
    PlacedOrder
        The committed order and payment.

    Raises
    ------
    InvalidOrderRequest
        ``quantity`` is not a positive integer (nothing was sent to the
        database), or the order total does not fit the stored amount.
    ProductNotFound
        No product with ``product_id``.
    InsufficientStock
        Fewer than ``quantity`` units in stock.
    RollbackRequested
        ``simulate_failure`` was set.
    OrderTransactionFailed
        Any database error. The original error is chained.

    Notes
    -----
    The product row is read with ``SELECT ... FOR UPDATE`` and the stock is
    changed with a relative decrement that also requires
    ``stock >= quantity``, so concurrent placements on the same product can
    never oversell even under READ COMMITTED isolation. On databases without
    row locks (SQLite) writers are serialized by the database itself.

    The order list cache is invalidated after commit, best-effort.
    """
    quantity = _validate_quantity(quantity)
    db = using or DEFAULT_DB_ALIAS
    provider = payment_provider or get_setting("DEFAULT_PAYMENT_PROVIDER")

    log = logger.bind(buyer_id=buyer_id, product_id=product_id, quantity=quantity)

    try:
        with transaction.atomic(using=db):
            product = (
                Product.objects.using(db)
                .select_for_update()
                .only("id", "stock", "price")
                .filter(pk=product_id)
                .first()
            )
            if product is None:
                raise ProductNotFound(product_id)

            if product.stock < quantity:
                raise InsufficientStock(product_id, quantity, available=product.stock)

            total = (product.price * quantity).quantize(CENTS)
            if not (_fits_column(total, Order, "total") and _fits_column(total, Payment, "amount")):
                raise InvalidOrderRequest("Order total exceeds the maximum supported amount.")

            order = Order.objects.using(db).create(
                buyer_id=buyer_id,
                product_id=product.pk,
                quantity=quantity,
                total=total,
                status=Order.Status.PLACED,
            )

            decremented = (
                Product.objects.using(db)
                .filter(pk=product.pk, stock__gte=quantity)
                .update(stock=F("stock") - quantity)
            )
            if decremented != 1:
                raise InsufficientStock(product_id, quantity)

            payment = Payment.objects.using(db).create(
                order=order,
                amount=total,
                provider=provider,
                reference=payment_reference or synthesize_payment_reference(order.pk),
                status=Payment.Status.CAPTURED,
            )

            if simulate_failure:
                raise RollbackRequested()

            transaction.on_commit(invalidate_order_lists, using=db)

    except OrderPlacementError as exc:
        log.info("order_rejected", code=exc.code)
        raise
    except DatabaseError as exc:
        log.error("order_transaction_failed", error=str(exc), exc_info=True)
        raise OrderTransactionFailed() from exc

    log.info("order_placed", order_id=order.pk, payment_id=payment.pk, total=str(total))

    return PlacedOrder(
        order_id=order.pk,
        status=str(order.status),
        total=total,
        created_at=order.created_at,
        payment_id=payment.pk,
        payment_status=str(payment.status),
    )
