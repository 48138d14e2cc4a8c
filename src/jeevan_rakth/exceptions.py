"""
Exception hierarchy for order placement.

This module defines all public exceptions raised while placing an order.

Callers are encouraged to catch `OrderPlacementError` when they want to handle
every failure of the workflow, or more specific subclasses such as
`InsufficientStock` when they need fine-grained control. Each class carries a
machine-readable ``code`` and the HTTP ``status`` the view layer answers with.
"""

from __future__ import annotations


class OrderPlacementError(Exception):
    """
    Base exception for all order placement errors.

    Whatever the subclass, the transaction that raised it has been rolled back
    and nothing it wrote is visible.

    Example
    -------
    >>> try:
    ...     place_order(buyer_id=1, product_id=7, quantity=2)
    ... except OrderPlacementError as exc:
    ...     report(exc.code)
    """

    code: str = "ORDER_TRANSACTION_FAILED"
    status: int = 500
    default_message: str = "Order failed, changes rolled back."

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = self.default_message
        super().__init__(message)


class InvalidOrderRequest(OrderPlacementError):
    """
    Raised when the request is rejected before any database work happens.
    """

    code = "VALIDATION_ERROR"
    status = 400
    default_message = "Invalid order request."


class ProductNotFound(OrderPlacementError):
    """
    Raised when the requested product does not exist.
    """

    code = "PRODUCT_NOT_FOUND"
    status = 404
    default_message = "Product not found."

    def __init__(self, product_id: object, message: str | None = None) -> None:
        self.product_id = product_id
        super().__init__(message)


class InsufficientStock(OrderPlacementError):
    """
    Raised when the requested quantity exceeds the available stock.

    Not retried automatically: the caller decides whether to reissue the
    order with a smaller quantity.
    """

    code = "INSUFFICIENT_STOCK"
    status = 409
    default_message = "Insufficient product inventory."

    def __init__(
        self,
        product_id: object,
        requested: int,
        available: int | None = None,
        message: str | None = None,
    ) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(message)


class RollbackRequested(OrderPlacementError):
    """
    Raised after every write of the transaction when the caller asked for a
    simulated failure. Only used to prove rollback behaviour.
    """

    code = "ROLLBACK_TEST"
    status = 418
    default_message = "Transaction rolled back as requested. No data was persisted."


class OrderTransactionFailed(OrderPlacementError):
    """
    Raised for unexpected infrastructure faults (lost connection, constraint
    violation, unknown buyer). The original database error is chained as
    ``__cause__``.
    """
