from .exceptions import (
    InsufficientStock,
    InvalidOrderRequest,
    OrderPlacementError,
    OrderTransactionFailed,
    ProductNotFound,
    RollbackRequested,
)

__all__ = [
    "OrderPlacementError",
    "InvalidOrderRequest",
    "ProductNotFound",
    "InsufficientStock",
    "RollbackRequested",
    "OrderTransactionFailed",
]
