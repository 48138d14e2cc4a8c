from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Literal, Protocol

import structlog

logger = structlog.get_logger(__name__)

Mode = Literal["return_default", "callable"]


class FailureHandler(Protocol):
    """
    Called with the original arguments when the wrapped call fails.
    """
    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


@dataclass(frozen=True)
class FailurePolicy:
    """
    Defines what a best-effort call returns when it raises.

    - "return_default": return ``default`` (default)
    - "callable": call user-provided handler and return its result
    """
    mode: Mode = "return_default"
    default: Any = None
    handler: FailureHandler | None = None


def best_effort(
    *,
    event: str,
    default: Any = None,
    on_failure: FailureHandler | None = None,
):
    """
    Decorator for operations whose failure must never affect the caller.

    The exception is logged as a warning under ``event`` with its traceback,
    then replaced by ``default`` (or by the result of ``on_failure``).

    Examples
    --------
    @best_effort(event="order_list_cache_read_failed")
    def read(key):
        return cache.get(key)

    @best_effort(event="order_list_cache_write_failed", default=False)
    def write(key, value):
        cache.set(key, value)
        return True
    """
    policy = (
        FailurePolicy(mode="callable", handler=on_failure) if on_failure is not None
        else FailurePolicy(default=default)
    )

    def decorator(fn: Callable[..., Any]):
        @wraps(fn)
        def wrapper(*args: Any, **kwargs: Any):
            try:
                return fn(*args, **kwargs)
            except Exception:
                logger.warning(
                    event,
                    function=fn.__qualname__,
                    exc_info=True,
                )
                if policy.mode == "callable" and policy.handler is not None:
                    return policy.handler(*args, **kwargs)
                return policy.default

        return wrapper

    return decorator
