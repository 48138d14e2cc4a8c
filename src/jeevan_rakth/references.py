from __future__ import annotations

import time

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """
    Encode a non-negative integer with the digits ``0-9a-z``.

    Parameters
    ----------
    value : int
        Integer to encode. Must be zero or positive.

    Returns
    -------
    str
        Lowercase base-36 representation, e.g. ``to_base36(35) == "z"``.
    """
    if value < 0:
        raise ValueError(f"cannot base36-encode negative value {value}")

    if value == 0:
        return "0"

    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])

    return "".join(reversed(digits))


def synthesize_payment_reference(order_id: int, now: float | None = None) -> str:
    """
    Build a payment reference for an order that was given none.

    The reference has the shape ``auto-<order_id>-<token>`` where the token is
    the base-36 encoded millisecond timestamp of the call.

    Why the order id is embedded
    ----------------------------
    Timestamps alone collide when two orders commit within the same
    millisecond. The order primary key is unique, so two different orders can
    never end up with the same synthesized reference.

    Parameters
    ----------
    order_id : int
        Primary key of the freshly created order.

    now : float | None
        Seconds since the epoch. Defaults to ``time.time()``.

    Returns
    -------
    str
        Reference suitable for ``Payment.reference``.
    """
    if now is None:
        now = time.time()

    token = to_base36(int(now * 1000))

    return f"auto-{order_id}-{token}"
