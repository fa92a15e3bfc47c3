"""Greatest common divisor helpers for arbitrary-precision integers."""
from __future__ import annotations

import asyncio
import logging
import numbers
from typing import Tuple

LOG = logging.getLogger(__name__)


def _ensure_int(value: numbers.Integral, *, name: str) -> int:
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def _order(a: int, b: int) -> Tuple[int, int]:
    m, n = abs(a), abs(b)
    if m < n:
        return n, m
    return m, n


def gcd(a: numbers.Integral, b: numbers.Integral) -> int:
    """Return the greatest common divisor of *a* and *b*.

    A zero argument yields ``0`` rather than the other operand, so the
    result doubles as a "can this be reduced" signal.
    """
    a = _ensure_int(a, name="a")
    b = _ensure_int(b, name="b")
    if not a or not b:
        return 0
    greater, lesser = _order(a, b)
    if greater == lesser:
        return greater
    while True:
        remainder = greater % lesser
        if not remainder:
            return lesser
        greater, lesser = lesser, remainder


async def gcd_async(a: numbers.Integral, b: numbers.Integral) -> int:
    """Cooperative variant of :func:`gcd`.

    Control is handed back to the event loop after every modulus step, so
    very large operands never block other tasks. The result is identical
    to :func:`gcd`.
    """
    a = _ensure_int(a, name="a")
    b = _ensure_int(b, name="b")
    if not a or not b:
        return 0
    greater, lesser = _order(a, b)
    if greater == lesser:
        return greater
    steps = 0
    while True:
        remainder = greater % lesser
        steps += 1
        if not remainder:
            LOG.debug("gcd_async finished after %d steps", steps)
            return lesser
        greater, lesser = lesser, remainder
        await asyncio.sleep(0)


__all__ = ["gcd", "gcd_async"]
