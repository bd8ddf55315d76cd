#!/usr/bin/env python3
"""
Integer helpers used by the attack, and the totient approximation m.

Python ints are unbounded, so everything here is exact.
"""
from math import isqrt
from typing import Tuple

__all__ = ["isqrt", "divmod_trunc", "is_even", "approximate_modulus"]


def divmod_trunc(n: int, d: int) -> Tuple[int, int]:
    """(n div d, n mod d) with the quotient rounded toward zero."""
    if d == 0:
        raise ZeroDivisionError("divmod_trunc by zero")
    q, r = divmod(abs(n), abs(d))
    if (n < 0) != (d < 0):
        q = -q
    # remainder takes the sign of the dividend
    if n < 0:
        r = -r
    return q, r


def is_even(n: int) -> bool:
    return n % 2 == 0


def approximate_modulus(n: int, sharpened: bool = False) -> int:
    """
    Approximation m of (p-1)(q-1) = pq - p - q + 1, with m above the totient.

    Plain:      m = n
    Sharpened:  m = n - floor(sqrt(4n)) + 1, valid when q < p < 2q.
    Requires n >= 9, which gives m >= 4.
    """
    if not sharpened:
        return n
    return n - isqrt(4 * n) + 1
