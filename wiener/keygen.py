#!/usr/bin/env python3
"""
Generate RSA keys that Wiener's attack breaks: q < p < 2q and dG < n^0.25 / 3.

G = (p-1)(q-1) / L is 1 when e = d^-1 mod (p-1)(q-1), and gcd(p-1, q-1)
when e = d^-1 mod lcm(p-1, q-1). The attack sees k/dg with g dividing G.
"""
from typing import Callable, Optional

from Crypto.PublicKey import RSA
from Crypto.Util.number import GCD, getPrime, getRandomRange, inverse

from .arith import isqrt

DEFAULT_BITS = 1024
MIN_BITS = 32


def wiener_bound(n: int) -> int:
    """floor(n^0.25 / 3): every dG below this is recovered."""
    return isqrt(isqrt(n)) // 3


def generate_vulnerable_key(bits: int = DEFAULT_BITS, use_lcm: bool = False,
                            randfunc: Optional[Callable[[int], bytes]] = None) -> RSA.RsaKey:
    """
    Build an RSA key with a small private exponent.

    p and q have bits // 2 bits each, so q < p < 2q. e is d^-1 mod
    (p-1)(q-1), or mod L = lcm(p-1, q-1) when use_lcm is set; in that case
    d is kept below n^0.25 / (3G) so dG stays under the bound.
    """
    if bits < MIN_BITS:
        raise ValueError(f"bits must be >= {MIN_BITS}")
    half = bits // 2
    while True:
        p = getPrime(half, randfunc=randfunc)
        q = getPrime(half, randfunc=randfunc)
        if p == q:
            continue
        if p < q:
            p, q = q, p
        n = p * q
        G = GCD(p - 1, q - 1) if use_lcm else 1
        phi = (p - 1) * (q - 1) // G
        limit = wiener_bound(n) // G
        if limit <= 4:
            continue
        # stay in the upper half so e*d comfortably exceeds n
        d = getRandomRange(max(3, limit // 2), limit, randfunc=randfunc)
        if GCD(d, phi) != 1:
            continue
        e = inverse(d, phi)
        if e * d <= n:
            continue
        return RSA.construct((n, e, d, p, q))
