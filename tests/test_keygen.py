import pytest
from Crypto.Util.number import GCD

from wiener.keygen import generate_vulnerable_key, wiener_bound


def test_wiener_bound():
    # n^0.25 = 34.7...
    assert wiener_bound(1451701) == 11


@pytest.mark.parametrize("use_lcm", [False, True])
def test_key_shape(use_lcm):
    key = generate_vulnerable_key(256, use_lcm=use_lcm)
    p, q = max(key.p, key.q), min(key.p, key.q)
    assert q < p < 2 * q
    assert key.n == p * q
    G = GCD(p - 1, q - 1) if use_lcm else 1
    assert key.d * G < wiener_bound(key.n)
    phi = (p - 1) * (q - 1) // G
    assert key.e * key.d % phi == 1
    assert key.e * key.d > key.n


def test_too_few_bits():
    with pytest.raises(ValueError):
        generate_vulnerable_key(16)
