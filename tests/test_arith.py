import pytest

from wiener.arith import approximate_modulus, divmod_trunc, is_even


@pytest.mark.parametrize("n, d, expected", [
    (7, 2, (3, 1)),
    (-7, 2, (-3, -1)),
    (7, -2, (-3, 1)),
    (-7, -2, (3, -1)),
    (6, 3, (2, 0)),
    (0, 5, (0, 0)),
])
def test_divmod_trunc(n, d, expected):
    assert divmod_trunc(n, d) == expected


def test_divmod_trunc_big():
    n = 3 ** 400 + 17
    q, r = divmod_trunc(n, 3 ** 200)
    assert q == 3 ** 200
    assert r == 17


def test_divmod_trunc_zero():
    with pytest.raises(ZeroDivisionError):
        divmod_trunc(1, 0)


def test_is_even():
    assert is_even(0)
    assert is_even(-4)
    assert not is_even(2 ** 521 - 1)


def test_approximate_modulus_plain():
    assert approximate_modulus(1451701) == 1451701


def test_approximate_modulus_sharpened():
    # isqrt(4 * 1451701) = 2409
    assert approximate_modulus(1451701, sharpened=True) == 1449293
    assert approximate_modulus(9, sharpened=True) == 4


def test_sharpened_stays_above_totient():
    p, q = 1223, 1187
    n = p * q
    phi = (p - 1) * (q - 1)
    assert phi <= approximate_modulus(n, sharpened=True) < n
