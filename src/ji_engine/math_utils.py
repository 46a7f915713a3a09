from __future__ import annotations

from typing import Tuple


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of |a| and |b| (Euclid on non-negative remainders).

    The second argument plays the role of a denominator, so it must be nonzero.
    """
    if b == 0:
        raise ZeroDivisionError("gcd with a zero divisor")
    a, b = abs(a), abs(b)
    while a % b > 0:
        a, b = b, a % b
    return b


def reduce(a: int, b: int) -> Tuple[int, int]:
    """Return (a/g, b/g) where g = gcd(a, b). Signs are left as given."""
    g = gcd(a, b)
    return a // g, b // g


def sign_preserving_mod(a: int, b: int) -> int:
    """Modulo whose result takes the sign of `b`.

    For positive b the result is always in [0, b), so negative lattice indices
    wrap around instead of producing a negative remainder.
    """
    if b == 0:
        raise ZeroDivisionError("modulo by zero")
    return ((a % b) + b) % b


def greatest_prime_factor(a: int) -> int:
    """Largest prime factor of `a` by trial division from 2.

    greatest_prime_factor(1) returns 2: no factor is ever stripped and the
    starting divisor is returned unchanged.
    """
    if a < 1:
        raise ValueError(f"greatest_prime_factor needs a positive integer, got {a}")
    factor = 2
    while a > 1:
        if a % factor == 0:
            a //= factor
        else:
            factor += 1
    return factor
