"""
Modular arithmetic used by the key generators.

Everything here works on plain Python ints. Randomness for Miller-Rabin
witnesses comes from the ``rng`` argument, which must behave like
``random.Random``; when omitted a fresh ``random.SystemRandom`` is used.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from genkey.errors import NotInvertibleError

MILLER_RABIN_ROUNDS = 64

# The 168 primes below 1000, used for trial division
SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
    101, 103, 107, 109, 113, 127, 131, 137, 139, 149, 151, 157, 163, 167, 173, 179, 181, 191, 193,
    197, 199, 211, 223, 227, 229, 233, 239, 241, 251, 257, 263, 269, 271, 277, 281, 283, 293, 307,
    311, 313, 317, 331, 337, 347, 349, 353, 359, 367, 373, 379, 383, 389, 397, 401, 409, 419, 421,
    431, 433, 439, 443, 449, 457, 461, 463, 467, 479, 487, 491, 499, 503, 509, 521, 523, 541, 547,
    557, 563, 569, 571, 577, 587, 593, 599, 601, 607, 613, 617, 619, 631, 641, 643, 647, 653, 659,
    661, 673, 677, 683, 691, 701, 709, 719, 727, 733, 739, 743, 751, 757, 761, 769, 773, 787, 797,
    809, 811, 821, 823, 827, 829, 839, 853, 857, 859, 863, 877, 881, 883, 887, 907, 911, 919, 929,
    937, 941, 947, 953, 967, 971, 977, 983, 991, 997,
)


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean algorithm.

    Returns (g, x, y) with a*x + b*y == g == gcd(a, b).
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y

    return old_r, old_x, old_y


def mod_inverse(a: int, m: int) -> int:
    """Return x in [0, m) such that a*x == 1 (mod m)."""
    if m < 2:
        raise NotInvertibleError(f"modulus must be at least 2 (got {m})")

    g, x, _ = egcd(a % m, m)
    if g != 1:
        raise NotInvertibleError(f"{a} has no inverse modulo {m} (gcd is {g})")

    while x < 0:
        x += m
    return x


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Return base**exponent mod modulus."""
    if modulus <= 0:
        raise ValueError(f"modulus must be positive (got {modulus})")
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative (got {exponent})")
    return pow(base, exponent, modulus)


def is_probably_prime(
    n: int,
    rng: Optional[random.Random] = None,
    rounds: int = MILLER_RABIN_ROUNDS,
) -> bool:
    """
    Miller-Rabin primality test preceded by trial division.

    Composites are rejected with certainty once a witness is found; a prime
    verdict is wrong with probability at most 4**-rounds.
    """
    if n < 2:
        return False

    for prime in SMALL_PRIMES:
        if n == prime:
            return True
        if n % prime == 0:
            return False

    if rng is None:
        rng = random.SystemRandom()

    # n - 1 = d * 2**k with d odd
    k = 0
    d = n - 1
    while d % 2 == 0:
        k += 1
        d >>= 1

    for _ in range(rounds):
        a = rng.randrange(2, n - 1)
        b = mod_pow(a, d, n)
        if b == 1:
            continue
        for _ in range(k):
            if b == n - 1:
                break
            b = mod_pow(b, 2, n)
        else:
            return False

    return True
