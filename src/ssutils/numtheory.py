"""Number theory toolbox backing the Schmidt-Samoa key generation and block transform.

Covers the Euclidean algorithms, modular exponentiation, the Miller-Rabin primality test and random prime search.
Everything that needs randomness takes an explicit `RandomSource`; when none is given a fresh, unseeded one is used.

Typical usage example:

    rng = RandomSource(42)
    p = make_prime(512, 50, rng)
    d = mod_inverse(65537, p - 1)
    c = pow_mod(1234, 65537, p)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from ssutils.randstate import RandomSource

logger = logging.getLogger(__name__)

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by the Euclidean algorithm.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        The non-negative gcd. `gcd(0, 0)` is 0.
    """
    while b != 0:
        a, b = b, a % b
    return abs(a)


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Extended Euclid: returns `(g, s, t)` with `a*s + b*t = g = gcd(a, b)`."""
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r:
        quotient = old_r // r
        old_r, r = r, old_r % r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t
    return old_r, old_s, old_t


def mod_inverse(a: int, n: int) -> int | None:
    """Modular multiplicative inverse via the Extended Euclidean Algorithm.

    Args:
        a: The value to invert.
        n: The modulus. Must be >= 1.

    Returns:
        The unique `x` in `[0, n)` with `a*x = 1 (mod n)`, or None if `a` and `n` are not coprime.

    Raises:
        ValueError: If `n` is smaller than 1.
    """
    if n < 1:
        raise ValueError("Modulus must be positive")
    g, s, _ = eea(a % n, n)
    if g != 1:
        return None
    return s % n


def pow_mod(base: int, exponent: int, modulus: int) -> int:
    """Right-to-left binary modular exponentiation.

    Takes O(log exponent) modular multiplications.

    Args:
        base: The base, any integer.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        `base**exponent mod modulus`.

    Raises:
        ValueError: On a negative exponent or non-positive modulus.
    """
    if exponent < 0:
        raise ValueError("Negative exponents are not supported")
    if modulus < 1:
        raise ValueError("Modulus must be positive")
    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def _sieve(n: int = 10000) -> list[int]:
    """All primes up to and including `n`, by an odd-only Sieve of Eratosthenes.

    Slot `i` of the table stands for the odd number `2*i + 3`.
    """
    if n < 2:
        return []
    slots = (n - 1) // 2
    odd: list[bool] = [True] * slots
    for i in range(int(n**0.5) // 2):
        if not odd[i]:
            continue
        step = 2 * i + 3
        first = (step * step - 3) // 2
        odd[first::step] = [False] * len(range(first, slots, step))
    return [2] + [2 * i + 3 for i, flag in enumerate(odd) if flag]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Small primes for trial division, kept in a module cache that only grows.

    Args:
        n: Upper bound the caller needs covered. Must be >= 0.
        change: Re-sieve to exactly `n`, shrinking the cache if `n` is lower.

    Returns:
        The cached ascending primes, reaching at least `n` unless `change` shrank them.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Rejects candidates with a small factor before the Miller-Rabin rounds.

    Stops early once the factor squared passes `no`, so small primes themselves get through.

    Returns:
        False if `no` is below 2 or has a factor among the primes up to `n`, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def is_prime(n: int, iterations: int, rng: RandomSource | None = None) -> bool:
    """Perform the Miller-Rabin primality test.

    Writes `n - 1 = 2**s * r` with `r` odd, then runs `iterations` rounds with a uniformly random witness in
    `[2, n - 2]`. A composite survives all rounds with probability at most `4**-iterations`.

    Note that 3 has an empty witness range and is answered directly. The test is meant for multi-bit candidates.

    Args:
        n: The number to test.
        iterations: Number of Miller-Rabin rounds.
        rng: Source of the witnesses. A fresh unseeded source if omitted.

    Returns:
        True if `n` is probably prime, False if it is certainly composite.
    """
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False
    if rng is None:
        rng = RandomSource()
    n_minus_one = n - 1
    s = (n_minus_one & -n_minus_one).bit_length() - 1
    r = n_minus_one >> s
    for _ in range(iterations):
        witness = pow_mod(rng.randint(2, n - 2), r, n)
        if witness == 1 or witness == n_minus_one:
            continue
        for _ in range(1, s):
            witness = pow_mod(witness, 2, n)
            if witness == n_minus_one:
                break
            if witness == 1:
                return False
        else:
            return False
    return True


def make_prime(bits: int, iterations: int, rng: RandomSource | None = None, max_draws: int | None = None) -> int:
    """Generate a random probable prime of exactly `bits` bits.

    Candidates are `2**(bits - 1)` plus `bits - 1` random bits, so the top bit is always set and the result never
    grows past `bits`. Each candidate goes through trial division before Miller-Rabin.

    Args:
        bits: Bit length of the prime. Must be >= 2.
        iterations: Miller-Rabin rounds per candidate.
        rng: Source of candidates and witnesses. A fresh unseeded source if omitted.
        max_draws: Give up after this many candidates. Unbounded if None.

    Returns:
        A probable prime `p` with `p.bit_length() == bits`.

    Raises:
        ValueError: If `bits` is smaller than 2.
        RuntimeError: If `max_draws` candidates were drawn without finding a prime.
    """
    if bits < 2:
        raise ValueError("Primes need at least 2 bits")
    if rng is None:
        rng = RandomSource()
    floor = 1 << (bits - 1)
    draws = 0
    while max_draws is None or draws < max_draws:
        draws += 1
        candidate = floor + rng.randbits(bits - 1)
        if _trial_division(candidate) and is_prime(candidate, iterations, rng):
            logger.debug("Found %d-bit prime after %d draws", bits, draws)
            return candidate
    raise RuntimeError(f"Drew {max_draws} candidates with no {bits}-bit prime found. Check the random source.")
