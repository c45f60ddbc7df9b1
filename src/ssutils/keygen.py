"""Core Key Generation Utility for the Schmidt-Samoa cryptosystem.

Picks two primes p and q such that `n = p**2 * q` has roughly the requested size, and derives the private exponent
`d = n**-1 mod lcm(p - 1, q - 1)`. The public key is `n` itself, the private key is `(p*q, d)`.

Typical usage example:

    rng = RandomSource(42)
    p, q, n = make_public(256, 50, rng)
    pq, d = make_private(p, q)
    (n, bsize), (pq, d, bsize) = generate_key_pair(256, 50, rng)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import Literal, overload

from ssutils.errors import ModularInverseNotFound
from ssutils.numtheory import gcd
from ssutils.numtheory import make_prime
from ssutils.numtheory import mod_inverse
from ssutils.randstate import RandomSource

logger = logging.getLogger(__name__)

MIN_TOTAL_BITS: int = 24
# Sentinel byte plus at least one payload byte.
_MIN_BLOCK_SIZE: int = 2


def block_size_for(modulus: int) -> int:
    """Number of bytes in a plaintext block for the given modulus.

    Halving the modulus down to zero counts its bits; one bit is held back so every block stays below the modulus.

    Args:
        modulus: The modulus blocks are reduced by.

    Returns:
        The block size in bytes, sentinel byte included.
    """
    return (modulus.bit_length() - 1) // 8


def _acceptable(p: int, q: int) -> bool:
    """Key pair conditions. The divisibility checks make n invertible modulo lcm(p - 1, q - 1)."""
    if p == q:
        return False
    if (q - 1) % p == 0 or (p - 1) % q == 0:
        return False
    return block_size_for(p * q) >= _MIN_BLOCK_SIZE


def make_public(total_bits: int,
                iterations: int,
                rng: RandomSource | None = None,
                max_attempts: int | None = None) -> tuple[int, int, int]:
    """Generates the primes and public modulus of a key pair.

    The bit length of p is drawn uniformly from `[total_bits / 5, 2 * total_bits / 5]`, q gets whatever is left after
    p squared. A rejected pair is thrown away as a whole and the process restarts with a new size for p.

    Args:
        total_bits: Target bit length of the public modulus. Must be at least `MIN_TOTAL_BITS`.
        iterations: Miller-Rabin rounds for every prime candidate.
        rng: The random source. A fresh unseeded source if omitted.
        max_attempts: Give up after this many rejected pairs. Unbounded if None.

    Returns:
        Tuple of (p, q, n) with `n = p**2 * q`.

    Raises:
        ValueError: If `total_bits` is too small to hold a usable key.
        RuntimeError: If `max_attempts` pairs were rejected.
    """
    if total_bits < MIN_TOTAL_BITS:
        raise ValueError(f"Key size must be at least {MIN_TOTAL_BITS} bits.")
    if rng is None:
        rng = RandomSource()
    low, high = total_bits // 5, (2 * total_bits) // 5
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        p = make_prime(rng.randint(low, high), iterations, rng)
        q = make_prime(total_bits - (p * p).bit_length(), iterations, rng)
        if _acceptable(p, q):
            logger.debug("Accepted %d-bit p and %d-bit q after %d attempts", p.bit_length(), q.bit_length(), attempts)
            return p, q, p * p * q
        logger.debug("Rejected prime pair on attempt %d, restarting", attempts)
    raise RuntimeError(f"Rejected {max_attempts} prime pairs in a row. Check the random source.")


def make_private(p: int, q: int) -> tuple[int, int]:
    """Derives the private key from the primes.

    Args:
        p: The first prime, the one that appears squared in the public modulus.
        q: The second prime.

    Returns:
        Tuple of (pq, d).

    Raises:
        ModularInverseNotFound: If n is not invertible modulo lcm(p - 1, q - 1), which valid key pairs rule out.
    """
    pq = p * q
    n = pq * p
    lam = (p - 1) * (q - 1) // gcd(p - 1, q - 1)
    d = mod_inverse(n, lam)
    if d is None:
        raise ModularInverseNotFound("Public modulus has no inverse modulo lambda(pq). Primes violate key conditions.")
    return pq, d


@overload
def generate_key_pair(total_bits: int,
                      iterations: int = 50,
                      rng: RandomSource | None = None,
                      expose_primes: Literal[False] = False) -> tuple[tuple[int, int], tuple[int, int, int]]:
    ...


@overload
def generate_key_pair(total_bits: int,
                      iterations: int = 50,
                      rng: RandomSource | None = None,
                      expose_primes: Literal[True] = False) -> tuple[tuple[int, int], tuple[int, int, int, int, int]]:
    ...


def generate_key_pair(
    total_bits: int,
    iterations: int = 50,
    rng: RandomSource | None = None,
    expose_primes: bool = False
) -> tuple[tuple[int, int], tuple[int, int, int]] | tuple[tuple[int, int], tuple[int, int, int, int, int]]:
    """Generates a Schmidt-Samoa key pair.

    The block size is fixed here, from pq, and handed to both halves so encryption and decryption agree on it.

    Args:
        total_bits: Target bit length of the public modulus.
        iterations: Miller-Rabin rounds for every prime candidate. Defaults to 50.
        rng: The random source. A fresh unseeded source if omitted.
        expose_primes: Whether to export the prime numbers as well or not. Defaults to False.

    Returns:
        A tuple of (public, private) sub-tuples: (n, block size) and (pq, d, block size), or if exposed for the
        private (pq, d, block size, p, q).
    """
    p, q, n = make_public(total_bits, iterations, rng)
    pq, d = make_private(p, q)
    bsize = block_size_for(pq)
    if not expose_primes:
        del p, q
        return (n, bsize), (pq, d, bsize)
    return (n, bsize), (pq, d, bsize, p, q)
