"""Random state handling for prime generation and primality testing.

A single `RandomSource` is created by whoever drives key generation and handed down to every function that needs
randomness. Seeding makes a whole key generation run reproducible, which is mostly of interest for tests.

Typical usage example:

    rng = RandomSource(42)
    rng.randint(2, 97)
    rng.randbits(128)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random


class RandomSource:
    """An explicitly owned random number generator.

    Seeded sources use the Mersenne Twister from `random`, unseeded ones draw from the operating system CSPRNG
    (the same backend `secrets` uses).

    Attributes:
        seed: The seed the source was created with, None if it draws from system entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        if seed is None:
            self._gen: random.Random = random.SystemRandom()
        else:
            self._gen = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Uniform random integer in `[low, high]`, both ends inclusive.

        Raises:
            ValueError: If the range is empty.
        """
        if low > high:
            raise ValueError(f"Empty range [{low}, {high}]")
        return self._gen.randint(low, high)

    def randbits(self, bits: int) -> int:
        """Uniform random integer with `bits` random bits, i.e. in `[0, 2**bits)`.

        Raises:
            ValueError: If `bits` is negative.
        """
        if bits < 0:
            raise ValueError("Number of bits must be non-negative")
        return self._gen.getrandbits(bits)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
