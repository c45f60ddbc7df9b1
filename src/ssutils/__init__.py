"""Schmidt-Samoa Utilities in an Academic Sense.

Provides key generation for the Schmidt-Samoa cryptosystem, where the public exponent is the public modulus itself,
and a block-oriented encryption/decryption of byte streams. The number theory underneath (Euclid, modular
exponentiation, Miller-Rabin, random primes) is implemented here as well.

Typical usage example:

    rng = RandomSource(42)
    pk = SSPrivKey.generate(256, rng=rng, owner="alice")
    c = pk.pub.encrypt(b"Hi there!")
    r = pk.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from ssutils.errors import InvalidKeyFormat
from ssutils.errors import MalformedCiphertext
from ssutils.errors import ModularInverseNotFound
from ssutils.keygen import generate_key_pair
from ssutils.keygen import make_private
from ssutils.keygen import make_public
from ssutils.numtheory import gcd
from ssutils.numtheory import is_prime
from ssutils.numtheory import make_prime
from ssutils.numtheory import mod_inverse
from ssutils.numtheory import pow_mod
from ssutils.randstate import RandomSource
from ssutils.ss import SSPrivKey
from ssutils.ss import SSPubKey

__version__ = "0.0.1"
__all__ = [
    "SSPrivKey",
    "SSPubKey",
    "RandomSource",
    "gcd",
    "mod_inverse",
    "pow_mod",
    "is_prime",
    "make_prime",
    "make_public",
    "make_private",
    "generate_key_pair",
    "InvalidKeyFormat",
    "MalformedCiphertext",
    "ModularInverseNotFound",
]
