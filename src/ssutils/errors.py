"""Exceptions raised by the Schmidt-Samoa utilities.

Each one extends the built-in exception family it would otherwise be raised as, so callers catching `IOError`,
`RuntimeError` or `ValueError` keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class InvalidKeyFormat(IOError):
    """A key file could not be parsed."""


class ModularInverseNotFound(RuntimeError):
    """The private exponent has no inverse. Only possible with primes that violate the key-pair conditions."""


class MalformedCiphertext(ValueError):
    """A ciphertext token is not a hexadecimal integer.

    Attributes:
        blocks: Number of blocks decrypted and written before the bad token.
        line: One-based line number of the bad token.
    """

    def __init__(self, message: str, blocks: int = 0, line: int = 0) -> None:
        super().__init__(message)
        self.blocks = blocks
        self.line = line
