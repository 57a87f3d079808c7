"""Coordinate hashing for tiling keys.

Compresses an ordered sequence of integers (a tiling key) into one unsigned
64-bit integer with a near-uniform distribution.

Why: Two places need a scalar from a key. The stateless encoder maps keys
straight into ``[0, size)`` with ``hash(key) % size``, and a full index hash
table falls back to the same expression when it runs out of slots. Python's
built-in ``hash`` of an int tuple is stable, but its low bits are poorly
mixed for small consecutive integers, which is exactly what tile
coordinates are, so ``% size`` would cluster.

The scheme is the UNH CMAC hash:
1. Element ``k_i`` at position ``i`` picks a word from a fixed table of 2048
   random 64-bit words at ``(k_i + 449 * i) & 2047``
2. The picked words are summed modulo 2**64

The position increment makes the hash order-sensitive, and the table is
drawn from a seeded generator so every process with the same seed agrees.
Not cryptographic.
"""

from __future__ import annotations

from collections.abc import Iterable

import torch

TABLE_SIZE = 2048
POSITION_INCREMENT = 449

_TABLE_MASK = TABLE_SIZE - 1
_WORD_MASK = (1 << 64) - 1


class CoordinateHash:
    """Seeded additive hash over a random word table.

    Why: Keeping the word table on an instance (rather than a module global)
    lets callers pick a seed for independent hash families while the default
    instance keeps results reproducible across runs.

    Usage:
        hasher = CoordinateHash(seed=7)
        hasher((3, 28, 903))          # unsigned 64-bit int
        hasher.index((3, 28, 903), 4096)  # in [0, 4096)

    Attributes:
        seed: Seed used to draw the word table
    """

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed
        generator = torch.Generator().manual_seed(seed)
        words = torch.randint(
            -(2**63),
            2**63 - 1,
            (TABLE_SIZE,),
            generator=generator,
            dtype=torch.int64,
        )
        # Plain ints avoid tensor indexing overhead in the per-key loop
        self._words: list[int] = [w & _WORD_MASK for w in words.tolist()]

    def __call__(self, key: Iterable[int]) -> int:
        """Hash a key to an unsigned 64-bit integer.

        Args:
            key: Ordered integers, e.g. ``(tiling, coord_1, ..., int_k)``

        Returns:
            Integer in ``[0, 2**64)``
        """
        words = self._words
        total = 0
        for position, element in enumerate(key):
            total += words[(element + POSITION_INCREMENT * position) & _TABLE_MASK]
        return total & _WORD_MASK

    def index(self, key: Iterable[int], size: int) -> int:
        """Hash a key into ``[0, size)``."""
        return self(key) % size

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"


DEFAULT_HASH = CoordinateHash()


def hash_coords(key: Iterable[int]) -> int:
    """Hash a key with the default seed-0 table."""
    return DEFAULT_HASH(key)


__all__ = [
    "CoordinateHash",
    "DEFAULT_HASH",
    "POSITION_INCREMENT",
    "TABLE_SIZE",
    "hash_coords",
]
