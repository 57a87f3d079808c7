"""Coordinate hashing.

Why: Both the stateless encoder and the overflow path of the index hash
table need a deterministic, well-mixed scalar for a tiling key.
"""

from tilecoder.hashing.coordinate import (
    DEFAULT_HASH,
    POSITION_INCREMENT,
    TABLE_SIZE,
    CoordinateHash,
    hash_coords,
)

__all__ = [
    "CoordinateHash",
    "DEFAULT_HASH",
    "POSITION_INCREMENT",
    "TABLE_SIZE",
    "hash_coords",
]
