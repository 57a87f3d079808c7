"""Tile coding entry points.

Runs the grid tiler over every tiling and resolves each key to an index.

Why: Resolution is a capability rather than a class hierarchy. Anything with
``resolve(key, readonly) -> int`` can back an encoder, and two variants are
provided:

- ``StatelessResolver(size)``: ``hash(key) % size``, pure
- ``IndexHashTable``: dense first-seen slots, mutated on non-readonly calls

Mutation is explicit at the call site: ``encode_mut`` may grow the table,
``encode_readonly`` never does, and ``encode_stateless`` has no table at all.
Every input is validated before the first key is resolved, so a call either
returns exactly ``num_tilings`` indices or raises without side effects.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from tilecoder.core.errors import validate_size
from tilecoder.hashing.coordinate import DEFAULT_HASH, CoordinateHash
from tilecoder.tiling.grid import TilingKey, tiling_keys
from tilecoder.tiling.iht import IndexHashTable


@runtime_checkable
class Resolver(Protocol):
    """Anything that maps a tiling key to an index."""

    def resolve(self, key: TilingKey, readonly: bool = False) -> int: ...


class StatelessResolver:
    """Resolve keys by hashing alone.

    Why: Needs no memory beyond the hash table words and is safe to share
    between threads, at the price of random collisions from the first key.
    ``readonly`` is accepted for interface parity and has no effect.
    """

    def __init__(self, size: int, hasher: CoordinateHash | None = None) -> None:
        self.size = validate_size(size)
        self.hasher = hasher if hasher is not None else DEFAULT_HASH

    def resolve(self, key: TilingKey, readonly: bool = False) -> int:
        return self.hasher.index(key, self.size)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size})"


def make_index_hash_table(size: int) -> IndexHashTable:
    """Create an empty index hash table of capacity ``size``.

    Raises:
        InvalidCapacityError: If size is not a positive int
    """
    return IndexHashTable(size)


def encode(
    resolver: Resolver,
    num_tilings: int,
    floats: Sequence[float],
    ints: Sequence[int] = (),
    readonly: bool = False,
    wrap_widths: Sequence[int | None] | None = None,
) -> list[int]:
    """Encode a point as one index per tiling.

    Args:
        resolver: Maps keys to indices (``IndexHashTable`` or ``StatelessResolver``)
        num_tilings: Number of tilings, and the length of the result
        floats: Point to encode, in tile-width units
        ints: Discrete values that select a separate partition
        readonly: Forwarded to the resolver; True never mutates a table
        wrap_widths: Optional per-dimension wrap widths in tiles

    Returns:
        ``num_tilings`` indices in tiling order

    Raises:
        InvalidTilingCountError: If num_tilings is not a positive int
        ValueError: On invalid floats, ints or wrap widths
    """
    keys = tiling_keys(num_tilings, floats, ints, wrap_widths)
    return [resolver.resolve(key, readonly) for key in keys]


def encode_mut(
    iht: IndexHashTable,
    num_tilings: int,
    floats: Sequence[float],
    ints: Sequence[int] = (),
) -> list[int]:
    """Encode, assigning table slots to keys not seen before."""
    return encode(iht, num_tilings, floats, ints, readonly=False)


def encode_readonly(
    iht: IndexHashTable,
    num_tilings: int,
    floats: Sequence[float],
    ints: Sequence[int] = (),
) -> list[int]:
    """Encode without mutating the table.

    Unseen keys resolve to their hashed index, which may coincide with a
    slot already owned by another key.
    """
    return encode(iht, num_tilings, floats, ints, readonly=True)


def encode_stateless(
    size: int,
    num_tilings: int,
    floats: Sequence[float],
    ints: Sequence[int] = (),
) -> list[int]:
    """Encode into ``[0, size)`` by hashing, with no table.

    Raises:
        InvalidCapacityError: If size is not a positive int
    """
    return encode(StatelessResolver(size), num_tilings, floats, ints)


def encode_wrap_mut(
    iht: IndexHashTable,
    num_tilings: int,
    floats: Sequence[float],
    wrap_widths: Sequence[int | None],
    ints: Sequence[int] = (),
) -> list[int]:
    """``encode_mut`` with cyclic dimensions (e.g. angles)."""
    return encode(iht, num_tilings, floats, ints, readonly=False, wrap_widths=wrap_widths)


def encode_wrap_readonly(
    iht: IndexHashTable,
    num_tilings: int,
    floats: Sequence[float],
    wrap_widths: Sequence[int | None],
    ints: Sequence[int] = (),
) -> list[int]:
    """``encode_readonly`` with cyclic dimensions."""
    return encode(iht, num_tilings, floats, ints, readonly=True, wrap_widths=wrap_widths)


def encode_wrap_stateless(
    size: int,
    num_tilings: int,
    floats: Sequence[float],
    wrap_widths: Sequence[int | None],
    ints: Sequence[int] = (),
) -> list[int]:
    """``encode_stateless`` with cyclic dimensions."""
    return encode(StatelessResolver(size), num_tilings, floats, ints, wrap_widths=wrap_widths)


__all__ = [
    "Resolver",
    "StatelessResolver",
    "encode",
    "encode_mut",
    "encode_readonly",
    "encode_stateless",
    "encode_wrap_mut",
    "encode_wrap_readonly",
    "encode_wrap_stateless",
    "make_index_hash_table",
]
