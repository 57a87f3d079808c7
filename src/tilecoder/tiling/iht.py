"""Bounded index hash table.

Assigns dense indices ``0, 1, 2, ...`` to tiling keys in first-seen order and
falls back to hashed collisions once every slot is taken.

Why: A stateless ``hash(key) % size`` wastes capacity, because most of the
coordinate space is never visited and visited keys collide at random. The
table instead hands out slots only to keys that actually occur, so
``size`` bounds memory while collisions start only after ``size`` distinct
keys have been seen. Past that point representation quality degrades by
aliasing rather than failing.

State machine:
- NOT_FULL: unseen keys (non-readonly) receive ``count`` and count grows
- FULL (once ``count == size``, irreversible): unseen keys resolve to
  ``hash(key) % size`` and ``overflow_count`` grows by one per event

Readonly resolution never mutates. Unseen keys resolve to their hashed
index without being stored, so readers can share a trained table without a
lock. Mutating calls on a shared table need one external lock.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Callable, Hashable, Mapping
from typing import Any

from tilecoder.core.errors import validate_size
from tilecoder.hashing.coordinate import DEFAULT_HASH, CoordinateHash

logger = logging.getLogger(__name__)

STATE_KEYS = ("size", "count", "overflow_count", "mapping")


class IndexHashTable:
    """Key to dense index map with fixed capacity.

    Why: Gives tile coding a compact, collision-free index space for the
    keys that actually occur, with bounded memory.

    Usage:
        table = IndexHashTable(4096)
        table.upsert((0, 28, 57))   # 0, stored
        table.upsert((1, 29, 57))   # 1, stored
        table.lookup((0, 28, 57))   # 0, never stores

    Attributes:
        on_full: Optional observer called once with the table on the first
            overflow event
        hasher: Coordinate hash used for readonly misses and overflow
    """

    def __init__(
        self,
        size: int,
        on_full: Callable[[IndexHashTable], Any] | None = None,
        hasher: CoordinateHash | None = None,
        warn_on_full: bool = True,
    ) -> None:
        """Create an empty table.

        Args:
            size: Capacity and index range. Must be a positive int.
            on_full: Called once when the first key is refused a slot
            hasher: Hash for misses; defaults to the seed-0 table
            warn_on_full: Log a warning on the first overflow event

        Raises:
            InvalidCapacityError: If size is not a positive int
        """
        self._size = validate_size(size)
        self._mapping: dict[Hashable, int] = {}
        self._overflow_count = 0
        self.on_full = on_full
        self.hasher = hasher if hasher is not None else DEFAULT_HASH
        self.warn_on_full = warn_on_full

    @property
    def size(self) -> int:
        """Capacity of the table, also the exclusive upper bound of indices."""
        return self._size

    @property
    def count(self) -> int:
        """Number of keys holding a dedicated slot."""
        return len(self._mapping)

    @property
    def overflow_count(self) -> int:
        """Number of keys refused a slot since the table filled up."""
        return self._overflow_count

    @property
    def is_full(self) -> bool:
        return len(self._mapping) >= self._size

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, key: object) -> bool:
        return key in self._mapping

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self._size}, count={self.count}, "
            f"overflow_count={self._overflow_count})"
        )

    def get_index(self, key: Hashable) -> int | None:
        """Return the slot stored for ``key``, or None if it has none."""
        return self._mapping.get(key)

    def resolve(self, key: Hashable, readonly: bool = False) -> int:
        """Resolve a key to an index in ``[0, size)``.

        Why: Single entry point implementing the whole slot policy so the
        readonly and mutating paths cannot drift apart.

        Args:
            key: Tiling key (tuple of ints)
            readonly: If True, never store the key or touch the counters

        Returns:
            The stored index for a known key, the next free slot for a new
            key while space remains, and ``hash(key) % size`` otherwise
        """
        index = self._mapping.get(key)
        if index is not None:
            return index
        if readonly:
            return self.hasher.index(key, self._size)  # type: ignore[arg-type]

        count = len(self._mapping)
        if count < self._size:
            self._mapping[key] = count
            return count

        if self._overflow_count == 0:
            self._report_full()
        self._overflow_count += 1
        return self.hasher.index(key, self._size)  # type: ignore[arg-type]

    def lookup(self, key: Hashable) -> int:
        """Resolve without mutating. Safe for concurrent readers."""
        return self.resolve(key, readonly=True)

    def upsert(self, key: Hashable) -> int:
        """Resolve, assigning a slot to a new key while space remains."""
        return self.resolve(key, readonly=False)

    def _report_full(self) -> None:
        # Only the first overflow is reported; later ones are just counted
        if self.warn_on_full:
            logger.warning(
                "Index hash table full (size=%d, count=%d), starting to allow collisions",
                self._size,
                len(self._mapping),
            )
        if self.on_full is not None:
            self.on_full(self)

    def state_dict(self) -> dict[str, Any]:
        """Snapshot the mapping and counters as plain Python objects.

        Why: Hosts that persist a trained table need the exact mapping and
        counters, not a replay of the calls that built it. Storage format is
        left to the caller (pickle, JSON with list keys, torch.save, ...).

        Returns:
            Dict with ``size``, ``count``, ``overflow_count`` and a copy of
            ``mapping``
        """
        return {
            "size": self._size,
            "count": len(self._mapping),
            "overflow_count": self._overflow_count,
            "mapping": dict(self._mapping),
        }

    @classmethod
    def from_state_dict(
        cls,
        state: Mapping[str, Any],
        on_full: Callable[[IndexHashTable], Any] | None = None,
        hasher: CoordinateHash | None = None,
        warn_on_full: bool = True,
    ) -> IndexHashTable:
        """Rebuild a table from ``state_dict`` output.

        Insertion order of the mapping is irrelevant; only the key/index
        pairs and the counters are restored.

        Raises:
            ValueError: If fields are missing or the mapping is inconsistent
                with the counters (duplicate or out-of-range indices)
            InvalidCapacityError: If the stored size is invalid
        """
        missing = [name for name in STATE_KEYS if name not in state]
        if missing:
            raise ValueError(f"State dict missing keys: {missing}")

        table = cls(state["size"], on_full=on_full, hasher=hasher, warn_on_full=warn_on_full)
        mapping = _coerce_mapping(state["mapping"])
        count = _require_int("count", state["count"])
        overflow_count = _require_int("overflow_count", state["overflow_count"])

        if count != len(mapping):
            raise ValueError(f"count {count} does not match {len(mapping)} stored keys")
        if count > table.size:
            raise ValueError(f"count {count} exceeds size {table.size}")
        if sorted(mapping.values()) != list(range(count)):
            raise ValueError(f"Stored indices must be exactly 0..{count - 1}, each used once")
        if overflow_count < 0 or (overflow_count > 0 and count < table.size):
            raise ValueError(
                f"overflow_count {overflow_count} is inconsistent with count {count} "
                f"and size {table.size}"
            )

        table._mapping = mapping
        table._overflow_count = overflow_count
        logger.debug("Restored %r", table)
        return table


def _coerce_mapping(raw: Any) -> dict[Hashable, int]:
    """Accept a key->index mapping or (key, index) pairs, e.g. from JSON."""
    pairs = raw.items() if isinstance(raw, Mapping) else raw
    # JSON round trips turn tuple keys into lists
    return {
        (tuple(key) if isinstance(key, list) else key): _require_int("index", index)
        for key, index in pairs
    }


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


__all__ = [
    "IndexHashTable",
]
