"""Exception types for tile coding.

Why: Invalid capacities and tiling counts leave no defined encoding, so they
are rejected at the boundary before any key is built. Both errors subclass
ValueError, which is what callers already catch for bad arguments.
"""

from __future__ import annotations

import numbers


class TileCodingError(Exception):
    """Base class for tile coding errors."""


class InvalidCapacityError(TileCodingError, ValueError):
    """Raised when an index range or table capacity is not a positive integer."""

    def __init__(self, size: object):
        super().__init__(f"size must be a positive integer, got {size!r}")
        self.size = size


class InvalidTilingCountError(TileCodingError, ValueError):
    """Raised when the number of tilings is not a positive integer."""

    def __init__(self, num_tilings: object):
        super().__init__(f"num_tilings must be a positive integer, got {num_tilings!r}")
        self.num_tilings = num_tilings


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a meaningful size
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_size(size: object) -> int:
    """Return ``size`` as an int if it is a positive int, else raise."""
    if not _is_int(size) or size <= 0:  # type: ignore[operator]
        raise InvalidCapacityError(size)
    return int(size)  # type: ignore[call-overload]


def validate_num_tilings(num_tilings: object) -> int:
    """Return ``num_tilings`` as an int if it is a positive int, else raise."""
    if not _is_int(num_tilings) or num_tilings <= 0:  # type: ignore[operator]
        raise InvalidTilingCountError(num_tilings)
    return int(num_tilings)  # type: ignore[call-overload]


__all__ = [
    "InvalidCapacityError",
    "InvalidTilingCountError",
    "TileCodingError",
    "validate_num_tilings",
    "validate_size",
]
