"""Configuration for tile coders.

Defines the index range, tiling count and resolution mode of a ``TileCoder``.

Why: A tile coder's parameters have to agree with the consumer's weight
vector (``size``) and with each other (wrap widths vs. dimensions), and a
mismatch shows up only as silently degraded learning. A validated dataclass
catches bad values at construction rather than mid-episode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from tilecoder.core.errors import validate_num_tilings, validate_size
from tilecoder.tiling.grid import validate_wrap_widths


@dataclass
class TileCoderConfig:
    """Configuration for a ``TileCoder``.

    Why: Sutton & Barto recommend a power-of-two number of tilings at least
    four times the number of input dimensions, so the asymmetric offsets
    cover the space evenly. ``recommended_num_tilings`` computes that; it is
    a recommendation, not a constraint.

    Attributes:
        size: Index range ``[0, size)`` and index hash table capacity. Match
              this to the length of the consumer's weight vector.
        num_tilings: Number of overlapping tilings (indices per encode)
        mode: "iht" assigns dense slots through an index hash table,
              "stateless" hashes every key straight into ``[0, size)``
        wrap_widths: Optional per-dimension wrap widths in tiles; None or 0
              entries leave a dimension unbounded
        hash_seed: Seed of the coordinate hash word table
        warn_on_full: Log a warning the first time the table overflows
    """

    size: int = 4096
    num_tilings: int = 8
    mode: Literal["iht", "stateless"] = "iht"
    wrap_widths: tuple[int | None, ...] | None = None
    hash_seed: int = 0
    warn_on_full: bool = True

    def __post_init__(self) -> None:
        """Validate configuration.

        Why: Early validation prevents cryptic errors during encoding.
        """
        self.size = validate_size(self.size)
        self.num_tilings = validate_num_tilings(self.num_tilings)
        if self.mode not in ("iht", "stateless"):
            raise ValueError(f"mode must be 'iht' or 'stateless', got {self.mode!r}")
        if self.wrap_widths is not None:
            self.wrap_widths = validate_wrap_widths(self.wrap_widths, len(self.wrap_widths))

    @property
    def tiles_per_encode(self) -> int:
        """Number of active features per encoded point."""
        return self.num_tilings

    @property
    def is_power_of_two_tilings(self) -> bool:
        return self.num_tilings & (self.num_tilings - 1) == 0


def recommended_num_tilings(num_dims: int) -> int:
    """Smallest power of two that is at least ``4 * num_dims`` (minimum 4).

    Args:
        num_dims: Number of float dimensions to be encoded

    Returns:
        Recommended ``num_tilings``
    """
    if num_dims < 0:
        raise ValueError(f"num_dims must be non-negative, got {num_dims}")
    target = max(4, 4 * num_dims)
    return 1 << (target - 1).bit_length()
