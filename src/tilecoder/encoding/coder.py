"""Configured tile coder.

Why: Most hosts encode every observation with the same size, tiling count
and table. ``TileCoder`` bundles those so call sites pass only the point,
while the free functions in ``encoder`` stay available for callers that
thread the table themselves.
"""

from __future__ import annotations

from collections.abc import Sequence

import torch

from tilecoder.core.config import TileCoderConfig
from tilecoder.encoding.encoder import StatelessResolver, encode
from tilecoder.encoding.features import dense_features
from tilecoder.hashing.coordinate import CoordinateHash
from tilecoder.tiling.iht import IndexHashTable


class TileCoder:
    """Tile coder bound to one configuration and one resolver.

    In "iht" mode the coder owns an ``IndexHashTable`` and ``encode`` grows
    it; ``encode_readonly`` never does. In "stateless" mode both behave the
    same and nothing is stored.

    Usage:
        coder = TileCoder(TileCoderConfig(size=4096, num_tilings=8))
        indices = coder.encode([x * 4, xdot * 2], ints=[action])
        value = weights[indices].sum()

    Attributes:
        config: The validated configuration
        resolver: ``IndexHashTable`` or ``StatelessResolver``
    """

    def __init__(
        self,
        config: TileCoderConfig | None = None,
        table: IndexHashTable | None = None,
    ) -> None:
        """Create a coder.

        Args:
            config: Configuration (defaults to ``TileCoderConfig()``)
            table: Existing table to share or restore; its size and hash seed
                must match the config. The table keeps its own ``warn_on_full``
                and ``on_full`` settings. Ignored in stateless mode.

        Raises:
            ValueError: If ``table`` is given and its size or hash seed differs
                from the config
        """
        self.config = config if config is not None else TileCoderConfig()
        hasher = CoordinateHash(self.config.hash_seed)

        self.resolver: IndexHashTable | StatelessResolver
        if self.config.mode == "stateless":
            self.resolver = StatelessResolver(self.config.size, hasher=hasher)
        elif table is not None:
            if table.size != self.config.size:
                raise ValueError(
                    f"Table size {table.size} does not match config size {self.config.size}"
                )
            if table.hasher.seed != self.config.hash_seed:
                raise ValueError(
                    f"Table hash seed {table.hasher.seed} does not match "
                    f"config hash_seed {self.config.hash_seed}"
                )
            self.resolver = table
        else:
            self.resolver = IndexHashTable(
                self.config.size,
                hasher=hasher,
                warn_on_full=self.config.warn_on_full,
            )

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def num_tilings(self) -> int:
        return self.config.num_tilings

    @property
    def table(self) -> IndexHashTable | None:
        """The owned index hash table, or None in stateless mode."""
        return self.resolver if isinstance(self.resolver, IndexHashTable) else None

    def encode(self, floats: Sequence[float], ints: Sequence[int] = ()) -> list[int]:
        """Encode a point, assigning slots to new keys in "iht" mode."""
        return encode(
            self.resolver,
            self.config.num_tilings,
            floats,
            ints,
            readonly=False,
            wrap_widths=self.config.wrap_widths,
        )

    def encode_readonly(self, floats: Sequence[float], ints: Sequence[int] = ()) -> list[int]:
        """Encode a point without mutating the table."""
        return encode(
            self.resolver,
            self.config.num_tilings,
            floats,
            ints,
            readonly=True,
            wrap_widths=self.config.wrap_widths,
        )

    def features(
        self,
        floats: Sequence[float],
        ints: Sequence[int] = (),
        readonly: bool = False,
    ) -> torch.Tensor:
        """Encode a point straight to a multi-hot tensor of shape (size,)."""
        indices = self.encode_readonly(floats, ints) if readonly else self.encode(floats, ints)
        return dense_features(indices, self.config.size)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self.config.size}, "
            f"num_tilings={self.config.num_tilings}, resolver={self.resolver!r})"
        )


__all__ = [
    "TileCoder",
]
