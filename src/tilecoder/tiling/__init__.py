"""Grid tiling and index assignment.

Components:

1. **Grid tiler** (`grid`): float vector -> one integer key per tiling
2. **Index hash table** (`iht`): key -> dense index with bounded capacity
"""

from tilecoder.tiling.grid import (
    TilingKey,
    quantize,
    tiling_key,
    tiling_keys,
)
from tilecoder.tiling.iht import IndexHashTable

__all__ = [
    "IndexHashTable",
    "TilingKey",
    "quantize",
    "tiling_key",
    "tiling_keys",
]
