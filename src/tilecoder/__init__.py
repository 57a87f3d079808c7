"""
tilecoder: Tile coding with bounded index hash tables.

Encodes a point in a continuous space (optionally with discrete values) as
``num_tilings`` integer indices, a sparse binary representation for linear
online learners such as Sarsa(lambda) with tile-coded features.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from tilecoder.core.config import TileCoderConfig, recommended_num_tilings
from tilecoder.core.errors import (
    InvalidCapacityError,
    InvalidTilingCountError,
    TileCodingError,
)
from tilecoder.encoding.coder import TileCoder
from tilecoder.encoding.encoder import (
    Resolver,
    StatelessResolver,
    encode,
    encode_mut,
    encode_readonly,
    encode_stateless,
    encode_wrap_mut,
    encode_wrap_readonly,
    encode_wrap_stateless,
    make_index_hash_table,
)
from tilecoder.encoding.features import active_count, dense_features, dense_features_batch
from tilecoder.hashing.coordinate import CoordinateHash, hash_coords
from tilecoder.tiling.grid import TilingKey, tiling_keys
from tilecoder.tiling.iht import IndexHashTable

__all__ = [
    "CoordinateHash",
    "IndexHashTable",
    "InvalidCapacityError",
    "InvalidTilingCountError",
    "Resolver",
    "StatelessResolver",
    "TileCoder",
    "TileCoderConfig",
    "TileCodingError",
    "TilingKey",
    "active_count",
    "dense_features",
    "dense_features_batch",
    "encode",
    "encode_mut",
    "encode_readonly",
    "encode_stateless",
    "encode_wrap_mut",
    "encode_wrap_readonly",
    "encode_wrap_stateless",
    "hash_coords",
    "make_index_hash_table",
    "recommended_num_tilings",
    "tiling_keys",
    "__version__",
]
