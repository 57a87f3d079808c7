"""Encoding entry points.

Components:

1. **Free functions** (`encoder`): ``encode_mut``, ``encode_readonly``,
   ``encode_stateless`` and their wrapping variants, with the caller
   threading the table through every call
2. **TileCoder** (`coder`): the same operations bound to a config
3. **Features** (`features`): multi-hot tensors from index lists
"""

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
from tilecoder.encoding.features import (
    active_count,
    dense_features,
    dense_features_batch,
)

__all__ = [
    "Resolver",
    "StatelessResolver",
    "TileCoder",
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
    "make_index_hash_table",
]
