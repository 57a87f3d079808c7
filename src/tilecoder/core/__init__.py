"""Core configuration and error types."""

from tilecoder.core.config import TileCoderConfig, recommended_num_tilings
from tilecoder.core.errors import (
    InvalidCapacityError,
    InvalidTilingCountError,
    TileCodingError,
)

__all__ = [
    "InvalidCapacityError",
    "InvalidTilingCountError",
    "TileCoderConfig",
    "TileCodingError",
    "recommended_num_tilings",
]
