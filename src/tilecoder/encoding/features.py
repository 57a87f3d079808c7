"""Dense feature vectors from tile indices.

Why: Linear learners indexed by tiles only need the index list
(``weights[indices].sum()``), but hosts built on tensor layers want a
multi-hot vector. These helpers turn already-encoded index lists into
tensors; they do not encode anything themselves.
"""

from __future__ import annotations

from collections.abc import Sequence

import torch


def _check_range(indices: Sequence[int], size: int) -> None:
    for index in indices:
        if index < 0 or index >= size:
            raise ValueError(f"Index {index} out of range [0, {size})")


def dense_features(
    indices: Sequence[int],
    size: int,
    dtype: torch.dtype = torch.float32,
) -> torch.Tensor:
    """Multi-hot vector with ones at the active tile positions.

    Args:
        indices: Output of an encode call
        size: Index range the indices were produced for
        dtype: Tensor dtype

    Returns:
        Tensor of shape (size,). Colliding indices set a single 1.

    Raises:
        ValueError: If any index is outside ``[0, size)``
    """
    _check_range(indices, size)
    features = torch.zeros(size, dtype=dtype)
    if len(indices) > 0:
        features[torch.as_tensor(list(indices), dtype=torch.long)] = 1
    return features


def dense_features_batch(
    batch: Sequence[Sequence[int]],
    size: int,
    dtype: torch.dtype = torch.float32,
) -> torch.Tensor:
    """Stack ``dense_features`` for several index lists.

    Returns:
        Tensor of shape (B, size)
    """
    features = torch.zeros(len(batch), size, dtype=dtype)
    for row, indices in enumerate(batch):
        _check_range(indices, size)
        if len(indices) > 0:
            features[row, torch.as_tensor(list(indices), dtype=torch.long)] = 1
    return features


def active_count(indices: Sequence[int]) -> int:
    """Number of distinct active positions (below ``len(indices)`` on collisions)."""
    return len(set(indices))


__all__ = [
    "active_count",
    "dense_features",
    "dense_features_batch",
]
