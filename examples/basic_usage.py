"""Example usage of tilecoder.

Fits a linear value estimate of ``sin(x) + cos(y)`` over ``[0, 2*pi)^2`` with
tile-coded features and an index hash table.

Why: Shows the typical host loop: scale inputs to tile units, encode with
``TileCoder.encode`` while learning, then query with ``encode_readonly`` so
evaluation never grows the table.

Usage:
    python examples/basic_usage.py

Expected output:
    - Table occupancy after training
    - Mean absolute error on held-out points
"""

import logging
import math

import torch

from tilecoder import TileCoder, TileCoderConfig, recommended_num_tilings

TILES_PER_UNIT = 8 / (2 * math.pi)  # eight tiles across each dimension


def target(x: float, y: float) -> float:
    return math.sin(x) + math.cos(y)


def main() -> None:
    """Train and evaluate a tile-coded linear approximator."""
    logging.basicConfig(level=logging.INFO)

    num_tilings = recommended_num_tilings(2)
    config = TileCoderConfig(size=4096, num_tilings=num_tilings)
    coder = TileCoder(config)
    weights = torch.zeros(config.size)
    step_size = 0.1 / num_tilings

    generator = torch.Generator().manual_seed(0)
    for _ in range(20000):
        x, y = (torch.rand(2, generator=generator) * 2 * math.pi).tolist()
        indices = coder.encode([x * TILES_PER_UNIT, y * TILES_PER_UNIT])
        error = target(x, y) - weights[indices].sum().item()
        weights[indices] += step_size * error

    assert coder.table is not None
    print(f"Table: {coder.table}")

    errors = []
    for _ in range(1000):
        x, y = (torch.rand(2, generator=generator) * 2 * math.pi).tolist()
        indices = coder.encode_readonly([x * TILES_PER_UNIT, y * TILES_PER_UNIT])
        errors.append(abs(target(x, y) - weights[indices].sum().item()))
    print(f"Mean absolute error: {sum(errors) / len(errors):.4f}")


if __name__ == "__main__":
    main()
