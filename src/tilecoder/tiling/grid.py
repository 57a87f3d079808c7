"""Displaced-grid quantization.

Turns a float vector into one integer key per tiling.

Why: Each tiling is a grid of unit-width tiles. Offsetting the tilings
against each other by a fraction of a tile lets ``num_tilings`` coarse grids
act together like one grid ``num_tilings`` times finer, while every single
feature still generalizes over a whole tile.

Quantization works in units of ``1 / num_tilings`` of a tile:
1. ``qf_i = floor(f_i * num_tilings)`` is the fine sub-cell of dimension i
2. Tiling t shifts dimension i by ``b_i = t + 2 * t * i`` sub-cells, so the
   per-dimension offsets follow the odd numbers 1, 3, 5, ... scaled by t
3. ``coord_i = (qf_i + b_i) // num_tilings`` is the tile in tiling t

The asymmetric offsets stop all tilings from shifting along the diagonal,
which would make generalization lopsided. Floor division keeps negative
inputs on the same grid as positive ones.

Keys are ``(t, coord_1, ..., coord_d, *ints)``. The trailing ints give each
discrete value its own partition of the space instead of an offset within it.

Scaling inputs so one unit is the desired tile width is the caller's job.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Sequence
from fractions import Fraction

from tilecoder.core.errors import validate_num_tilings

TilingKey = tuple[int, ...]


def quantize(floats: Sequence[float], num_tilings: int) -> list[int]:
    """Quantize floats to sub-cell indices at ``1 / num_tilings`` resolution.

    Args:
        floats: Point to encode
        num_tilings: Number of tilings (sub-cells per tile)

    Returns:
        ``floor(f * num_tilings)`` for each float, as unbounded Python ints

    Raises:
        ValueError: If any float is NaN or infinite
    """
    qfloats: list[int] = []
    for f in floats:
        if not math.isfinite(f):
            raise ValueError(f"floats must be finite, got {f!r}")
        try:
            product = f * num_tilings
        except OverflowError:
            product = math.inf
        if math.isinf(product):
            # Product left the float range; floor the exact rational instead
            qfloats.append(math.floor(Fraction(f) * num_tilings))
        else:
            qfloats.append(math.floor(product))
    return qfloats


def tiling_key(
    tiling: int,
    num_tilings: int,
    qfloats: Sequence[int],
    ints: Sequence[int] = (),
    wrap_widths: Sequence[int | None] | None = None,
) -> TilingKey:
    """Build the key of one tiling from pre-quantized floats.

    Why: Split from ``tiling_keys`` so callers that already hold quantized
    values (or want a single tiling) skip the float pass.

    Args:
        tiling: Tiling index in ``[0, num_tilings)``
        num_tilings: Number of tilings
        qfloats: Output of ``quantize``
        ints: Discrete values appended unchanged
        wrap_widths: Optional per-dimension wrap width in tiles. A positive
            width makes that dimension cyclic; None or 0 leaves it unbounded.

    Returns:
        ``(tiling, coord_1, ..., coord_d, *ints)``
    """
    coords = [tiling]
    step = tiling * 2
    offset = tiling
    if wrap_widths is None:
        for q in qfloats:
            coords.append((q + offset) // num_tilings)
            offset += step
    else:
        for i, q in enumerate(qfloats):
            width = wrap_widths[i] if i < len(wrap_widths) else None
            # Offset reduced mod num_tilings so the shift never exceeds one tile
            c = (q + offset % num_tilings) // num_tilings
            coords.append(c % width if width else c)
            offset += step
    coords.extend(ints)
    return tuple(coords)


def tiling_keys(
    num_tilings: int,
    floats: Sequence[float],
    ints: Sequence[int] = (),
    wrap_widths: Sequence[int | None] | None = None,
) -> list[TilingKey]:
    """Compute the key of every tiling for a point.

    Args:
        num_tilings: Number of overlapping tilings. Powers of two at least
            four times the number of floats give the best offsets, but any
            positive int works.
        floats: Point to encode. May be empty.
        ints: Discrete values appended to every key
        wrap_widths: Optional per-dimension wrap widths (see ``tiling_key``)

    Returns:
        ``num_tilings`` keys, one per tiling in order

    Raises:
        InvalidTilingCountError: If num_tilings is not a positive int
        ValueError: On non-finite floats, non-int ints, or more wrap widths
            than floats
    """
    num_tilings = validate_num_tilings(num_tilings)
    ints = validate_ints(ints)
    if wrap_widths is not None:
        wrap_widths = validate_wrap_widths(wrap_widths, len(floats))
    qfloats = quantize(floats, num_tilings)
    return [
        tiling_key(tiling, num_tilings, qfloats, ints, wrap_widths)
        for tiling in range(num_tilings)
    ]


def validate_ints(ints: Sequence[int]) -> tuple[int, ...]:
    """Check discrete values are integers and freeze them into a tuple."""
    checked = tuple(ints)
    for value in checked:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"ints must be integers, got {value!r}")
    return tuple(int(value) for value in checked)


def validate_wrap_widths(
    wrap_widths: Sequence[int | None], num_floats: int
) -> tuple[int | None, ...]:
    """Check wrap widths are None or non-negative ints, one per float at most."""
    checked = tuple(wrap_widths)
    if len(checked) > num_floats:
        raise ValueError(
            f"wrap_widths has {len(checked)} entries but there are only {num_floats} floats"
        )
    for width in checked:
        if width is None:
            continue
        if isinstance(width, bool) or not isinstance(width, numbers.Integral) or width < 0:
            raise ValueError(f"wrap widths must be None or non-negative ints, got {width!r}")
    return tuple(None if width is None else int(width) for width in checked)


__all__ = [
    "TilingKey",
    "quantize",
    "tiling_key",
    "tiling_keys",
    "validate_ints",
    "validate_wrap_widths",
]
