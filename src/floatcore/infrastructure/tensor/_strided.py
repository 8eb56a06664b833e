"""
Row-major stride bookkeeping.

Pure functions translating between a tensor's shape, its strides and flat
buffer offsets. These are shared by both storage backends: the layout of a
device buffer is identical to the layout of the host buffer it was copied
from.
"""

from __future__ import annotations

import operator
from typing import Any, Sequence

from ...domain._errors import (
    IndexOutOfRangeError,
    InvalidShapeError,
    RankMismatchError,
)


def validate_shape(shape: Any) -> tuple[int, ...]:
    """
    Normalize and validate a tensor shape.

    Parameters
    ----------
    shape : Sequence[int]
        Requested dimension sizes.

    Returns
    -------
    tuple[int, ...]
        The shape as a tuple of Python ints.

    Raises
    ------
    InvalidShapeError
        If `shape` is None, empty, not a sequence, or has a dimension that is
        not a non-negative integer.
    """
    if shape is None:
        raise InvalidShapeError(shape, "shape is required")
    if isinstance(shape, (str, bytes)):
        raise InvalidShapeError(shape, "shape must be a sequence of ints")
    try:
        dims = list(shape)
    except TypeError:
        raise InvalidShapeError(shape, "shape must be a sequence of ints") from None
    if len(dims) == 0:
        raise InvalidShapeError(shape, "rank must be at least 1")

    out = []
    for d in dims:
        if isinstance(d, bool):
            raise InvalidShapeError(shape, f"dimension {d!r} is not an integer")
        try:
            v = operator.index(d)
        except TypeError:
            raise InvalidShapeError(shape, f"dimension {d!r} is not an integer") from None
        if v < 0:
            raise InvalidShapeError(shape, f"dimension {v} is negative")
        out.append(v)
    return tuple(out)


def row_major_strides(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Compute row-major strides: ``stride[-1] = 1``,
    ``stride[i] = stride[i + 1] * shape[i + 1]``.
    """
    strides = [0] * len(shape)
    acc = 1
    for i in range(len(shape) - 1, -1, -1):
        strides[i] = acc
        acc *= shape[i]
    return tuple(strides)


def shape_product(shape: Sequence[int]) -> int:
    """Number of elements described by `shape`."""
    n = 1
    for d in shape:
        n *= d
    return n


def flat_offset(
    indices: Sequence[Any], shape: Sequence[int], strides: Sequence[int]
) -> int:
    """
    Translate a multi-dimensional index into a flat buffer offset.

    Raises
    ------
    RankMismatchError
        If ``len(indices) != len(shape)``.
    IndexOutOfRangeError
        If any ``indices[k]`` is outside ``[0, shape[k])``. Negative indices
        are rejected, never wrapped.
    TypeError
        If an index is not an integer.
    """
    if len(indices) != len(shape):
        raise RankMismatchError(len(shape), len(indices))

    offset = 0
    for k, (i, extent, stride) in enumerate(zip(indices, shape, strides)):
        if isinstance(i, bool):
            raise TypeError(f"tensor indices must be integers, got {i!r}")
        i = operator.index(i)
        if i < 0 or i >= extent:
            raise IndexOutOfRangeError(k, i, extent)
        offset += i * stride
    return offset
