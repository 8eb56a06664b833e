"""
Tensor shape metadata and element indexing mixin.

This module defines `TensorShapeAndIndexingMixin`, which exposes the
layout metadata of a tensor (shape, strides, size, rank) and implements
element read/write through the row-major stride formula. Strided
translation is the only sanctioned access path: raw flat offsets are never
accepted from callers.

Design notes
------------
- Element access requires host-resident data. On a device-resident tensor it
  raises `WrongBackendError` instead of transferring implicitly.
- A bare int is accepted as the index of a rank-1 tensor; otherwise a tuple
  with exactly one index per dimension is required.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ...domain._errors import WrongBackendError
from ...domain._tensor import ITensor
from ._strided import flat_offset


class TensorShapeAndIndexingMixin:
    """
    Layout metadata and element access for the concrete tensor.

    Notes
    -----
    Methods assume the host class provides ``_shape``, ``_strides`` and
    ``_storage``.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """Dimension sizes."""
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        """Row-major element strides, one per dimension."""
        return self._strides

    @property
    def size(self) -> int:
        """Total element count."""
        return self._size

    @property
    def ndim(self) -> int:
        return len(self._shape)

    def _offset(self: ITensor, op: str, key: Any) -> int:
        if not self.backend.is_host():
            raise WrongBackendError(op, str(self.backend))
        indices = key if isinstance(key, tuple) else (key,)
        return flat_offset(indices, self._shape, self._strides)

    def __getitem__(self: ITensor, key: Any) -> float:
        """
        Read one element.

        Raises
        ------
        RankMismatchError
            If the number of indices differs from the rank.
        IndexOutOfRangeError
            If an index is outside its dimension.
        WrongBackendError
            If the tensor is device-resident.
        """
        return float(self._storage.array[self._offset("getitem", key)])

    def __setitem__(self: ITensor, key: Any, value: float) -> None:
        """Write one element (same failure modes as reading)."""
        offset = self._offset("setitem", key)
        self._storage.array[offset] = np.float32(value)
