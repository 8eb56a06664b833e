"""
Human-readable tensor rendering.

This is a debugging aid, not a wire format. At most the last three
dimensions are shown; for higher ranks the slab at leading index 0 is
rendered after a notice line.

Layout: ``d3`` blocks of ``d2`` rows of ``d1`` values, where ``d1`` is the
last dimension, ``d2`` the one before it (1 if absent) and ``d3`` the one
before that (1 if absent). Each value is followed by ``",\\t"``, each row by
a newline, and each block by one more newline.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ...domain._errors import WrongBackendError
from ...domain._tensor import ITensor

TRUNCATION_NOTICE = "Only printing the last 3 dimensions\n"


def format_value(value: float) -> str:
    """Shortest representation that round-trips as float32 (e.g. ``2``, ``0.1``)."""
    return np.format_float_positional(np.float32(value), trim="-")


def format_tensor(shape: Sequence[int], flat: np.ndarray) -> str:
    """
    Render a flat row-major buffer holding a tensor of `shape`.

    Element ``(k, j, i)`` of the rendered slab is read at flat offset
    ``i + j * d1 + k * d1 * d2``.
    """
    rank = len(shape)
    parts = []
    if rank > 3:
        parts.append(TRUNCATION_NOTICE)

    d1 = shape[-1]
    d2 = shape[-2] if rank > 1 else 1
    d3 = shape[-3] if rank > 2 else 1

    for k in range(d3):
        for j in range(d2):
            row = flat[k * d1 * d2 + j * d1 : k * d1 * d2 + (j + 1) * d1]
            parts.append("".join(format_value(v) + ",\t" for v in row))
            parts.append("\n")
        parts.append("\n")
    return "".join(parts)


class TensorPrintingMixin:
    """Rendering entry point with an explicit device auto-transfer policy."""

    def render(self: ITensor, auto_transfer: bool = True) -> str:
        """
        Render the tensor as text.

        Parameters
        ----------
        auto_transfer : bool, optional
            If the tensor is device-resident and this is True (default), the
            tensor is first moved to the host with `to_host()`; it stays on
            the host afterwards. If False, device-resident tensors are
            rejected.

        Raises
        ------
        WrongBackendError
            If the tensor is device-resident and `auto_transfer` is False.
        """
        if self.backend.is_device():
            if not auto_transfer:
                raise WrongBackendError("render", str(self.backend))
            self.to_host()
        return format_tensor(self.shape, self._storage.array)
