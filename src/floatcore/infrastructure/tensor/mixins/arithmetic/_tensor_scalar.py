"""
Backend-specific implementations of scalar arithmetic.

Registers Host and Device implementations of ``add_`` and
``scalar_multiply_``. Both mutate the receiver in place and never allocate.
The scalar is converted to float32 before it reaches either backend so both
produce bit-identical results.
"""

import numpy as np

from ..._tensor_builder import tensor_control_path_manager

from .....domain.device._device import Backend
from .....domain._tensor import ITensor

from ._base import TensorMixinArithmetic as TMA, Number


def _as_scalar(op: str, value: Number) -> np.float32:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise TypeError(f"{op} expects a real scalar, got {type(value).__name__}")
    return np.float32(value)


@tensor_control_path_manager(TMA, TMA.add_, Backend.HOST)
def tensor_add_scalar_host(self: ITensor, value: Number) -> None:
    v = _as_scalar("add_", value)
    a = self._storage.array
    np.add(a, v, out=a)


@tensor_control_path_manager(TMA, TMA.scalar_multiply_, Backend.HOST)
def tensor_scalar_multiply_host(self: ITensor, value: Number) -> None:
    v = _as_scalar("scalar_multiply_", value)
    a = self._storage.array
    np.multiply(a, v, out=a)


@tensor_control_path_manager(TMA, TMA.add_, Backend.DEVICE)
def tensor_add_scalar_device(self: ITensor, value: Number) -> None:
    v = _as_scalar("add_", value)
    s = self._storage
    s.runtime.scalar("add", s.handle, s.handle, float(v), s.size)


@tensor_control_path_manager(TMA, TMA.scalar_multiply_, Backend.DEVICE)
def tensor_scalar_multiply_device(self: ITensor, value: Number) -> None:
    v = _as_scalar("scalar_multiply_", value)
    s = self._storage
    s.runtime.scalar("mul", s.handle, s.handle, float(v), s.size)
