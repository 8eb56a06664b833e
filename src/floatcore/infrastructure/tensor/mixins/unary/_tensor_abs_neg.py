"""
Backend-specific implementations of in-place absolute value and negation.

Host paths apply the NumPy ufunc into the storage buffer itself; Device paths
run the runtime's unary kernel with the data handle as both input and output.
"""

import numpy as np

from ..._tensor_builder import tensor_control_path_manager

from .....domain.device._device import Backend
from .....domain._tensor import ITensor

from ._base import TensorMixinUnary as TMU


@tensor_control_path_manager(TMU, TMU.abs_, Backend.HOST)
def tensor_abs_host(self: ITensor) -> None:
    a = self._storage.array
    np.absolute(a, out=a)


@tensor_control_path_manager(TMU, TMU.neg_, Backend.HOST)
def tensor_neg_host(self: ITensor) -> None:
    a = self._storage.array
    np.negative(a, out=a)


@tensor_control_path_manager(TMU, TMU.abs_, Backend.DEVICE)
def tensor_abs_device(self: ITensor) -> None:
    s = self._storage
    s.runtime.unary("abs", s.handle, s.handle, s.size)


@tensor_control_path_manager(TMU, TMU.neg_, Backend.DEVICE)
def tensor_neg_device(self: ITensor) -> None:
    s = self._storage
    s.runtime.unary("neg", s.handle, s.handle, s.size)
