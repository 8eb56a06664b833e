"""
Backend-specific implementations of tensor-tensor arithmetic.

This module registers Host and Device implementations of the elementwise
operations declared on `TensorMixinArithmetic`:

- ``elementwise_multiply_``  (in place)
- ``elementwise_subtract_``  (in place)
- ``multiply_derivative_``   (in place)
- ``add``                    (allocates a new tensor)

Host paths run NumPy ufuncs directly on the flat storage buffers with
``out=`` so in-place operations never reallocate. Device paths hand the
opaque handles to the tensor's device runtime.
"""

import numpy as np

from ..._tensor_builder import tensor_control_path_manager
from ..._storage import DeviceStorage, HostStorage

from .....domain.device._device import Backend
from .....domain._tensor import ITensor

from ._base import TensorMixinArithmetic as TMA


# ----------------------------------------------------------------------
# Host
# ----------------------------------------------------------------------
@tensor_control_path_manager(TMA, TMA.elementwise_multiply_, Backend.HOST)
def tensor_elementwise_multiply_host(self: ITensor, other: ITensor) -> None:
    self._binary_op_check("elementwise_multiply_", other)
    a = self._storage.array
    np.multiply(a, other._storage.array, out=a)


@tensor_control_path_manager(TMA, TMA.elementwise_subtract_, Backend.HOST)
def tensor_elementwise_subtract_host(self: ITensor, other: ITensor) -> None:
    self._binary_op_check("elementwise_subtract_", other)
    a = self._storage.array
    np.subtract(a, other._storage.array, out=a)


@tensor_control_path_manager(TMA, TMA.multiply_derivative_, Backend.HOST)
def tensor_multiply_derivative_host(self: ITensor, other: ITensor) -> None:
    """
    Host path for ``self *= other * (1 - other)``.

    The derivative term is computed into a temporary before touching the
    receiver, so ``t.multiply_derivative_(t)`` reads unmodified values.
    """
    self._binary_op_check("multiply_derivative_", other)
    o = other._storage.array
    deriv = o * (np.float32(1.0) - o)
    a = self._storage.array
    np.multiply(a, deriv, out=a)


@tensor_control_path_manager(TMA, TMA.add, Backend.HOST)
def tensor_add_host(self: ITensor, other: ITensor) -> ITensor:
    self._binary_op_check("add", other)
    Tensor = type(self)
    out = np.add(self._storage.array, other._storage.array)
    return Tensor._from_storage(HostStorage(out), self.shape, counter=self._counter)


# ----------------------------------------------------------------------
# Device
# ----------------------------------------------------------------------
@tensor_control_path_manager(TMA, TMA.elementwise_multiply_, Backend.DEVICE)
def tensor_elementwise_multiply_device(self: ITensor, other: ITensor) -> None:
    self._binary_op_check("elementwise_multiply_", other)
    s = self._storage
    s.runtime.elementwise("mul", s.handle, s.handle, other._storage.handle, s.size)


@tensor_control_path_manager(TMA, TMA.elementwise_subtract_, Backend.DEVICE)
def tensor_elementwise_subtract_device(self: ITensor, other: ITensor) -> None:
    self._binary_op_check("elementwise_subtract_", other)
    s = self._storage
    s.runtime.elementwise("sub", s.handle, s.handle, other._storage.handle, s.size)


@tensor_control_path_manager(TMA, TMA.multiply_derivative_, Backend.DEVICE)
def tensor_multiply_derivative_device(self: ITensor, other: ITensor) -> None:
    """
    Device path for ``self *= other * (1 - other)``.

    The derivative term is staged in a scratch buffer that is freed whether
    or not the kernels succeed.
    """
    self._binary_op_check("multiply_derivative_", other)
    s = self._storage
    rt = s.runtime
    scratch = rt.allocate(s.size, np.float32)
    try:
        rt.unary("logistic_derivative", scratch, other._storage.handle, s.size)
        rt.elementwise("mul", s.handle, s.handle, scratch, s.size)
    finally:
        rt.free(scratch)


@tensor_control_path_manager(TMA, TMA.add, Backend.DEVICE)
def tensor_add_device(self: ITensor, other: ITensor) -> ITensor:
    self._binary_op_check("add", other)
    Tensor = type(self)
    s = self._storage
    out = DeviceStorage.allocate(s.runtime, self.shape)
    try:
        s.runtime.elementwise("add", out.handle, s.handle, other._storage.handle, s.size)
    except BaseException:
        out.release()
        raise
    return Tensor._from_storage(out, self.shape, counter=self._counter)
