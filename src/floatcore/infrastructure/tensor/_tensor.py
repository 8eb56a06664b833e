"""
Concrete FloatTensor implementation.

This module provides `FloatTensor`, the concrete tensor satisfying the
domain-level `ITensor` protocol. A `FloatTensor` is a fixed-shape, row-major,
float32 array whose data lives in exactly one storage variant:

- `HostStorage` (NumPy buffer) for the host backend, or
- `DeviceStorage` (opaque runtime handles) for the device backend.

The backend is derived from the storage variant, never stored separately,
so the two cannot disagree.

Operations are contributed by mixins. Each mixin declares the public method
and its contract; Host and Device bodies are registered per backend through
the tensor control-path manager and selected from ``self.backend`` at call
time.

Design notes
------------
- Every tensor receives an ID from an explicit `IdCounter` at construction
  (the process default when none is given). The ID is read-only; only a
  registry may rebind it, via `_rebind_id`.
- All validation (shape, data length) happens before any buffer is
  allocated or any ID is minted.
- Broadcasting is intentionally not implemented; binary operations require
  exact shape matches.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from ...domain._errors import (
    BackendMismatchError,
    ShapeDataMismatchError,
    ShapeMismatchError,
)
from ...domain._identity import IdCounter, default_id_counter
from ...domain._tensor import ITensor
from ...domain.device._device import Backend
from ._printing import TensorPrintingMixin
from ._shape_and_indexing import TensorShapeAndIndexingMixin
from ._storage import DeviceStorage, HostStorage, Storage
from ._strided import row_major_strides, shape_product, validate_shape
from .mixins.arithmetic import TensorMixinArithmetic
from .mixins.matmul import TensorMixinMatmul
from .mixins.memory import TensorMixinMemory
from .mixins.unary import TensorMixinUnary

Number = Union[int, float]


class FloatTensor(
    TensorShapeAndIndexingMixin,
    TensorMixinArithmetic,
    TensorMixinUnary,
    TensorMixinMatmul,
    TensorMixinMemory,
    TensorPrintingMixin,
):
    """
    Dense float32 tensor resident on the host or on a device.

    Parameters
    ----------
    shape : Sequence[int]
        Dimension sizes. Rank must be at least 1 and every dimension a
        non-negative integer.
    data : array-like, optional
        Initial values. Flattened in C order; its element count must equal
        the product of `shape`. When omitted the tensor is zero-filled.
    backend : Backend or str, optional
        Backend to create the tensor on. Defaults to the host.
    runtime : DeviceRuntime, optional
        Device runtime used when `backend` is the device. Defaults to
        `get_device_runtime()`.
    counter : IdCounter, optional
        Counter the tensor's ID is drawn from. Defaults to the process-wide
        counter.

    Raises
    ------
    InvalidShapeError
        If `shape` is empty or malformed.
    ShapeDataMismatchError
        If `data` does not hold exactly ``product(shape)`` values.
    DeviceUnavailableError
        If the device backend is requested and no runtime is available.
    """

    def __init__(
        self,
        shape: Sequence[int],
        data: Optional[Any] = None,
        *,
        backend: Union[Backend, str] = Backend.HOST,
        runtime: Optional[Any] = None,
        counter: Optional[IdCounter] = None,
    ) -> None:
        shape_t = validate_shape(shape)
        strides = row_major_strides(shape_t)
        size = shape_product(shape_t)
        target = Backend.parse(backend)

        values = None
        if data is not None:
            values = np.asarray(data, dtype=np.float32).reshape(-1)
            if values.size != size:
                raise ShapeDataMismatchError(shape_t, size, int(values.size))

        if target.is_device():
            if runtime is None:
                from ..device_runtime import get_device_runtime

                runtime = get_device_runtime()
            storage: Storage = DeviceStorage.allocate(runtime, shape_t, values=values)
        elif values is None:
            storage = HostStorage.zeros(size)
        else:
            storage = HostStorage.from_values(values)

        self._init_fields(shape_t, strides, size, storage, counter)

    def _init_fields(
        self,
        shape: tuple[int, ...],
        strides: tuple[int, ...],
        size: int,
        storage: Storage,
        counter: Optional[IdCounter],
    ) -> None:
        self._shape = shape
        self._strides = strides
        self._size = size
        self._storage = storage
        self._counter = counter if counter is not None else default_id_counter()
        self._id = self._counter.next_id()

    @classmethod
    def _from_storage(
        cls,
        storage: Storage,
        shape: tuple[int, ...],
        *,
        counter: Optional[IdCounter] = None,
    ) -> "FloatTensor":
        """
        Wrap an already-built storage in a new tensor with a fresh ID.

        Used by allocating operations whose output storage was produced by a
        kernel. Bypasses `__init__`; `shape` must already be validated.
        """
        obj = cls.__new__(cls)
        obj._init_fields(
            shape, row_major_strides(shape), shape_product(shape), storage, counter
        )
        return obj

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def zeros(
        cls,
        shape: Sequence[int],
        *,
        backend: Union[Backend, str] = Backend.HOST,
        runtime: Optional[Any] = None,
        counter: Optional[IdCounter] = None,
    ) -> "FloatTensor":
        """Create a zero-filled tensor."""
        return cls(shape, backend=backend, runtime=runtime, counter=counter)

    @classmethod
    def from_numpy(
        cls,
        arr: Any,
        *,
        backend: Union[Backend, str] = Backend.HOST,
        runtime: Optional[Any] = None,
        counter: Optional[IdCounter] = None,
    ) -> "FloatTensor":
        """Create a tensor with the shape and (float32-cast) values of `arr`."""
        arr = np.asarray(arr, dtype=np.float32)
        return cls(arr.shape, arr, backend=backend, runtime=runtime, counter=counter)

    # ------------------------------------------------------------------
    # Identity / placement
    # ------------------------------------------------------------------
    @property
    def id(self) -> int:
        """Process-unique identifier; read-only."""
        return self._id

    def _rebind_id(self, new_id: int) -> None:
        """
        Administrative ID override.

        Notes
        -----
        Reserved for `InMemoryTensorRegistry.reassign`; rebinding an ID
        outside a registry leaves that registry's index stale.
        """
        self._id = int(new_id)

    @property
    def backend(self) -> Backend:
        """Backend currently holding the data."""
        return self._storage.backend

    def is_host(self) -> bool:
        return self._storage.backend is Backend.HOST

    def is_device(self) -> bool:
        return self._storage.backend is Backend.DEVICE

    @property
    def runtime(self) -> Optional[Any]:
        """Device runtime owning the data, or None for host tensors."""
        return getattr(self._storage, "runtime", None)

    # ------------------------------------------------------------------
    # Operand checks shared by the mixins
    # ------------------------------------------------------------------
    def _binary_op_check(self, op: str, other: ITensor) -> None:
        """
        Validate the second operand of an elementwise operation.

        Raises
        ------
        TypeError
            If `other` is not a tensor.
        BackendMismatchError
            If the operands live on different backends.
        ShapeMismatchError
            If the shapes are not identical.
        """
        if not isinstance(other, FloatTensor):
            raise TypeError(f"{op} expects a FloatTensor operand, got {type(other).__name__}")
        if other.backend is not self.backend:
            raise BackendMismatchError(op, str(self.backend), str(other.backend))
        if other.shape != self.shape:
            raise ShapeMismatchError(op, self.shape, other.shape)

    def __repr__(self) -> str:
        return f"FloatTensor(id={self._id}, shape={self._shape}, backend={self.backend})"
