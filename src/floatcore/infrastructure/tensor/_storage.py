"""
Tensor storage variants.

A tensor's data lives in exactly one of two storage types, and the type of
the storage object *is* the tensor's backend:

- `HostStorage`: a contiguous, flat ``float32`` NumPy buffer.
- `DeviceStorage`: an opaque data handle plus a parallel ``int32`` shape
  handle, both allocated from a device runtime.

Backend transfers consume one variant and produce the other, so a state with
both buffers live is never observable from a tensor.

Device lifetime
---------------
`DeviceStorage` owns its handles. They are freed exactly once: either
deterministically through `release()` (called on transfer back to the host)
or, as a safety net, by a `weakref.finalize` callback when the storage is
garbage-collected. The finalizer captures only the runtime and the handles,
never the storage object itself, to avoid reference cycles.
"""

from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import numpy as np

from ...domain.device._device import Backend

logger = logging.getLogger(__name__)

FLOAT32 = np.dtype(np.float32)
SHAPE_DTYPE = np.dtype(np.int32)


@dataclass
class HostStorage:
    """
    Host-resident storage.

    Attributes
    ----------
    array : np.ndarray
        Flat, C-contiguous ``float32`` buffer of length ``size``.
    """

    array: np.ndarray

    backend = Backend.HOST

    @classmethod
    def zeros(cls, size: int) -> "HostStorage":
        return cls(np.zeros((size,), dtype=FLOAT32))

    @classmethod
    def from_values(cls, values: np.ndarray) -> "HostStorage":
        """Copy `values` (any shape) into a new flat buffer."""
        return cls(np.array(values, dtype=FLOAT32, copy=True, order="C").reshape(-1))

    def release(self) -> None:
        """Host buffers are reclaimed by the garbage collector."""
        return None


@dataclass
class DeviceStorage:
    """
    Device-resident storage owned by a device runtime.

    Attributes
    ----------
    runtime : DeviceRuntime
        Runtime that allocated the handles and executes kernels on them.
    handle : Any
        Opaque handle to ``size`` float32 elements.
    shape_handle : Any
        Opaque handle to the tensor shape as ``rank`` int32 elements.
    size : int
        Number of float32 elements behind `handle`.
    """

    runtime: Any
    handle: Any
    shape_handle: Any
    size: int

    _released: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _finalizer: Optional[weakref.finalize] = field(default=None, repr=False)

    backend = Backend.DEVICE

    def __post_init__(self) -> None:
        runtime = self.runtime
        handles = (self.handle, self.shape_handle)

        def _free_handles() -> None:
            for h in handles:
                try:
                    runtime.free(h)
                except Exception:
                    # Never raise in finalizers
                    pass

        self._finalizer = weakref.finalize(self, _free_handles)

    @classmethod
    def allocate(
        cls,
        runtime: Any,
        shape: tuple[int, ...],
        values: Optional[np.ndarray] = None,
    ) -> "DeviceStorage":
        """
        Allocate device buffers for `shape` and initialize them.

        The data buffer is uploaded from `values` when given, otherwise
        zero-filled. If any step fails, handles allocated so far are freed
        before the error propagates.
        """
        size = 1
        for d in shape:
            size *= d

        handle = None
        shape_handle = None
        try:
            handle = runtime.allocate(size, FLOAT32)
            shape_handle = runtime.allocate(len(shape), SHAPE_DTYPE)
            runtime.upload(shape_handle, np.asarray(shape, dtype=SHAPE_DTYPE))
            if values is None:
                runtime.fill(handle, size, 0.0)
            else:
                runtime.upload(handle, np.ascontiguousarray(values, dtype=FLOAT32).reshape(-1))
        except BaseException:
            for h in (handle, shape_handle):
                if h is not None:
                    runtime.free(h)
            raise
        return cls(runtime=runtime, handle=handle, shape_handle=shape_handle, size=size)

    def download(self) -> np.ndarray:
        """Copy the data buffer into a new flat host array."""
        return self.runtime.download(self.handle, self.size, FLOAT32)

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """
        Free the device handles now.

        Idempotent: later calls are no-ops. The storage must not be used
        after release.
        """
        with self._lock:
            if self._released:
                return
            self._released = True
            if self._finalizer is not None and self._finalizer.alive:
                self._finalizer()
        logger.debug("released device storage of %d elements", self.size)


Storage = Union[HostStorage, DeviceStorage]
