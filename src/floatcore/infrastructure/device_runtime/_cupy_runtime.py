"""
CuPy-backed device runtime.

`CupyRuntime` implements the `DeviceRuntime` contract on a CUDA device via
CuPy. Handles are flat, contiguous CuPy arrays; kernels are CuPy ufunc calls
writing into the destination handle with ``out=``, so no host round-trip
happens between a transfer to the device and a transfer back.

The runtime is loaded lazily through `load_cupy_runtime()`, which is cached
so CuPy is imported and the device probed at most once per process.

Platform notes
--------------
- Requires the optional ``cupy`` dependency (``pip install floatcore[cuda]``)
  and at least one visible CUDA device.
- Device memory is returned to CuPy's memory pool when the last reference to
  a handle is dropped; `free` drops the runtime's reference.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import numpy as np

from ...domain._errors import DeviceUnavailableError
from ._runtime import ELEMENTWISE_OPS, SCALAR_OPS, UNARY_OPS

logger = logging.getLogger(__name__)


class CupyRuntime:
    """
    Device runtime executing on a CUDA device through CuPy.

    Parameters
    ----------
    cupy_module : module
        The imported ``cupy`` module.
    device_index : int, optional
        CUDA device ordinal. Defaults to 0.
    """

    name = "cupy"

    def __init__(self, cupy_module: Any, device_index: int = 0) -> None:
        self._cp = cupy_module
        self.device_index = int(device_index)

    def __repr__(self) -> str:
        return f"CupyRuntime(device_index={self.device_index})"

    # ------------------------------------------------------------------
    # Memory
    # ------------------------------------------------------------------
    def allocate(self, count: int, dtype: np.dtype) -> Any:
        with self._cp.cuda.Device(self.device_index):
            return self._cp.empty((int(count),), dtype=np.dtype(dtype))

    def upload(self, handle: Any, host: np.ndarray) -> None:
        src = np.ascontiguousarray(host, dtype=handle.dtype).reshape(-1)
        if src.size != handle.size:
            raise ValueError(f"upload size mismatch: {src.size} vs {handle.size}")
        with self._cp.cuda.Device(self.device_index):
            handle.set(src)

    def download(self, handle: Any, count: int, dtype: np.dtype) -> np.ndarray:
        with self._cp.cuda.Device(self.device_index):
            out = handle.get()
        return np.asarray(out, dtype=np.dtype(dtype)).reshape(int(count))

    def free(self, handle: Any) -> None:
        # Memory returns to the pool once the last reference is gone.
        del handle

    # ------------------------------------------------------------------
    # Kernels
    # ------------------------------------------------------------------
    def fill(self, out: Any, count: int, value: float) -> None:
        with self._cp.cuda.Device(self.device_index):
            out.fill(np.float32(value))

    def elementwise(self, op: str, out: Any, a: Any, b: Any, count: int) -> None:
        if op not in ELEMENTWISE_OPS:
            raise ValueError(f"unsupported elementwise op {op!r}")
        cp = self._cp
        fn = {"add": cp.add, "sub": cp.subtract, "mul": cp.multiply}[op]
        with cp.cuda.Device(self.device_index):
            fn(a, b, out=out)

    def scalar(self, op: str, out: Any, a: Any, value: float, count: int) -> None:
        if op not in SCALAR_OPS:
            raise ValueError(f"unsupported scalar op {op!r}")
        cp = self._cp
        fn = {"add": cp.add, "mul": cp.multiply}[op]
        with cp.cuda.Device(self.device_index):
            fn(a, np.float32(value), out=out)

    def unary(self, op: str, out: Any, a: Any, count: int) -> None:
        if op not in UNARY_OPS:
            raise ValueError(f"unsupported unary op {op!r}")
        cp = self._cp
        with cp.cuda.Device(self.device_index):
            if op == "abs":
                cp.absolute(a, out=out)
            elif op == "neg":
                cp.negative(a, out=out)
            else:
                cp.multiply(a, np.float32(1.0) - a, out=out)

    def matmul_add(self, out: Any, a: Any, b: Any, m: int, k: int, n: int) -> None:
        cp = self._cp
        with cp.cuda.Device(self.device_index):
            prod = cp.matmul(a.reshape(m, k), b.reshape(k, n))
            out_2d = out.reshape(m, n)
            cp.add(out_2d, prod, out=out_2d)


@lru_cache(maxsize=1)
def load_cupy_runtime(device_index: int = 0) -> CupyRuntime:
    """
    Import CuPy, probe for a CUDA device and return a cached runtime.

    Raises
    ------
    DeviceUnavailableError
        If CuPy is not installed or no CUDA device is visible.
    """
    try:
        import cupy
    except ImportError as e:
        raise DeviceUnavailableError(
            "CuPy is required for device tensors. Install it with: pip install floatcore[cuda]"
        ) from e

    try:
        count = cupy.cuda.runtime.getDeviceCount()
    except Exception as e:
        raise DeviceUnavailableError(f"CUDA runtime is not usable: {e}") from e
    if device_index >= count:
        raise DeviceUnavailableError(
            f"CUDA device {device_index} requested but {count} device(s) visible"
        )

    logger.info("loaded CuPy device runtime on cuda:%d", device_index)
    return CupyRuntime(cupy, device_index=device_index)
