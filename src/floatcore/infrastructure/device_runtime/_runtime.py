"""
Device runtime contract and default-runtime management.

A device runtime owns accelerator memory and the kernels that run on it.
Device-resident tensors never see raw device memory: they hold opaque
*handles* returned by `allocate` and pass them back to the runtime for
transfers and kernels.

Kernel contract
---------------
- ``fill(out, count, value)``: write `value` into every element.
- ``elementwise(op, out, a, b, count)``: ``out = a <op> b`` for
  ``op in {"add", "sub", "mul"}``. `out` may alias `a`.
- ``scalar(op, out, a, value, count)``: ``out = a <op> value`` for
  ``op in {"add", "mul"}``. `out` may alias `a`.
- ``unary(op, out, a, count)``: ``op in {"abs", "neg",
  "logistic_derivative"}``, the latter computing ``a * (1 - a)``.
- ``matmul_add(out, a, b, m, k, n)``: ``out(m, n) += a(m, k) @ b(k, n)``
  on row-major buffers.

Default runtime
---------------
`get_device_runtime()` returns the runtime installed with
`set_device_runtime` / `use_device_runtime`, or loads the runtime named by
`Settings.device_runtime` on first use.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Protocol, runtime_checkable

import numpy as np

logger = logging.getLogger(__name__)

ELEMENTWISE_OPS = ("add", "sub", "mul")
SCALAR_OPS = ("add", "mul")
UNARY_OPS = ("abs", "neg", "logistic_derivative")


@runtime_checkable
class DeviceRuntime(Protocol):
    """Duck-typed device runtime contract (see module docstring)."""

    name: str

    def allocate(self, count: int, dtype: np.dtype) -> Any: ...

    def upload(self, handle: Any, host: np.ndarray) -> None: ...

    def download(self, handle: Any, count: int, dtype: np.dtype) -> np.ndarray: ...

    def free(self, handle: Any) -> None: ...

    def fill(self, out: Any, count: int, value: float) -> None: ...

    def elementwise(self, op: str, out: Any, a: Any, b: Any, count: int) -> None: ...

    def scalar(self, op: str, out: Any, a: Any, value: float, count: int) -> None: ...

    def unary(self, op: str, out: Any, a: Any, count: int) -> None: ...

    def matmul_add(self, out: Any, a: Any, b: Any, m: int, k: int, n: int) -> None: ...


_lock = threading.Lock()
_installed: Optional[DeviceRuntime] = None


def set_device_runtime(runtime: Optional[DeviceRuntime]) -> None:
    """
    Install (or with None, clear) the process default device runtime.

    Raises
    ------
    TypeError
        If `runtime` does not satisfy the `DeviceRuntime` contract.
    """
    global _installed
    if runtime is not None and not isinstance(runtime, DeviceRuntime):
        raise TypeError(f"{runtime!r} does not implement DeviceRuntime")
    with _lock:
        _installed = runtime
    logger.debug("default device runtime set to %r", runtime)


def get_device_runtime() -> DeviceRuntime:
    """
    Return the default device runtime, loading it on first use.

    Raises
    ------
    DeviceUnavailableError
        If no runtime is installed and the configured one cannot be loaded.
    """
    global _installed
    with _lock:
        if _installed is not None:
            return _installed

    from .._config import Settings
    from ._cupy_runtime import load_cupy_runtime

    name = Settings.from_env().device_runtime
    loaders = {"cupy": load_cupy_runtime}
    runtime = loaders[name]()
    with _lock:
        if _installed is None:
            _installed = runtime
        return _installed


@contextmanager
def use_device_runtime(runtime: DeviceRuntime) -> Iterator[DeviceRuntime]:
    """Temporarily install `runtime` as the default device runtime."""
    global _installed
    with _lock:
        previous = _installed
    set_device_runtime(runtime)
    try:
        yield runtime
    finally:
        with _lock:
            _installed = previous
