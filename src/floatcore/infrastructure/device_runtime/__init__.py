"""
Device runtimes for device-resident tensors.

Only the contract and the default-runtime helpers are exported here; the
CuPy runtime is imported lazily so that host-only use never imports CuPy.
"""

from ._runtime import (
    DeviceRuntime,
    get_device_runtime,
    set_device_runtime,
    use_device_runtime,
)

__all__ = [
    DeviceRuntime.__name__,
    get_device_runtime.__name__,
    set_device_runtime.__name__,
    use_device_runtime.__name__,
]
