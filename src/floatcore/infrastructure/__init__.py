"""
Concrete implementations behind the domain contracts: the float32 tensor,
device runtimes, the tensor registry and the command dispatcher, plus the
process-level configuration and logging helpers.
"""

from ._config import Settings
from .device_runtime import (
    DeviceRuntime,
    get_device_runtime,
    set_device_runtime,
    use_device_runtime,
)
from .dispatch import COMMAND_NOT_FOUND, CommandDispatcher
from .logger import setup_logger
from .registry import InMemoryTensorRegistry
from .tensor import DeviceStorage, FloatTensor, HostStorage

__all__ = [
    "COMMAND_NOT_FOUND",
    "CommandDispatcher",
    "DeviceRuntime",
    "DeviceStorage",
    "FloatTensor",
    "HostStorage",
    "InMemoryTensorRegistry",
    "Settings",
    "get_device_runtime",
    "set_device_runtime",
    "setup_logger",
    "use_device_runtime",
]
