"""
floatcore: remotely addressable float32 tensors.

Tensors live on the host (NumPy) or on a device runtime, are identified by
process-unique integer IDs, and can be driven by name through
`CommandDispatcher`.
"""

from .domain import (
    Backend,
    BackendMismatchError,
    Command,
    DeviceUnavailableError,
    DuplicateTensorIdError,
    IdCounter,
    IndexOutOfRangeError,
    InvalidCommandError,
    InvalidShapeError,
    Operation,
    RankMismatchError,
    ShapeDataMismatchError,
    ShapeMismatchError,
    TensorError,
    UnknownOperationError,
    UnknownTensorIdError,
    WrongBackendError,
)
from .infrastructure import (
    COMMAND_NOT_FOUND,
    CommandDispatcher,
    FloatTensor,
    InMemoryTensorRegistry,
    Settings,
    get_device_runtime,
    set_device_runtime,
    setup_logger,
    use_device_runtime,
)

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "BackendMismatchError",
    "COMMAND_NOT_FOUND",
    "Command",
    "CommandDispatcher",
    "DeviceUnavailableError",
    "DuplicateTensorIdError",
    "FloatTensor",
    "IdCounter",
    "InMemoryTensorRegistry",
    "IndexOutOfRangeError",
    "InvalidCommandError",
    "InvalidShapeError",
    "Operation",
    "RankMismatchError",
    "Settings",
    "ShapeDataMismatchError",
    "ShapeMismatchError",
    "TensorError",
    "UnknownOperationError",
    "UnknownTensorIdError",
    "WrongBackendError",
    "get_device_runtime",
    "set_device_runtime",
    "setup_logger",
    "use_device_runtime",
]
