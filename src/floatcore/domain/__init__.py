from ._command import Command, Operation, parse_operation
from ._errors import (
    BackendMismatchError,
    DeviceUnavailableError,
    DuplicateTensorIdError,
    IndexOutOfRangeError,
    InvalidCommandError,
    InvalidShapeError,
    RankMismatchError,
    ShapeDataMismatchError,
    ShapeMismatchError,
    TensorError,
    UnknownOperationError,
    UnknownTensorIdError,
    WrongBackendError,
)
from ._identity import IdCounter, default_id_counter
from ._registry import ITensorRegistry
from ._tensor import ITensor
from .device import Backend

__all__ = [
    "Backend",
    "BackendMismatchError",
    "Command",
    "DeviceUnavailableError",
    "DuplicateTensorIdError",
    "ITensor",
    "ITensorRegistry",
    "IdCounter",
    "IndexOutOfRangeError",
    "InvalidCommandError",
    "InvalidShapeError",
    "Operation",
    "RankMismatchError",
    "ShapeDataMismatchError",
    "ShapeMismatchError",
    "TensorError",
    "UnknownOperationError",
    "UnknownTensorIdError",
    "WrongBackendError",
    "default_id_counter",
    "parse_operation",
]
