"""
Tensor-, backend- and command-related exceptions for floatcore.

Every error raised by the tensor engine, the registry or the command
dispatcher derives from `TensorError` so that the dispatcher boundary can
handle failures uniformly. Each error also derives from the builtin
exception that best describes it (e.g. `IndexError` for out-of-range element
access), so callers can keep using idiomatic `except` clauses.

Construction-time and indexing errors are precondition violations: they are
raised before any buffer is allocated or any tensor is mutated.
"""

from __future__ import annotations

from typing import Sequence


class TensorError(Exception):
    """Base class for all floatcore errors."""


class InvalidShapeError(TensorError, ValueError):
    """
    Raised when a tensor shape is empty (rank 0) or contains a dimension that
    is not a non-negative integer.
    """

    def __init__(self, shape: object, reason: str) -> None:
        super().__init__(f"Invalid tensor shape {shape!r}: {reason}.")
        self.shape = shape


class ShapeDataMismatchError(TensorError, ValueError):
    """
    Raised when the number of supplied values does not equal the product of
    the requested shape.
    """

    def __init__(self, shape: Sequence[int], expected: int, got: int) -> None:
        super().__init__(
            f"Tensor shape {tuple(shape)} holds {expected} elements "
            f"but {got} values were supplied."
        )
        self.shape = tuple(shape)
        self.expected = expected
        self.got = got


class IndexOutOfRangeError(TensorError, IndexError):
    """
    Raised when an element index falls outside ``[0, shape[dim])``.

    Attributes
    ----------
    dim : int
        Dimension whose index was out of range.
    index : int
        The offending index value.
    extent : int
        Size of that dimension.
    """

    def __init__(self, dim: int, index: int, extent: int) -> None:
        super().__init__(
            f"Index {index} is out of range for dimension {dim} with size {extent}."
        )
        self.dim = dim
        self.index = index
        self.extent = extent


class RankMismatchError(TensorError, IndexError):
    """Raised when the number of indices does not equal the tensor rank."""

    def __init__(self, rank: int, got: int) -> None:
        super().__init__(f"Expected {rank} indices for a rank-{rank} tensor, got {got}.")
        self.rank = rank
        self.got = got


class ShapeMismatchError(TensorError, ValueError):
    """
    Raised when operand shapes are incompatible for an elementwise or matrix
    operation. Shapes are never broadcast.
    """

    def __init__(self, op: str, *shapes: Sequence[int], detail: str = "") -> None:
        shown = " vs ".join(str(tuple(s)) for s in shapes)
        msg = f"{op}: incompatible shapes {shown}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg + ".")
        self.op = op
        self.shapes = tuple(tuple(s) for s in shapes)


class WrongBackendError(TensorError, RuntimeError):
    """
    Raised when an operation is invoked against data resident in a backend
    that the operation does not support.

    Attributes
    ----------
    op : str
        The operation that was attempted (e.g. "getitem").
    backend : str
        The backend the tensor's data lives in.
    """

    def __init__(self, op: str, backend: str) -> None:
        super().__init__(
            f"{op} is not available for data resident on backend '{backend}'. "
            f"Transfer the tensor explicitly first."
        )
        self.op = op
        self.backend = backend


class BackendMismatchError(WrongBackendError):
    """
    Raised when a binary operation combines tensors that live on different
    backends without an explicit transfer.
    """

    def __init__(self, op: str, backend_a: str, backend_b: str) -> None:
        RuntimeError.__init__(
            self, f"{op}: backend mismatch '{backend_a}' vs '{backend_b}'."
        )
        self.op = op
        self.backend = backend_a
        self.backend_a = backend_a
        self.backend_b = backend_b


class DeviceUnavailableError(TensorError, RuntimeError):
    """Raised when no usable device runtime can be obtained."""


class UnknownTensorIdError(TensorError, LookupError):
    """Raised when a registry lookup does not find the requested tensor ID."""

    def __init__(self, tensor_id: object) -> None:
        super().__init__(f"No tensor is registered under id {tensor_id!r}.")
        self.tensor_id = tensor_id

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateTensorIdError(TensorError, ValueError):
    """Raised when a different tensor is already registered under an ID."""

    def __init__(self, tensor_id: int) -> None:
        super().__init__(f"Tensor id {tensor_id} is already bound to another tensor.")
        self.tensor_id = tensor_id


class UnknownOperationError(TensorError, LookupError):
    """Raised when a command names an operation outside the known set."""

    def __init__(self, name: object) -> None:
        super().__init__(f"Unknown operation {name!r}.")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidCommandError(TensorError, ValueError):
    """
    Raised when a command message is malformed or carries the wrong number
    or kind of operands for its operation.
    """
