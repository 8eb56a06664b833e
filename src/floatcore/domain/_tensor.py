"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures what the registry and the command
dispatcher rely on: identity, layout metadata, backend placement and the
remotely invokable operation set.

Notes
-----
The protocol mirrors the public surface of the concrete `FloatTensor` so that
domain code (registry contracts, dispatch handlers) can type against it
without importing the infrastructure layer.
"""

from __future__ import annotations

from typing import Any, Protocol, Union, runtime_checkable

from .device._device import Backend

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a fixed-rank, fixed-shape dense array of float32 values
    with row-major strides, resident on exactly one `Backend`, and carrying a
    process-unique integer ID.
    """

    # ---------------------------------------------------------------------
    # Identity / layout / placement
    # ---------------------------------------------------------------------
    @property
    def id(self) -> int:
        """Process-unique identifier assigned at construction."""
        ...

    @property
    def shape(self) -> tuple[int, ...]:
        """Dimension sizes; length equals the rank."""
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """Per-dimension element steps (row-major)."""
        ...

    @property
    def size(self) -> int:
        """Total element count (product of `shape`)."""
        ...

    @property
    def backend(self) -> Backend:
        """Backend currently holding the authoritative data."""
        ...

    # ---------------------------------------------------------------------
    # Host interop
    # ---------------------------------------------------------------------
    def to_numpy(self) -> Any:
        """
        Return a shaped copy of the data as a NumPy array.

        Raises
        ------
        WrongBackendError
            If the tensor is resident on the device backend.
        """
        ...

    # ---------------------------------------------------------------------
    # Remotely invokable operations
    # ---------------------------------------------------------------------
    def elementwise_multiply_(self, other: "ITensor") -> None: ...

    def elementwise_subtract_(self, other: "ITensor") -> None: ...

    def multiply_derivative_(self, other: "ITensor") -> None: ...

    def add_matrix_multiply_(self, a: "ITensor", b: "ITensor") -> None: ...

    def add(self, other: "ITensor") -> "ITensor": ...

    def add_(self, value: Number) -> None: ...

    def scalar_multiply_(self, value: Number) -> None: ...

    def zero_(self) -> None: ...

    def abs_(self) -> None: ...

    def neg_(self) -> None: ...

    def to_device(self, runtime: Any = None) -> None: ...

    def to_host(self) -> None: ...

    def render(self, auto_transfer: bool = True) -> str: ...
