"""
Arithmetic mixin declaring elementwise and scalar Tensor operations.

This module declares :class:`TensorMixinArithmetic`, the mixin that
specifies the public API and mutation contract of the arithmetic operations
on `FloatTensor`.

The mixin does not implement numerical kernels. Host and Device
implementations are registered elsewhere via the control-path dispatch
mechanism, keeping one stable method per operation while backend-specific
logic stays isolated.
"""

from typing import Union
from abc import ABC

from .....domain._tensor import ITensor

Number = Union[int, float]


class TensorMixinArithmetic(ABC):
    """
    Abstract mixin defining elementwise and scalar arithmetic.

    Notes
    -----
    - Methods ending in ``_`` mutate the receiver in place and return None.
    - `add` is the non-destructive member of the family: it allocates a new
      tensor (with a freshly minted ID) on the receiver's backend.
    - Binary operations require both operands on the same backend and with
      identical shapes. Validation completes before any element is written;
      shapes are never broadcast.
    """

    # ----------------------------
    # Tensor-tensor, in place
    # ----------------------------
    def elementwise_multiply_(self: ITensor, other: ITensor) -> None:
        """
        In-place elementwise product: ``self[i] *= other[i]``.

        Raises
        ------
        BackendMismatchError
            If `other` lives on a different backend.
        ShapeMismatchError
            If the shapes differ.
        """
        ...

    def elementwise_subtract_(self: ITensor, other: ITensor) -> None:
        """
        In-place elementwise difference: ``self[i] -= other[i]``.

        Raises
        ------
        BackendMismatchError
            If `other` lives on a different backend.
        ShapeMismatchError
            If the shapes differ.
        """
        ...

    def multiply_derivative_(self: ITensor, other: ITensor) -> None:
        """
        Multiply in place by the logistic derivative of `other`:
        ``self[i] *= other[i] * (1 - other[i])``.

        `other` is expected to hold logistic (sigmoid) activations, so this
        scales an upstream error by the activation's derivative.

        Raises
        ------
        BackendMismatchError
            If `other` lives on a different backend.
        ShapeMismatchError
            If the shapes differ.
        """
        ...

    # ----------------------------
    # Tensor-tensor, allocating
    # ----------------------------
    def add(self: ITensor, other: ITensor) -> ITensor:
        """
        Elementwise sum into a new tensor.

        Returns
        -------
        ITensor
            A new tensor on the receiver's backend, with the receiver's shape
            and a new ID. Neither operand is modified.

        Raises
        ------
        BackendMismatchError
            If `other` lives on a different backend.
        ShapeMismatchError
            If the shapes differ.
        """
        ...

    # ----------------------------
    # Scalar, in place
    # ----------------------------
    def add_(self: ITensor, value: Number) -> None:
        """In-place scalar addition: ``self[i] += value``."""
        ...

    def scalar_multiply_(self: ITensor, value: Number) -> None:
        """In-place scalar multiplication: ``self[i] *= value``."""
        ...

    def zero_(self: ITensor) -> None:
        """Set every element to 0.0 in place."""
        self.fill_(0.0)
