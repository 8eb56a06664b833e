"""
Unary mixin declaring in-place elementwise Tensor transforms.

Host and Device implementations are registered in `_tensor_abs_neg` via the
control-path dispatch mechanism.
"""

from abc import ABC

from .....domain._tensor import ITensor


class TensorMixinUnary(ABC):
    """
    Abstract mixin defining unary elementwise operations.

    Notes
    -----
    Both operations mutate the receiver in place, keep its shape, and return
    None.
    """

    def abs_(self: ITensor) -> None:
        """Replace every element with its absolute value."""
        ...

    def neg_(self: ITensor) -> None:
        """Negate every element."""
        ...
