"""
Matrix mixin declaring the fused add-then-matrix-multiply operation.

The operand checks live here, shared by every backend, so that a rejected
call never reaches a kernel.
"""

from abc import ABC

from .....domain._errors import BackendMismatchError, ShapeMismatchError
from .....domain._tensor import ITensor


class TensorMixinMatmul(ABC):
    """Abstract mixin defining matrix operations."""

    def add_matrix_multiply_(self: ITensor, a: ITensor, b: ITensor) -> None:
        """
        Accumulate a matrix product in place: ``self += a @ b``.

        Parameters
        ----------
        a : ITensor
            Left factor of shape ``(m, k)``.
        b : ITensor
            Right factor of shape ``(k, n)``.

        Raises
        ------
        BackendMismatchError
            If the three tensors are not on the same backend.
        ShapeMismatchError
            If any operand is not rank 2, the inner dimensions disagree, or
            the receiver is not ``(m, n)``.

        Notes
        -----
        The product is computed in full before the receiver is updated, so
        passing the receiver itself as `a` or `b` is well defined.
        """
        ...

    def _matmul_check(self: ITensor, op: str, a: ITensor, b: ITensor) -> tuple[int, int, int]:
        """
        Validate operands of ``self += a @ b`` and return ``(m, k, n)``.
        """
        for t in (a, b):
            if not isinstance(t, ITensor):
                raise TypeError(f"{op} expects tensor operands, got {type(t).__name__}")
            if t.backend is not self.backend:
                raise BackendMismatchError(op, str(self.backend), str(t.backend))

        if len(a.shape) != 2 or len(b.shape) != 2 or len(self.shape) != 2:
            raise ShapeMismatchError(
                op, self.shape, a.shape, b.shape, detail="all operands must be rank 2"
            )
        m, k = a.shape
        k2, n = b.shape
        if k != k2:
            raise ShapeMismatchError(
                op, a.shape, b.shape, detail="inner dimensions must agree"
            )
        if self.shape != (m, n):
            raise ShapeMismatchError(
                op, self.shape, (m, n), detail="receiver must match the product shape"
            )
        return m, k, n
