"""
Arithmetic mixins and backend-specific implementations for Tensor operations.

This package aggregates the arithmetic mixin and its concrete control-path
implementations:

- tensor-tensor in place  (``elementwise_multiply_``, ``elementwise_subtract_``,
  ``multiply_derivative_``)
- tensor-tensor allocating (``add``)
- scalar in place          (``add_``, ``scalar_multiply_``, ``zero_``)

Implementation modules are imported for their *side effects*: registering
control paths with the tensor control-path manager. They are not part of the
public API.
"""

from ._tensor_elementwise import *
from ._tensor_scalar import *
from ._base import TensorMixinArithmetic

__all__ = [
    TensorMixinArithmetic.__name__,
]
