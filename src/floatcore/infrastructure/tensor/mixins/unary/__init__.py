"""
Unary mixin and its backend-specific implementations (``abs_``, ``neg_``).

The implementation module is imported for its side effect of registering
control paths.
"""

from ._tensor_abs_neg import *
from ._base import TensorMixinUnary

__all__ = [
    TensorMixinUnary.__name__,
]
