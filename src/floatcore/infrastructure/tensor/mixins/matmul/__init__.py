"""
Matrix mixin and its backend-specific implementations.
"""

from ._tensor_add_matmul import *
from ._base import TensorMixinMatmul

__all__ = [
    TensorMixinMatmul.__name__,
]
