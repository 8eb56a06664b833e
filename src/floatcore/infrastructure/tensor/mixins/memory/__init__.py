"""
Memory mixin and its backend-specific implementations: transfers between
host and device, fills, and host export.
"""

from ._tensor_transfer import *
from ._tensor_fill import *
from ._base import TensorMixinMemory

__all__ = [
    TensorMixinMemory.__name__,
]
