"""
Backend-specific implementations of ``add_matrix_multiply_``.
"""

import numpy as np

from ..._tensor_builder import tensor_control_path_manager

from .....domain.device._device import Backend
from .....domain._tensor import ITensor

from ._base import TensorMixinMatmul as TMM


@tensor_control_path_manager(TMM, TMM.add_matrix_multiply_, Backend.HOST)
def tensor_add_matrix_multiply_host(self: ITensor, a: ITensor, b: ITensor) -> None:
    m, k, n = self._matmul_check("add_matrix_multiply_", a, b)
    prod = np.matmul(a._storage.array.reshape(m, k), b._storage.array.reshape(k, n))
    out = self._storage.array.reshape(m, n)
    np.add(out, prod, out=out)


@tensor_control_path_manager(TMM, TMM.add_matrix_multiply_, Backend.DEVICE)
def tensor_add_matrix_multiply_device(self: ITensor, a: ITensor, b: ITensor) -> None:
    m, k, n = self._matmul_check("add_matrix_multiply_", a, b)
    s = self._storage
    s.runtime.matmul_add(s.handle, a._storage.handle, b._storage.handle, m, k, n)
