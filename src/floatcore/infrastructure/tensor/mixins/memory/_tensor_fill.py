"""
Fill and host-export implementations.

- ``fill_``: Host path fills the NumPy buffer; Device path runs the runtime's
  fill kernel.
- ``to_numpy``: registered for the host backend only.
"""

import numpy as np

from ..._tensor_builder import tensor_control_path_manager

from .....domain.device._device import Backend
from .....domain._tensor import ITensor

from ._base import TensorMixinMemory as TMM


@tensor_control_path_manager(TMM, TMM.fill_, Backend.HOST)
def tensor_fill_host(self: ITensor, value: float) -> None:
    self._storage.array.fill(np.float32(value))


@tensor_control_path_manager(TMM, TMM.fill_, Backend.DEVICE)
def tensor_fill_device(self: ITensor, value: float) -> None:
    s = self._storage
    s.runtime.fill(s.handle, s.size, float(np.float32(value)))


@tensor_control_path_manager(TMM, TMM.to_numpy, Backend.HOST)
def tensor_to_numpy_host(self: ITensor) -> np.ndarray:
    return self._storage.array.reshape(self.shape).copy()
