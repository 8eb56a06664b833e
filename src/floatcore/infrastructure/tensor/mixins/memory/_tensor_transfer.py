"""
Backend transfer implementations.

``to_device`` on a host tensor uploads the flat buffer into a freshly
allocated `DeviceStorage` (data handle plus shape handle); ``to_host`` on a
device tensor downloads into a new `HostStorage` and releases the device
handles. Calling either on a tensor already resident on the target backend
is a no-op.
"""

import logging
from typing import Any, Optional

from ..._tensor_builder import tensor_control_path_manager
from ..._storage import DeviceStorage, HostStorage

from .....domain.device._device import Backend
from .....domain._tensor import ITensor

from ._base import TensorMixinMemory as TMM

logger = logging.getLogger(__name__)


@tensor_control_path_manager(TMM, TMM.to_device, Backend.HOST)
def tensor_to_device_from_host(self: ITensor, runtime: Optional[Any] = None) -> None:
    if runtime is None:
        from ....device_runtime import get_device_runtime

        runtime = get_device_runtime()

    new = DeviceStorage.allocate(runtime, self.shape, values=self._storage.array)
    old, self._storage = self._storage, new
    old.release()
    logger.debug("tensor %d moved host -> device (%d elements)", self.id, self.size)


@tensor_control_path_manager(TMM, TMM.to_device, Backend.DEVICE)
def tensor_to_device_noop(self: ITensor, runtime: Optional[Any] = None) -> None:
    return None


@tensor_control_path_manager(TMM, TMM.to_host, Backend.DEVICE)
def tensor_to_host_from_device(self: ITensor) -> None:
    new = HostStorage(self._storage.download())
    if new.array.shape != (self.size,):
        raise RuntimeError(
            f"device download returned {new.array.shape}, expected ({self.size},)"
        )
    old, self._storage = self._storage, new
    old.release()
    logger.debug("tensor %d moved device -> host (%d elements)", self.id, self.size)


@tensor_control_path_manager(TMM, TMM.to_host, Backend.HOST)
def tensor_to_host_noop(self: ITensor) -> None:
    return None
