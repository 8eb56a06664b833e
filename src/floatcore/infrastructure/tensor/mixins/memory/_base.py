"""
Memory mixin declaring backend transfers, fills and host interop.

Transfer policy
---------------
Compute operations run on whichever backend holds the data. Operations that
need host data (`to_numpy`, `tolist`, element access) are only registered
for the host backend, so calling them on a device-resident tensor raises
`WrongBackendError`; the caller transfers explicitly with `to_host()`.
"""

from typing import Any, Optional
from abc import ABC

from .....domain._tensor import ITensor


class TensorMixinMemory(ABC):
    """
    Abstract mixin defining storage-level operations.

    Notes
    -----
    A transfer builds the destination storage completely before the tensor
    switches to it. If the transfer fails, the tensor keeps its previous
    storage and backend unchanged.
    """

    def to_device(self: ITensor, runtime: Optional[Any] = None) -> None:
        """
        Move the data to device memory.

        Parameters
        ----------
        runtime : Optional[DeviceRuntime]
            Runtime to allocate from. Defaults to `get_device_runtime()`.

        Notes
        -----
        No-op if the tensor is already device-resident. The host buffer is
        dropped after the switch.

        Raises
        ------
        DeviceUnavailableError
            If no runtime is given and none can be loaded.
        """
        ...

    def to_host(self: ITensor) -> None:
        """
        Move the data to host memory.

        Notes
        -----
        No-op if the tensor is already host-resident. Device handles are
        released after the switch.
        """
        ...

    def fill_(self: ITensor, value: float) -> None:
        """Write `value` into every element in place."""
        ...

    def to_numpy(self: ITensor) -> Any:
        """
        Return a shaped float32 copy of the data.

        Raises
        ------
        WrongBackendError
            If the tensor is device-resident.
        """
        ...

    def tolist(self: ITensor) -> list:
        """Return the data as nested Python lists (host only)."""
        return self.to_numpy().tolist()
