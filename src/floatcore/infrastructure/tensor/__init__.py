from ._tensor import FloatTensor
from ._storage import DeviceStorage, HostStorage

__all__ = [
    FloatTensor.__name__,
    HostStorage.__name__,
    DeviceStorage.__name__,
]
