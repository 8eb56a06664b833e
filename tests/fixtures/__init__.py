from .fake_runtime import FakeDeviceRuntime

__all__ = [FakeDeviceRuntime.__name__]
