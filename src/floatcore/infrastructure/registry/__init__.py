from ._registry import InMemoryTensorRegistry

__all__ = [InMemoryTensorRegistry.__name__]
