from ._device import Backend

__all__ = [Backend.__name__]
