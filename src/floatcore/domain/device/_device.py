"""
Backend abstraction utilities.

This module defines `Backend`, the enumeration of physical locations a
tensor's data can live in. A tensor is always resident in exactly one
backend:

- `Backend.HOST`: general-purpose host memory (NumPy buffer)
- `Backend.DEVICE`: accelerator memory owned by a device runtime

User-facing strings such as "cpu" or "gpu" are normalized through
`Backend.parse`, so that commands, settings and tests can name backends the
same way.
"""

from enum import Enum


class Backend(Enum):
    """
    Enumeration of tensor storage backends.

    Attributes
    ----------
    HOST : Backend
        Host (CPU) memory.
    DEVICE : Backend
        Accelerator (GPU) memory.
    """

    HOST = "cpu"
    DEVICE = "gpu"

    @classmethod
    def parse(cls, value: "str | Backend") -> "Backend":
        """
        Normalize a backend identifier.

        Parameters
        ----------
        value : str or Backend
            One of "cpu", "host", "gpu", "device", "cuda" or "cuda:0"
            (case-insensitive), or a `Backend` member.

        Returns
        -------
        Backend
            The matching backend.

        Raises
        ------
        ValueError
            If the identifier is not recognized. Device ordinals other than
            0 are rejected: the default device runtime is bound to device 0.
        """
        if isinstance(value, Backend):
            return value
        key = str(value).strip().lower()
        if key in ("cpu", "host"):
            return cls.HOST
        if key in ("gpu", "device", "cuda", "cuda:0"):
            return cls.DEVICE
        raise ValueError(
            f"Invalid backend '{value}'. Expected 'cpu'/'host' or 'gpu'/'device'/'cuda:0'"
        )

    def is_host(self) -> bool:
        return self is Backend.HOST

    def is_device(self) -> bool:
        return self is Backend.DEVICE

    def __str__(self) -> str:
        return self.value
