"""
Registry contract consumed by the command dispatcher.

The dispatcher needs exactly two things from whatever maps IDs to tensors:
resolving an ID to a live tensor, and registering a newly created tensor so
that its ID can be handed back to the remote caller.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._tensor import ITensor


@runtime_checkable
class ITensorRegistry(Protocol):
    """
    Tensor lookup contract.

    Notes
    -----
    A registry is a lookup index, not an owner: tensors stay owned by
    whoever created them. The exception is a tensor registered with
    ``owned=True``, which the registry keeps alive until it is unregistered;
    the dispatcher uses this for tensors it creates on behalf of a remote
    caller that only ever holds the ID.

    A registry only binds IDs to tensors. It must never change a tensor's
    shape, strides or data.
    """

    def register(self, tensor: ITensor, owned: bool = False) -> int:
        """
        Make `tensor` resolvable by its ID.

        Parameters
        ----------
        tensor : ITensor
            Tensor to index.
        owned : bool, optional
            Whether the registry takes ownership of `tensor`.

        Returns
        -------
        int
            The ID under which the tensor is now registered.
        """
        ...

    def resolve(self, tensor_id: int) -> ITensor:
        """
        Return the tensor registered under `tensor_id`.

        Raises
        ------
        UnknownTensorIdError
            If no live tensor is registered under that ID.
        """
        ...
