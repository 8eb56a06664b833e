"""
In-process tensor registry.

`InMemoryTensorRegistry` maps integer IDs to tensors for the command
dispatcher. It satisfies the domain `ITensorRegistry` contract and adds the
administrative operations a controller needs: creating tensors with the
registry's own counter, unregistering, and re-homing a tensor under another
ID.

Ownership
---------
The ID index holds weak references: registering a tensor does not keep it
alive, and a tensor dropped by its owner stops resolving. Tensors registered
with ``owned=True`` (everything built by `create`, and tensors the
dispatcher creates for remote callers) are additionally pinned by the
registry until they are unregistered.

The registry never touches a tensor's shape, strides or data; the only state
it changes is the ID binding, and only through `reassign`.

Thread safety
-------------
The index is protected by a lock. Serializing concurrent *operations* on
the same tensor remains the caller's responsibility.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Any, Dict, Iterator, Optional, Sequence, Union

from ...domain._errors import DuplicateTensorIdError, UnknownTensorIdError
from ...domain._identity import IdCounter, default_id_counter
from ...domain._tensor import ITensor
from ...domain.device._device import Backend
from ..tensor._tensor import FloatTensor

logger = logging.getLogger(__name__)


class InMemoryTensorRegistry:
    """
    Lock-protected ID -> tensor index.

    Parameters
    ----------
    counter : IdCounter, optional
        Counter used by `create`. Defaults to the process-wide counter that
        plain `FloatTensor` construction draws from, so tensors built either
        way never share an ID. Pass an isolated `IdCounter` only when every
        registered tensor is built with it.
    """

    def __init__(self, counter: Optional[IdCounter] = None) -> None:
        self._counter = counter if counter is not None else default_id_counter()
        self._tensors: "weakref.WeakValueDictionary[int, ITensor]" = weakref.WeakValueDictionary()
        self._owned: Dict[int, ITensor] = {}
        self._lock = threading.RLock()

    @property
    def counter(self) -> IdCounter:
        """Counter that tensors created through this registry draw IDs from."""
        return self._counter

    # ------------------------------------------------------------------
    # ITensorRegistry
    # ------------------------------------------------------------------
    def register(self, tensor: ITensor, owned: bool = False) -> int:
        """
        Index `tensor` under its current ID.

        Registering the same tensor again is a no-op, except that
        ``owned=True`` upgrades an unowned registration.

        Raises
        ------
        TypeError
            If `tensor` does not satisfy `ITensor`.
        DuplicateTensorIdError
            If a different live tensor is already registered under that ID.
        """
        if not isinstance(tensor, ITensor):
            raise TypeError(f"expected a tensor, got {type(tensor).__name__}")
        tid = tensor.id
        with self._lock:
            current = self._tensors.get(tid)
            if current is not None and current is not tensor:
                raise DuplicateTensorIdError(tid)
            self._tensors[tid] = tensor
            if owned:
                self._owned[tid] = tensor
            self._counter.advance_to(tid)
        logger.debug("registered tensor %d (owned=%s)", tid, owned)
        return tid

    def resolve(self, tensor_id: int) -> ITensor:
        """
        Return the tensor registered under `tensor_id`.

        Raises
        ------
        UnknownTensorIdError
            If nothing live is registered under that ID.
        """
        with self._lock:
            try:
                return self._tensors[tensor_id]
            except (KeyError, TypeError):
                raise UnknownTensorIdError(tensor_id) from None

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def create(
        self,
        shape: Sequence[int],
        data: Optional[Any] = None,
        *,
        backend: Union[Backend, str] = Backend.HOST,
        runtime: Optional[Any] = None,
    ) -> FloatTensor:
        """Construct a tensor with this registry's counter and register it as owned."""
        tensor = FloatTensor(
            shape, data, backend=backend, runtime=runtime, counter=self._counter
        )
        self.register(tensor, owned=True)
        return tensor

    def unregister(self, tensor_id: int) -> ITensor:
        """
        Drop the binding (and any ownership) for `tensor_id` and return the
        tensor.

        Raises
        ------
        UnknownTensorIdError
            If nothing live is registered under that ID.
        """
        with self._lock:
            try:
                tensor = self._tensors.pop(tensor_id)
            except (KeyError, TypeError):
                raise UnknownTensorIdError(tensor_id) from None
            self._owned.pop(tensor_id, None)
            return tensor

    def owns(self, tensor_id: int) -> bool:
        """Whether the registry keeps the tensor under `tensor_id` alive."""
        with self._lock:
            try:
                return tensor_id in self._owned
            except TypeError:
                return False

    def reassign(self, tensor: FloatTensor, new_id: int) -> None:
        """
        Re-home a registered tensor under `new_id`.

        This is an administrative override: the tensor's ID is rebound and
        the index (and ownership) updated atomically. The registry counter
        is advanced past `new_id` so later `create` calls cannot mint it.

        Raises
        ------
        TypeError
            If `new_id` is not an int.
        UnknownTensorIdError
            If `tensor` is not registered here.
        DuplicateTensorIdError
            If `new_id` is bound to a different tensor.
        """
        if isinstance(new_id, bool) or not isinstance(new_id, int):
            raise TypeError(f"tensor ids are ints, got {new_id!r}")
        with self._lock:
            old_id = tensor.id
            if self._tensors.get(old_id) is not tensor:
                raise UnknownTensorIdError(old_id)
            current = self._tensors.get(new_id)
            if current is not None and current is not tensor:
                raise DuplicateTensorIdError(new_id)
            owned = self._owned.pop(old_id, None) is not None
            del self._tensors[old_id]
            tensor._rebind_id(new_id)
            self._tensors[new_id] = tensor
            if owned:
                self._owned[new_id] = tensor
            self._counter.advance_to(new_id)
        logger.info("tensor %d reassigned to id %d", old_id, new_id)

    def __contains__(self, tensor_id: object) -> bool:
        with self._lock:
            try:
                return tensor_id in self._tensors
            except TypeError:
                return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._tensors)

    def ids(self) -> Iterator[int]:
        """Snapshot of the live registered IDs."""
        with self._lock:
            return iter(sorted(self._tensors.keys()))
