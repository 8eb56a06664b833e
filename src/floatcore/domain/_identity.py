"""
Tensor identifier allocation.

`IdCounter` hands out process-unique, strictly increasing integer IDs. It is
an explicit object rather than hidden global state: tensor construction APIs
take a `counter=` argument and a registry owns the counter it mints with, so
tests can use isolated counters.

A single process-wide default counter is provided for callers that do not
care which counter they use. IDs are never freed or recycled, even after the
tensor that carried them is destroyed.
"""

from __future__ import annotations

import threading


class IdCounter:
    """
    Thread-safe monotonically increasing ID source.

    Parameters
    ----------
    start : int, optional
        Value of the last ID considered handed out. The first call to
        `next_id()` returns ``start + 1``. Defaults to 0.

    Notes
    -----
    Mutations ("increment and return", and `advance_to`) are protected by a
    lock so that concurrent tensor construction never loses an update or
    duplicates an ID.
    """

    __slots__ = ("_value", "_created", "_lock")

    def __init__(self, start: int = 0) -> None:
        if isinstance(start, bool) or not isinstance(start, int) or start < 0:
            raise ValueError(f"start must be a non-negative int, got {start!r}")
        self._value = start
        self._created = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """
        Reserve and return the next ID.

        Returns
        -------
        int
            An ID strictly greater than every ID previously returned by this
            counter.
        """
        with self._lock:
            self._value += 1
            self._created += 1
            return self._value

    def advance_to(self, tensor_id: int) -> None:
        """
        Ensure `tensor_id` is never handed out by a later `next_id()`.

        IDs bound outside the counter (a reassigned tensor, or one built
        with another counter) call this so the next minted ID lands above
        them. A value at or below `last_id` is a no-op.
        """
        with self._lock:
            if tensor_id > self._value:
                self._value = tensor_id

    @property
    def last_id(self) -> int:
        """Most recently issued ID (``start`` if none has been issued)."""
        with self._lock:
            return self._value

    @property
    def created(self) -> int:
        """Number of IDs handed out by this counter."""
        with self._lock:
            return self._created

    def __repr__(self) -> str:
        return f"IdCounter(last_id={self.last_id})"


_DEFAULT_COUNTER = IdCounter()


def default_id_counter() -> IdCounter:
    """Return the process-wide default counter."""
    return _DEFAULT_COUNTER
