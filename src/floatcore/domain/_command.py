"""
Remote command records and the closed set of dispatchable operations.

A transport layer (outside this package) decodes raw bytes into a message
with three fields:

- ``objectIndex``: ID of the target tensor
- ``functionCall``: operation name
- ``tensorIndexParams``: ordered operands; tensor IDs or scalars depending on
  the operation

`Command` is the validated, immutable form of that message. `Operation`
enumerates every supported operation name; `parse_operation` converts the
incoming string into an `Operation` or fails with `UnknownOperationError`,
which keeps the "unknown operation" failure separate from dispatch itself.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from ._errors import InvalidCommandError, UnknownOperationError

Number = Union[int, float]


class Operation(Enum):
    """Dispatchable operations, valued by their wire name."""

    INIT_ADD_MATRIX_MULTIPLY = "init_add_matrix_multiply"
    INLINE_ELEMENTWISE_SUBTRACT = "inline_elementwise_subtract"
    MULTIPLY_DERIVATIVE = "multiply_derivative"
    ADD_MATRIX_MULTIPLY = "add_matrix_multiply"
    PRINT = "print"
    GPU = "gpu"
    CPU = "cpu"
    ABS = "abs"
    NEG = "neg"
    ADD = "add"
    ADD_ = "add_"
    SCALAR_MULTIPLY = "scalar_multiply"
    ZERO_ = "zero_"


def parse_operation(name: object) -> Operation:
    """
    Convert an operation name into an `Operation`.

    Parameters
    ----------
    name : object
        Operation name as received on the wire.

    Returns
    -------
    Operation
        The matching operation.

    Raises
    ------
    UnknownOperationError
        If `name` is not a string naming a known operation.
    """
    if not isinstance(name, str):
        raise UnknownOperationError(name)
    try:
        return Operation(name)
    except ValueError:
        raise UnknownOperationError(name) from None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Command:
    """
    A decoded remote command.

    Attributes
    ----------
    object_index : int
        ID of the tensor the operation is invoked on.
    function_call : str
        Operation name (validated later by the dispatcher).
    tensor_index_params : tuple[int | float, ...]
        Operands. Their meaning (tensor ID or scalar) depends on the operation.
    """

    object_index: int
    function_call: str
    tensor_index_params: tuple[Number, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.object_index, bool) or not isinstance(self.object_index, int):
            raise InvalidCommandError(
                f"objectIndex must be an integer tensor id, got {self.object_index!r}"
            )
        if not isinstance(self.function_call, str):
            raise InvalidCommandError(
                f"functionCall must be a string, got {self.function_call!r}"
            )
        params = tuple(self.tensor_index_params)
        for p in params:
            if not _is_number(p):
                raise InvalidCommandError(
                    f"tensorIndexParams entries must be numbers, got {p!r}"
                )
        object.__setattr__(self, "tensor_index_params", params)

    @classmethod
    def from_message(cls, message: Mapping[str, Any]) -> "Command":
        """
        Build a command from a decoded message mapping.

        Parameters
        ----------
        message : Mapping[str, Any]
            Mapping with keys ``objectIndex``, ``functionCall`` and optionally
            ``tensorIndexParams`` (defaults to no operands).

        Raises
        ------
        InvalidCommandError
            If a required key is missing or a field has the wrong type.
        """
        if not isinstance(message, Mapping):
            raise InvalidCommandError(f"command message must be a mapping, got {type(message).__name__}")
        missing = [k for k in ("objectIndex", "functionCall") if k not in message]
        if missing:
            raise InvalidCommandError(f"command message is missing {', '.join(missing)}")

        params = message.get("tensorIndexParams") or ()
        if isinstance(params, (str, bytes)) or not isinstance(params, (list, tuple)):
            raise InvalidCommandError(
                f"tensorIndexParams must be a list, got {type(params).__name__}"
            )
        return cls(
            object_index=message["objectIndex"],
            function_call=message["functionCall"],
            tensor_index_params=tuple(params),
        )

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Command":
        """Parse a JSON-encoded command message."""
        try:
            message = json.loads(text)
        except (TypeError, ValueError) as e:
            raise InvalidCommandError(f"command message is not valid JSON: {e}") from e
        return cls.from_message(message)

    def to_message(self) -> dict[str, Any]:
        """Return the wire-style mapping for this command."""
        return {
            "objectIndex": self.object_index,
            "functionCall": self.function_call,
            "tensorIndexParams": list(self.tensor_index_params),
        }
