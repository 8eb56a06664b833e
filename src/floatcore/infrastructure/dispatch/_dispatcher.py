"""
Command dispatcher.

`CommandDispatcher` turns a decoded `Command` into exactly one tensor
operation and returns a string result. Dispatch happens in three steps:

1. parse the operation name into an `Operation` (unknown names fail here,
   before any lookup or mutation);
2. resolve the target and every tensor operand through the registry and
   check operand count and kinds;
3. call the handler registered for the operation in the handler table.

Result strings per operation
----------------------------
==============================  ============================================
``print``                       the rendered tensor text
``add``                         the new tensor's ID, e.g. ``"7"``
every other operation           ``"<operation>: OK"``
==============================  ============================================

Error reporting
---------------
`dispatch` always raises typed `TensorError` subclasses. `process_message`
is the boundary used by transports and applies `Settings.error_policy` to
every failure alike (unknown operation, unknown ID, bad operands, shape
errors):

- ``raise``: the exception propagates.
- ``message``: an unknown operation renders as `COMMAND_NOT_FOUND`, any
  other failure as ``"<operation>: <ErrorClass>: <message>"``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ...domain._command import Command, Operation, parse_operation
from ...domain._errors import (
    InvalidCommandError,
    TensorError,
    UnknownOperationError,
)
from ...domain._registry import ITensorRegistry
from ...domain._tensor import ITensor
from .._config import Settings

logger = logging.getLogger(__name__)

# Wire-compatible with existing controller clients.
COMMAND_NOT_FOUND = "SyftController.processMessage: Command not found."

Handler = Callable[["CommandDispatcher", ITensor, Command], str]

_HANDLERS: Dict[Operation, Handler] = {}


def _handles(op: Operation) -> Callable[[Handler], Handler]:
    def decorator(fn: Handler) -> Handler:
        if op in _HANDLERS:
            raise RuntimeError(f"duplicate handler for {op.value}")
        _HANDLERS[op] = fn
        return fn

    return decorator


def _ok(command: Command) -> str:
    return f"{command.function_call}: OK"


def _expect_arity(command: Command, count: int) -> None:
    got = len(command.tensor_index_params)
    if got != count:
        raise InvalidCommandError(
            f"{command.function_call} expects {count} operand(s), got {got}"
        )


def _as_tensor_id(command: Command, value: Any) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise InvalidCommandError(
            f"{command.function_call} expects tensor ids, got {value!r}"
        )
    return int(value)


def _as_scalar(command: Command, value: Any) -> float:
    try:
        return float(value)
    except OverflowError as e:
        raise InvalidCommandError(
            f"{command.function_call} scalar operand out of float range: {e}"
        ) from e


class CommandDispatcher:
    """
    Maps commands onto tensor operations.

    Parameters
    ----------
    registry : ITensorRegistry
        Resolves operand IDs and registers (as owned) tensors created by
        commands.
    settings : Settings, optional
        Error policy and print transfer policy. Defaults to `Settings()`.
    """

    def __init__(self, registry: ITensorRegistry, settings: Optional[Settings] = None) -> None:
        self._registry = registry
        self._settings = settings if settings is not None else Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    @staticmethod
    def supported_operations() -> tuple[str, ...]:
        """Wire names of every dispatchable operation."""
        return tuple(op.value for op in Operation if op in _HANDLERS)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    def dispatch(self, command: Command) -> str:
        """
        Execute `command` and return its result string.

        Raises
        ------
        UnknownOperationError
            If the operation name is not in the known set.
        UnknownTensorIdError
            If the target or an operand ID is not registered.
        InvalidCommandError
            If the operand count or kinds do not fit the operation.
        TensorError
            Any error raised by the tensor operation itself.
        """
        op = parse_operation(command.function_call)
        target = self._registry.resolve(command.object_index)
        logger.debug(
            "dispatch %s on tensor %d with %r",
            op.value,
            command.object_index,
            command.tensor_index_params,
        )
        return _HANDLERS[op](self, target, command)

    def process_message(self, message: Union[Command, Mapping[str, Any], str, bytes]) -> str:
        """
        Boundary entry point applying the configured error policy.

        Parameters
        ----------
        message : Command, mapping, or JSON text
            The command, or a message it can be decoded from.
        """
        name = "<invalid>"
        try:
            if isinstance(message, Command):
                command = message
            elif isinstance(message, (str, bytes)):
                command = Command.from_json(message)
            else:
                command = Command.from_message(message)
            name = command.function_call
            return self.dispatch(command)
        except TensorError as e:
            logger.warning("command %s rejected: %s", name, e)
            if self._settings.error_policy == "raise":
                raise
            if isinstance(e, UnknownOperationError):
                return COMMAND_NOT_FOUND
            return f"{name}: {type(e).__name__}: {e}"

    # ------------------------------------------------------------------
    # Operand helpers
    # ------------------------------------------------------------------
    def _tensor_operands(self, command: Command, count: int) -> list[ITensor]:
        _expect_arity(command, count)
        return [
            self._registry.resolve(_as_tensor_id(command, p))
            for p in command.tensor_index_params
        ]

    def _scalar_operand(self, command: Command) -> float:
        _expect_arity(command, 1)
        return _as_scalar(command, command.tensor_index_params[0])

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    @_handles(Operation.INIT_ADD_MATRIX_MULTIPLY)
    def _elementwise_multiply(self, target: ITensor, command: Command) -> str:
        (other,) = self._tensor_operands(command, 1)
        target.elementwise_multiply_(other)
        return _ok(command)

    @_handles(Operation.INLINE_ELEMENTWISE_SUBTRACT)
    def _elementwise_subtract(self, target: ITensor, command: Command) -> str:
        (other,) = self._tensor_operands(command, 1)
        target.elementwise_subtract_(other)
        return _ok(command)

    @_handles(Operation.MULTIPLY_DERIVATIVE)
    def _multiply_derivative(self, target: ITensor, command: Command) -> str:
        (other,) = self._tensor_operands(command, 1)
        target.multiply_derivative_(other)
        return _ok(command)

    @_handles(Operation.ADD_MATRIX_MULTIPLY)
    def _add_matrix_multiply(self, target: ITensor, command: Command) -> str:
        a, b = self._tensor_operands(command, 2)
        target.add_matrix_multiply_(a, b)
        return _ok(command)

    @_handles(Operation.PRINT)
    def _print(self, target: ITensor, command: Command) -> str:
        _expect_arity(command, 0)
        return target.render(auto_transfer=self._settings.auto_transfer_on_print)

    @_handles(Operation.GPU)
    def _gpu(self, target: ITensor, command: Command) -> str:
        _expect_arity(command, 0)
        target.to_device()
        return _ok(command)

    @_handles(Operation.CPU)
    def _cpu(self, target: ITensor, command: Command) -> str:
        _expect_arity(command, 0)
        target.to_host()
        return _ok(command)

    @_handles(Operation.ABS)
    def _abs(self, target: ITensor, command: Command) -> str:
        _expect_arity(command, 0)
        target.abs_()
        return _ok(command)

    @_handles(Operation.NEG)
    def _neg(self, target: ITensor, command: Command) -> str:
        _expect_arity(command, 0)
        target.neg_()
        return _ok(command)

    @_handles(Operation.ADD)
    def _add(self, target: ITensor, command: Command) -> str:
        (other,) = self._tensor_operands(command, 1)
        out = target.add(other)
        return str(self._registry.register(out, owned=True))

    @_handles(Operation.ADD_)
    def _add_scalar(self, target: ITensor, command: Command) -> str:
        target.add_(self._scalar_operand(command))
        return _ok(command)

    @_handles(Operation.SCALAR_MULTIPLY)
    def _scalar_multiply(self, target: ITensor, command: Command) -> str:
        target.scalar_multiply_(self._scalar_operand(command))
        return _ok(command)

    @_handles(Operation.ZERO_)
    def _zero(self, target: ITensor, command: Command) -> str:
        _expect_arity(command, 0)
        target.zero_()
        return _ok(command)
