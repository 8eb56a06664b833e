from ._dispatcher import COMMAND_NOT_FOUND, CommandDispatcher

__all__ = [
    CommandDispatcher.__name__,
    "COMMAND_NOT_FOUND",
]
