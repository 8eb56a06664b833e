"""
State-based method dispatch (a.k.a. "control-path" templating) via decorators.

This module provides a small mechanism for routing a single method call to
one of several registered implementations based on the runtime value of a
named attribute on the receiver (for tensors: ``self.backend``).

Core idea
---------
- You define a *base* method on a class (its signature becomes the canonical
  one, and its docstring documents the contract).
- You then register one implementation per state value, keyed by:
    (ClassName, MethodName, StateVal)
- At runtime, the installed wrapper reads the state attribute of ``self`` and
  calls the implementation registered for that value as a bound method.

Important notes
---------------
- This design mutates the class: the first time a control path is
  registered, the method name on the class is replaced with the dispatcher.
- Registered implementations are stored in a closure-local mapping owned by
  `create_path_builder()`. Different builders do not share mappings.
- When no implementation matches the current state, the builder's
  ``trap_exception`` factory is called with ``(method_name, state)`` and the
  returned exception is raised; without one, `NotImplementedError` is raised.
"""

from typing import (
    Callable,
    Hashable,
    Optional,
    Dict,
    Type,
    Any,
)
from typing_extensions import ParamSpec, TypeVar
from collections import namedtuple
from functools import wraps

P = ParamSpec("P")
R = TypeVar("R")

MethodKey = namedtuple("MethodKey", ["ClassName", "MethodName", "StateVal"])
"""Tuple-like key uniquely identifying a registered control path."""


def create_path_builder(
    state_attr: str,
    trap_exception: Optional[Callable[[str, Any], Exception]] = None,
) -> Callable[[Type, Callable[P, R], Hashable], Callable[[Callable[P, R]], Callable[P, R]]]:
    """
    Create a "path builder" used to register state-dependent method bodies.

    The returned function (`templator`) is used like this:

        decorator = create_path_builder("backend")

        class MyClass:
            def foo(self, x: int) -> int: ...

        @decorator(MyClass, MyClass.foo, "A")
        def foo_a(self, x: int) -> int:
            ...

    When ``obj.foo(...)`` is called, it dispatches to ``foo_a(obj, ...)`` if
    ``obj.backend == "A"``.

    Parameters
    ----------
    state_attr : str
        Name of the attribute read from ``self`` to select the control path.
    trap_exception : Optional[Callable[[str, Any], Exception]]
        Factory producing the exception raised when no control path matches
        the current state. Receives the method name and the state value.

    Returns
    -------
    Callable
        ``templator(cls, method, state) -> decorator``.
    """

    methods_map: Dict[MethodKey, Callable] = {}
    """Mapping from (class, method, state) keys to registered implementations."""

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator that registers a control-path implementation.

        Parameters
        ----------
        cls : Type
            Class on which the dispatcher is installed under
            ``method.__name__``.
        method : Callable[P, R]
            Base method. Its metadata is copied onto the dispatcher.
        state : Hashable
            State value selecting the decorated implementation.

        Raises
        ------
        TypeError
            If `state` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(f"Control-path state must be hashable. Got {state!r}")

        name = method.__name__
        base = getattr(method, "__control_path_base__", method)

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            methods_map[MethodKey(cls.__name__, name, state)] = sub_method

            current = cls.__dict__.get(name)
            if getattr(current, "__control_path_base__", None) is not None:
                return sub_method

            @wraps(base)
            def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                cur_state = getattr(self, state_attr)
                sm = methods_map.get(MethodKey(cls.__name__, name, cur_state))
                if sm is not None:
                    return sm(self, *args, **kwargs)
                if trap_exception is not None:
                    raise trap_exception(name, cur_state)
                raise NotImplementedError(
                    "Missing control path (state={}) for {}".format(
                        repr(cur_state), repr(name)
                    )
                )

            wrapper.__control_path_base__ = base
            setattr(cls, name, wrapper)
            return sub_method

        return decorator

    templator.registered = methods_map
    return templator
