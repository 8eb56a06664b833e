"""
Tensor control-path manager for backend-specific dispatch.

This module defines a shared control-path manager used to register and
resolve backend-specific implementations of `FloatTensor` methods.

The manager is created by specializing the generic `create_path_builder`
utility with the state attribute name ``"backend"``. As a result, method
dispatch is performed based on the runtime value of ``self.backend``.

Typical usage
-------------
Backend-specific implementations register themselves with this manager:

    @tensor_control_path_manager(TensorMixin, TensorMixin.op, Backend.HOST)
    def op_host(self, ...): ...

    @tensor_control_path_manager(TensorMixin, TensorMixin.op, Backend.DEVICE)
    def op_device(self, ...): ...

Calling ``tensor.op(...)`` then runs the implementation registered for the
backend currently holding the tensor's data. An operation with no
implementation for that backend raises `WrongBackendError`.
"""

from ...domain._errors import WrongBackendError
from ...domain.utils._control_path import create_path_builder

tensor_control_path_manager = create_path_builder(
    "backend",
    trap_exception=lambda name, state: WrongBackendError(name, str(state)),
)
