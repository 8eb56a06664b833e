"""
Runtime settings for floatcore.

Settings are read from an optional ``.env`` file (via python-dotenv) and the
process environment, with the environment taking precedence:

- ``FLOATCORE_ERROR_POLICY``: how the dispatcher boundary reports failures;
  ``raise`` (typed exceptions) or ``message`` (descriptive result strings).
- ``FLOATCORE_PRINT_AUTO_TRANSFER``: whether ``print`` pulls device-resident
  data back to the host before rendering.
- ``FLOATCORE_DEVICE_RUNTIME``: name of the device runtime loaded on demand.
- ``FLOATCORE_LOG_LEVEL``: level of the package logger, applied by
  `Settings.configure_logging`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import dotenv_values

from .logger import setup_logger

ERROR_POLICIES = ("raise", "message")
DEVICE_RUNTIMES = ("cupy",)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(key: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Dispatcher, transfer, runtime and logging settings."""

    error_policy: str = "raise"
    auto_transfer_on_print: bool = True
    device_runtime: str = "cupy"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.error_policy not in ERROR_POLICIES:
            raise ValueError(
                f"error_policy must be one of {ERROR_POLICIES}, got {self.error_policy!r}"
            )
        if self.device_runtime not in DEVICE_RUNTIMES:
            raise ValueError(
                f"device_runtime must be one of {DEVICE_RUNTIMES}, got {self.device_runtime!r}"
            )
        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Load settings from a ``.env`` file and the environment.

        Parameters
        ----------
        dotenv_path : Optional[str]
            Path of the ``.env`` file. When None, no file is read.
        environ : Optional[Mapping[str, str]]
            Environment mapping; defaults to ``os.environ``.

        Returns
        -------
        Settings
            Settings with defaults for every key that is not set.

        Raises
        ------
        ValueError
            If a value is not valid for its key.
        """
        values: dict[str, str] = {}
        if dotenv_path is not None:
            values.update(
                {k: v for k, v in dotenv_values(dotenv_path).items() if v is not None}
            )
        values.update(os.environ if environ is None else environ)

        kwargs: dict[str, object] = {}
        if "FLOATCORE_ERROR_POLICY" in values:
            kwargs["error_policy"] = values["FLOATCORE_ERROR_POLICY"].strip().lower()
        if "FLOATCORE_PRINT_AUTO_TRANSFER" in values:
            kwargs["auto_transfer_on_print"] = _parse_bool(
                "FLOATCORE_PRINT_AUTO_TRANSFER", values["FLOATCORE_PRINT_AUTO_TRANSFER"]
            )
        if "FLOATCORE_DEVICE_RUNTIME" in values:
            kwargs["device_runtime"] = values["FLOATCORE_DEVICE_RUNTIME"].strip().lower()
        if "FLOATCORE_LOG_LEVEL" in values:
            kwargs["log_level"] = values["FLOATCORE_LOG_LEVEL"].strip()
        return cls(**kwargs)

    def configure_logging(self) -> logging.Logger:
        """Attach the console handler to the package logger at `log_level`."""
        return setup_logger(level=self.log_level)
