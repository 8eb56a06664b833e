import logging
import sys
from typing import Optional, Union


class ColorFormatter(logging.Formatter):
    """
    A logging formatter that adds ANSI color codes to log records based on
    their severity level.

    Examples
    --------
    >>> handler = logging.StreamHandler()
    >>> handler.setFormatter(ColorFormatter())
    """

    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    cyan = "\x1b[36;20m"
    green = "\x1b[32;20m"
    reset = "\x1b[0m"

    FORMATS = {
        logging.DEBUG: cyan,
        logging.INFO: green,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def format(self, record):
        color = self.FORMATS.get(record.levelno, self.grey)
        formatter = logging.Formatter(
            f"{color}%(asctime)s - %(name)s - %(levelname)s - %(message)s{self.reset}"
        )
        return formatter.format(record)


def setup_logger(
    name: Optional[str] = "floatcore", level: Union[int, str] = logging.INFO
) -> logging.Logger:
    """
    Set up a logger with colored console output on stdout.

    Calling this more than once for the same logger only updates its level;
    a second console handler is never attached.

    Parameters
    ----------
    name : Optional[str]
        Logger name. Defaults to the package logger, which every floatcore
        module logs under.
    level : int or str
        Logging level, e.g. ``logging.DEBUG`` or ``"DEBUG"`` (as found in
        `Settings.log_level`).

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(getattr(h, "_floatcore_console", False) for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColorFormatter())
        console_handler._floatcore_console = True
        logger.addHandler(console_handler)

    return logger
