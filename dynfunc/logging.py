"""Logging helpers shared by all dynfunc modules."""

import logging
from typing import Optional, Union

from .env import get_dynfunc_log_level

_ROOT_LOGGER_NAME = "dynfunc"
_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the dynfunc root logger and set its level.

    Calling it again only updates the level; the handler is installed once.

    Parameters
    ----------
    level : Optional[Union[int, str]]
        The log level. Default is the value of DYNFUNC_LOG_LEVEL.

    Returns
    -------
    logging.Logger
        The dynfunc root logger.
    """
    global _configured
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if level is None:
        level = get_dynfunc_log_level()
    root.setLevel(level)
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the dynfunc root logger, e.g. ``dynfunc.Compiler``."""
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
