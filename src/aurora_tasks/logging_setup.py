from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "aurora_tasks"
_HANDLER_NAME = "aurora_tasks.console"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach a single stderr handler to the package logger.

    Safe to call more than once: the handler is only added the first time,
    later calls just adjust the level. Handlers on other loggers (the root
    logger, uvicorn, pytest's capture) are left alone.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return logger

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stderr)
    ch.set_name(_HANDLER_NAME)
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger
