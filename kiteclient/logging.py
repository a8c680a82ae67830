from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "KITE_LOG_LEVEL"


def get_logger(name: str, *, level: Optional[int] = None) -> logging.Logger:
    """Create or return a logger for a kiteclient module.

    Policy:
    - INFO: session lifecycle (token exchange, invalidation, token expiry)
    - WARNING: responses that could not be decoded
    - DEBUG: outgoing requests, error response bodies

    Records propagate to the application's handlers and a ``NullHandler`` keeps
    the library silent otherwise. Setting ``KITE_LOG_LEVEL`` (or passing
    ``level``) attaches a stderr handler of our own and stops propagation.
    """

    logger = logging.getLogger(name)
    if logger.handlers:  # already configured
        return logger

    env_level = os.getenv(LOG_LEVEL_ENV)
    if level is None and not env_level:
        logger.addHandler(logging.NullHandler())
        return logger

    resolved_level = level or getattr(logging, env_level.upper(), logging.INFO)
    logger.setLevel(resolved_level)
    handler = logging.StreamHandler()
    handler.setLevel(resolved_level)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
