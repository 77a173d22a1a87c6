"""Logging utilities for tinycert modules."""

import logging
from typing import Optional

ROOT_LOGGER_NAME = 'tinycert'

# Field names whose values never reach the log in cleartext
SECRET_FIELDS = frozenset({'email', 'passphrase', 'token', 'digest'})

REDACTED = '***'


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the ``tinycert`` namespace.

    The logger propagates to the root logger so that ``basicConfig()``
    works without extra setup. When the root logger has no handlers yet
    the level defaults to WARNING.

    Args:
        name: Logger name relative to ``tinycert`` (``__name__`` is accepted
            as well and is used unchanged)

    Returns:
        Configured logger instance
    """
    if not name:
        full_name = ROOT_LOGGER_NAME
    elif name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        full_name = name
    else:
        full_name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(full_name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)

    return logger


def redact_pairs(pairs) -> str:
    """Render ``(name, value)`` pairs for logging with secret values masked."""
    return '&'.join(
        f"{name}={REDACTED if name in SECRET_FIELDS else value}"
        for name, value in pairs
    )
