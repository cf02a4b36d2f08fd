"""Loggers of the squaretag namespace.

Every module logs through a child of the ``squaretag`` logger, so a host
application can tune the whole library with one logger name. No handlers
are installed here.

    >>> import logging
    >>> logging.getLogger("squaretag.scanner").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "squaretag"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the squaretag namespace.

    Module names of the package (``squaretag.scanner``) are used as they
    are; anything else becomes a child of the root logger.

    Example:
        >>> get_logger("myplugin").name
        'squaretag.myplugin'
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
