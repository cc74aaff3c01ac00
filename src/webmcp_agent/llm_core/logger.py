"""Package-wide logger namespace.

Every module logs through ``get_logger(__name__)``. Nothing is printed unless
the embedding application attaches a handler, e.g. via ``setup_logging``.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER = "webmcp_agent"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``name`` as a child of the ``webmcp_agent`` logger.

    Dotted module paths inside the package map onto themselves; foreign names
    such as plugin identifiers are nested below the package root.
    """
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(ROOT_LOGGER).getChild(name)


def setup_logging(level: int = logging.INFO, format_str: str = DEFAULT_FORMAT) -> None:
    """Send package logs to stderr at ``level``.

    Meant for applications such as the chat CLI. Repeated calls only adjust
    the level; the stream handler is attached once.

    Args:
        level: Threshold for the package logger.
        format_str: Format used by the stderr handler when it is first attached.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    if any(not isinstance(handler, logging.NullHandler) for handler in root.handlers):
        return

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(format_str))
    root.addHandler(stream)


logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())
