"""Logging setup for swiftgen.

Modules obtain loggers through :func:`get_logger`; the CLI calls
:func:`setup_logging` once to attach a rich handler on stderr.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "swiftgen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``swiftgen`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Configured :class:`logging.Logger`.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str | int = "WARNING") -> logging.Logger:
    """Attach a :class:`RichHandler` to the package logger.

    Repeated calls only update the level.

    Args:
        level: Logging level name or number.

    Returns:
        The package root logger.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True

    return root
