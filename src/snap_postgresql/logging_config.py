"""Logging setup for the PostgreSQL publisher plugin.

The plugin logs under the ``snap_postgresql`` namespace and stays silent
until the host (or a script) configures output, either through its own
logging setup or through ``setup_logging``.
"""

import logging
import sys

PACKAGE_LOGGER = "snap_postgresql"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str | int = "INFO", propagate: bool = False) -> logging.Logger:
    """Send the plugin's log records to stderr.

    Existing handlers on the package logger are replaced, so calling this
    more than once does not duplicate output.

    Args:
        level (str | int): Logging threshold (e.g. ``"DEBUG"``). Defaults to
            ``"INFO"``.
        propagate (bool): Whether records also bubble up to the root logger.

    Returns:
        logging.Logger: The configured package logger.

    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate

    logger.info("Logging initialized at level: %s", logging.getLevelName(logger.level))
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger inside the plugin namespace.

    Args:
        name (str | None): Usually ``__name__``. If None, the package logger
            is returned.

    """
    return logging.getLogger(name or PACKAGE_LOGGER)
