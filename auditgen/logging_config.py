"""Logging setup for auditgen.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach console (rich) and optional file handlers.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "auditgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger inside the auditgen hierarchy.

    Args:
        name: Module name (usually ``__name__``) or None for the package logger.

    Returns:
        Configured logger instance.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(
    level: str | int = "WARNING", log_file: str | Path | None = None
) -> logging.Logger:
    """Configure the auditgen logger with a rich console handler.

    Args:
        level: Log level name or number.
        log_file: Optional path of a file that receives the same records.

    Returns:
        The package logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Avoid duplicate output when the CLI runs more than once in a process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        level=level,
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
