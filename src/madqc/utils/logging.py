"""Provide minimal logging helpers for detector output."""

from __future__ import annotations
import logging

_LOGGER = logging.getLogger("madqc")


def configure_logging(*, level: str | int = "INFO", fmt: str = "%(message)s") -> None:
    """Configure madqc logging once.

    Args:
        level (str | int): Logging level (e.g., "INFO", "DEBUG").
        fmt (str): Logging format string.
    """
    if _LOGGER.handlers:
        return
    logging.basicConfig(level=level, format=fmt)


def warn(msg: str) -> None:
    """Emit a warning message.

    Args:
        msg (str): Warning message text.

    Examples:
        >>> warn("MAD is zero")
    """
    configure_logging()
    _LOGGER.warning(msg)


def info(msg: str) -> None:
    """Emit an informational message.

    Args:
        msg (str): Message text.
    """
    configure_logging()
    _LOGGER.info(msg)


def debug(msg: str) -> None:
    _LOGGER.debug(msg)
