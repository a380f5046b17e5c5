"""Logging setup."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<level>{level: <8}</level> <cyan>{name}</cyan> - {message}"


def setup_logging(verbose: bool = False) -> None:
    """Route loguru to stderr, at DEBUG when ``verbose`` is set."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=verbose,
    )
