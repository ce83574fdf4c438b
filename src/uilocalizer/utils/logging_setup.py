"""Logging configuration for the command-line stages."""

from __future__ import annotations

import logging
import sys


def setup_logging(verbose: bool = False, ci_mode: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
        ci_mode: Enable CI-friendly logging format
    """
    level = logging.DEBUG if verbose else logging.INFO

    if ci_mode:
        log_format = "::%(levelname)s::%(message)s" if verbose else "%(message)s"
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Request-level chatter from the HTTP stack is only useful when debugging
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
