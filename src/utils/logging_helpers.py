"""
Logging helper utilities for the clairvz CLI.

Provides consistent framing for fatal errors, warnings and report headers.
"""

import logging
from typing import List, Optional


def _log_section(
    level: int,
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger],
    width: int,
) -> None:
    logger = logger or logging.getLogger()
    rule = "=" * width

    logger.log(level, rule)
    logger.log(level, title)
    for line in messages:
        logger.log(level, line or "")
    logger.log(level, rule)


def log_error_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = 60
) -> None:
    """
    Log a framed block of error lines under a title.

    Args:
        title: First line inside the frame
        messages: Detail lines; empty strings become blank lines
        logger: Target logger, root logger when omitted
        width: Length of the separator rule

    Examples:
        >>> log_error_section(
        ...     "Cannot get template listing",
        ...     ["Request to https://mirror/.listing failed: timed out after 30s"]
        ... )
        ============================================================
        Cannot get template listing
        Request to https://mirror/.listing failed: timed out after 30s
        ============================================================
    """
    _log_section(logging.ERROR, title, messages, logger, width)


def log_warning_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = 60
) -> None:
    """Same as log_error_section, at WARNING level."""
    _log_section(logging.WARNING, title, messages, logger, width)


def log_info_header(
    message: str,
    logger: Optional[logging.Logger] = None,
    width: int = 60,
    char: str = "="
) -> None:
    """Log a single-line INFO header between two rules of `char`."""
    logger = logger or logging.getLogger()
    logger.info(char * width)
    logger.info(message)
    logger.info(char * width)
