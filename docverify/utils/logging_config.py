"""
Logging Configuration

Single place to configure root logging for command-line entry points.
Library modules only create module-level loggers and never configure handlers.
"""

import logging
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure root logging for scripts and the CLI.

    Args:
        level: Logging level as int or name (e.g. "DEBUG", "INFO").
        log_format: Optional format string. Defaults to DEFAULT_FORMAT.

    Raises:
        ValueError: If level is an unknown level name.

    Example:
        >>> setup_logging("DEBUG")
        >>> logging.getLogger("docverify").debug("visible")
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format=log_format or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
        force=True,
    )
