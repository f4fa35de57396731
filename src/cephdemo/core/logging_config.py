"""
Logging configuration for cephdemo.

Every message goes to stdout, prefixed with a timestamp and the component
name, so container logs read like the rest of the daemon output.
"""

import logging
import sys
from pathlib import Path

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    component_name: str = "cephdemo",
    level: int | str = logging.INFO,
    log_file: Path | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Configure logging for a cephdemo component.

    Args:
        component_name: Name shown in each line (e.g. 'cephdemo')
        level: Logging level name or number
        log_file: Optional file path for a copy of the output
        format_string: Custom format string (default provided)

    Returns:
        The component logger
    """
    if format_string is None:
        format_string = f"%(asctime)s  {component_name}: %(message)s"

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(component_name)
    logger.debug(
        "%s logging initialized (level=%s)", component_name, logging.getLevelName(level)
    )
    return logger
