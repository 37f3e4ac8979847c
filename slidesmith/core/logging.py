"""Logging configuration for Slidesmith."""
import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty below WARNING
NOISY_LOGGERS = (
    "python_multipart",
    "multipart",
    "PIL",
    "watchfiles",
)


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure application logging on stdout.

    Args:
        level: Level for the root logger, as a number or a name like "DEBUG"
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
