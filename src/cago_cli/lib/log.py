"""Logger setup for the CLI process.

Logs go to stderr so command output (e.g. `cago env export`) stays clean
for `eval`.
"""

import sys

from loguru import logger


def setup_logger(debug: bool = False) -> None:
    level = "DEBUG" if debug else "WARNING"
    logger_format = "<level>{level: <8}</level> | <level>{message}</level>"
    if debug:
        logger_format = "<green>{time:HH:mm:ss.SSS}</green> | " + logger_format + " | {name}"

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=logger_format,
        diagnose=False,  # hide variable values in backtraces
    )
