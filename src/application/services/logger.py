"""Logging set-up of the task manager."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of the libraries that flood the output at DEBUG level
QUIET_LIBRARIES = ("asyncio", "pymongo", "motor", "fastapi", "uvicorn", "uvicorn.access")
QUIET_LIBRARIES_LEVEL = "WARNING"


def configure_logging(
    log_level: str = "INFO",
    log_format: str = LOG_FORMAT,
    quiet_libraries: tuple[str, ...] = QUIET_LIBRARIES,
    quiet_libraries_level: str = QUIET_LIBRARIES_LEVEL,
) -> None:
    """Send the records of every logger to the standard output.

    Args:
        log_level: Level of the root logger, an unknown name falls back to INFO.
        log_format: Format of the records.
        quiet_libraries: Loggers that keep their own, higher, level.
        quiet_libraries_level: Level of the ``quiet_libraries`` loggers.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in quiet_libraries:
        logging.getLogger(name).setLevel(quiet_libraries_level.upper())
    logging.getLogger(__name__).debug(f"Logging configured at {log_level.upper()}")
